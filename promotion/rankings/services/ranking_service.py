from typing import List
from sqlalchemy.orm import Session
from promotion.titles.models import Title, ChampionshipType
from promotion.teams.models import Team
from promotion.factions.models import Faction
from promotion.wrestlers.models import Wrestler, Gender
from promotion.rankings.schemas.ranking_schema import ChampionshipDTO, RankedWrestlerDTO, RankedTeamDTO, ChampionDTO
from promotion.core.exceptions import EntityNotFoundError
from promotion.core.utils import to_slug, utcnow

class RankingService:
    def __init__(self, db: Session):
        self.db = db

    def _title(self, title_id: str) -> Title:
        title = self.db.query(Title).filter(Title.title_id == title_id).first()
        if not title:
            raise EntityNotFoundError("Title", title_id)
        return title

    def get_championships(self) -> List[ChampionshipDTO]:
        titles = self.db.query(Title).filter(Title.include_in_rankings.is_(True)).order_by(Title.title_id).all()
        return [
            ChampionshipDTO(id=t.title_id, name=t.name, image_name=f"{to_slug(t.name)}.png", tier=t.tier)
            for t in titles
        ]

    def get_ranked_contenders(self, title_id: str):
        title = self._title(title_id)
        gender = title.gender or Gender.MALE
        champion_ids = {w.wrestler_id for w in title.current_champions}

        if title.championship_type == ChampionshipType.TEAM:
            teams = [
                team for team in self.db.query(Team).filter(Team.active.is_(True)).all()
                if all(m.gender == gender and m.active for m in team.members)
                and {m.wrestler_id for m in team.members} != champion_ids
            ]
            teams.sort(key=lambda team: team.combined_fans, reverse=True)
            return [
                RankedTeamDTO(
                    id=team.team_id,
                    name=team.name,
                    fans=team.combined_fans,
                    rank=position,
                    members=[m.name for m in team.members],
                )
                for position, team in enumerate(teams, start=1)
            ]

        contenders = [
            w for w in self.db.query(Wrestler).filter(Wrestler.active.is_(True), Wrestler.gender == gender).all()
            if w.tier.rank >= title.tier.rank and w.wrestler_id not in champion_ids
        ]
        # Exact title tier first, then higher tiers, then the bigger crowd
        contenders.sort(key=lambda w: (w.tier != title.tier, -w.tier.rank, -(w.fans or 0)))
        return [
            RankedWrestlerDTO(id=w.wrestler_id, name=w.name, fans=w.fans, rank=position, tier=w.tier)
            for position, w in enumerate(contenders, start=1)
        ]

    def get_current_champions(self, title_id: str) -> List[ChampionDTO]:
        title = self._title(title_id)
        reign = title.current_reign
        if reign is None:
            return []
        days = reign.length_days(utcnow())
        return [ChampionDTO(id=c.wrestler_id, name=c.name, fans=c.fans, reign_days=days) for c in reign.champions]

    def get_ranked_factions(self) -> List[RankedTeamDTO]:
        """Active factions with at least one member, biggest combined crowd first."""
        factions = [f for f in self.db.query(Faction).filter(Faction.is_active.is_(True)).all() if f.members]
        factions.sort(key=lambda f: (-f.combined_fans, f.name))
        return [
            RankedTeamDTO(
                id=f.faction_id,
                name=f.name,
                fans=f.combined_fans,
                rank=position,
                members=[m.name for m in f.members],
            )
            for position, f in enumerate(factions, start=1)
        ]
