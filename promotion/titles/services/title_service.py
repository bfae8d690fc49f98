import logging
from dataclasses import dataclass
from typing import List, Optional
from sqlalchemy.orm import Session
from promotion.titles.models import Title, TitleReign, ChampionshipType
from promotion.wrestlers.models import Wrestler, WrestlerTier, Gender
from promotion.segments.models import Segment, segment_titles
from promotion.core.events import event_bus, ChampionshipChangeEvent
from promotion.core.exceptions import EntityNotFoundError, DuplicateEntityError, BusinessRuleError
from promotion.core.utils import generate_custom_id, paginate, utcnow

logger = logging.getLogger(__name__)


@dataclass
class ChallengeResult:
    success: bool
    message: str


class TitleService:
    def __init__(self, db: Session):
        self.db = db

    def _wrestler(self, wrestler_id: str) -> Wrestler:
        wrestler = self.db.query(Wrestler).filter(Wrestler.wrestler_id == wrestler_id).first()
        if not wrestler:
            raise EntityNotFoundError("Wrestler", wrestler_id)
        return wrestler

    @staticmethod
    def is_wrestler_eligible(wrestler: Wrestler, title: Title) -> bool:
        if title.gender is not None and title.gender != wrestler.gender:
            return False
        return wrestler.tier.rank >= title.tier.rank

    def title_name_exists(self, name: str) -> bool:
        return self.find_by_name(name) is not None

    def create_title(self, name: str, tier: WrestlerTier, description: Optional[str] = None,
                     gender: Optional[Gender] = None,
                     championship_type: ChampionshipType = ChampionshipType.SINGLE,
                     include_in_rankings: bool = True) -> Title:
        if self.title_name_exists(name):
            raise DuplicateEntityError("Title", name)
        title = Title(
            title_id=generate_custom_id(self.db, Title, "TI", "title_id"),
            name=name,
            description=description,
            tier=tier,
            gender=gender,
            championship_type=championship_type,
            is_active=True,
            include_in_rankings=include_in_rankings,
            creation_date=utcnow(),
        )
        self.db.add(title)
        self.db.commit()
        self.db.refresh(title)
        return title

    def get_title(self, title_id: str) -> Title:
        title = self.db.query(Title).filter(Title.title_id == title_id).first()
        if not title:
            raise EntityNotFoundError("Title", title_id)
        return title

    def find_by_name(self, name: str) -> Optional[Title]:
        return self.db.query(Title).filter(Title.name == name).first()

    def list_titles(self, page: int = 0, size: Optional[int] = None):
        return paginate(self.db.query(Title).order_by(Title.name), page, size)

    def count(self) -> int:
        return self.db.query(Title).count()

    def get_active_titles(self):
        return self.db.query(Title).filter(Title.is_active.is_(True)).order_by(Title.name).all()

    def get_vacant_titles(self):
        return [title for title in self.get_active_titles() if title.is_vacant]

    def get_titles_by_tier(self, tier: WrestlerTier):
        return self.db.query(Title).filter(Title.tier == tier).order_by(Title.name).all()

    def award_title(self, title_id: str, champion_ids: List[str],
                    won_at_segment_id: Optional[str] = None) -> Title:
        """Crown new champions: the running reign closes and a new one opens."""
        title = self.get_title(title_id)
        champions = [self._wrestler(wrestler_id) for wrestler_id in dict.fromkeys(champion_ids)]
        expected = 2 if title.championship_type == ChampionshipType.TEAM else 1
        if len(champions) != expected:
            raise BusinessRuleError(
                f"{title.name} is a {title.championship_type.value.lower()} title and needs {expected} champion(s)"
            )
        segment = None
        if won_at_segment_id:
            segment = self.db.query(Segment).filter(Segment.segment_id == won_at_segment_id).first()
            if segment is None:
                raise EntityNotFoundError("Segment", won_at_segment_id)

        previous = tuple(w.wrestler_id for w in title.current_champions)
        reign_id = generate_custom_id(self.db, TitleReign, "TR", "reign_id")
        title.award_title_to(champions, utcnow(), reign_id, won_at_segment=segment)
        self.db.flush()
        event_bus.publish(self.db, ChampionshipChangeEvent(
            title_id=title.title_id,
            title_name=title.name,
            new_champion_ids=tuple(w.wrestler_id for w in champions),
            previous_champion_ids=previous,
        ))
        self.db.commit()
        self.db.refresh(title)
        logger.info(f"{title.name} awarded to {', '.join(w.name for w in champions)}")
        return title

    def vacate_title(self, title_id: str) -> Title:
        title = self.get_title(title_id)
        previous = tuple(w.wrestler_id for w in title.current_champions)
        title.vacate_title(utcnow())
        self.db.flush()
        if previous:
            event_bus.publish(self.db, ChampionshipChangeEvent(
                title_id=title.title_id,
                title_name=title.name,
                new_champion_ids=(),
                previous_champion_ids=previous,
            ))
            logger.info(f"{title.name} vacated")
        self.db.commit()
        self.db.refresh(title)
        return title

    def update_title(self, title_id: str, name: Optional[str] = None, description: Optional[str] = None,
                     is_active: Optional[bool] = None, include_in_rankings: Optional[bool] = None) -> Title:
        title = self.get_title(title_id)
        if name and name.strip() and name != title.name:
            if self.title_name_exists(name):
                raise DuplicateEntityError("Title", name)
            title.name = name
        if description is not None:
            title.description = description
        if is_active is not None:
            title.is_active = is_active
        if include_in_rankings is not None:
            title.include_in_rankings = include_in_rankings
        self.db.commit()
        self.db.refresh(title)
        return title

    def delete_title(self, title_id: str) -> bool:
        """Only a retired, vacant title that was never on the line in a segment can be removed."""
        title = self.get_title(title_id)
        defended = self.db.query(segment_titles).filter(segment_titles.c.title_id == title_id).count()
        if title.is_active or not title.is_vacant or defended:
            return False
        self.db.delete(title)
        self.db.commit()
        return True

    def get_challenge_cost(self, title_id: str) -> int:
        return self.get_title(title_id).tier.challenge_cost

    def get_contender_entry_fee(self, title_id: str) -> int:
        return self.get_title(title_id).tier.contender_entry_fee

    def challenge_for_title(self, wrestler_id: str, title_id: str) -> ChallengeResult:
        challenger = self._wrestler(wrestler_id)
        title = self.get_title(title_id)
        if not title.is_active:
            return ChallengeResult(False, "Title is not active.")
        if challenger in title.current_champions:
            return ChallengeResult(False, "Wrestler is already a champion of this title.")
        if not self.is_wrestler_eligible(challenger, title):
            return ChallengeResult(False, "Wrestler is not eligible for this title based on tier.")
        entry_fee = title.tier.contender_entry_fee
        if not challenger.can_afford(entry_fee):
            return ChallengeResult(False, "Wrestler cannot afford the contender entry fee.")

        challenger.spend_fans(entry_fee)
        if challenger not in title.challengers:
            title.challengers.append(challenger)
        self.db.commit()
        logger.info(f"{challenger.name} paid {entry_fee:,} fans to challenge for {title.name}")
        return ChallengeResult(
            True, f"Challenge successful! {challenger.name} is now a challenger for the {title.name}."
        )

    def add_challenger(self, title_id: str, wrestler_id: str) -> ChallengeResult:
        title = self.get_title(title_id)
        wrestler = self._wrestler(wrestler_id)
        if not self.is_wrestler_eligible(wrestler, title):
            return ChallengeResult(False, "Wrestler is not eligible for this title.")
        if wrestler not in title.challengers:
            title.challengers.append(wrestler)
            self.db.commit()
        return ChallengeResult(True, f"{wrestler.name} has been added as a challenger for {title.name}")

    def remove_challenger(self, title_id: str, wrestler_id: str) -> ChallengeResult:
        title = self.get_title(title_id)
        wrestler = self._wrestler(wrestler_id)
        if wrestler not in title.challengers:
            return ChallengeResult(False, "Wrestler is not a challenger for this title.")
        title.challengers.remove(wrestler)
        self.db.commit()
        return ChallengeResult(True, f"{wrestler.name} is no longer a challenger for {title.name}")

    def get_eligible_challengers(self, title_id: str):
        title = self.get_title(title_id)
        return [w for w in self.db.query(Wrestler).all() if self.is_wrestler_eligible(w, title)]

    def get_title_stats(self, title_id: str) -> dict:
        title = self.get_title(title_id)
        reign = title.current_reign
        return {
            "title_name": title.name,
            "total_reigns": title.total_reigns,
            "current_reign_days": reign.length_days(utcnow()) if reign else 0,
            "current_champions_count": len(title.current_champions),
        }

    def get_titles_held_by(self, wrestler_id: str):
        wrestler = self._wrestler(wrestler_id)
        return [reign.title for reign in wrestler.current_reigns]
