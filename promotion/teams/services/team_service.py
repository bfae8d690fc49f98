from typing import Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session
from promotion.teams.models import Team
from promotion.wrestlers.models import Wrestler
from promotion.core.exceptions import EntityNotFoundError, DuplicateEntityError, BusinessRuleError
from promotion.core.utils import generate_custom_id, paginate, utcnow

class TeamService:
    def __init__(self, db: Session):
        self.db = db

    def _wrestler(self, wrestler_id: str) -> Wrestler:
        wrestler = self.db.query(Wrestler).filter(Wrestler.wrestler_id == wrestler_id).first()
        if not wrestler:
            raise EntityNotFoundError("Wrestler", wrestler_id)
        return wrestler

    def list_teams(self, page: int = 0, size: Optional[int] = None):
        return paginate(self.db.query(Team).order_by(Team.name), page, size)

    def count(self) -> int:
        return self.db.query(Team).count()

    def get_team(self, team_id: str) -> Team:
        team = self.db.query(Team).filter(Team.team_id == team_id).first()
        if not team:
            raise EntityNotFoundError("Team", team_id)
        return team

    def find_by_name(self, name: str) -> Optional[Team]:
        return self.db.query(Team).filter(Team.name == name).first()

    def get_active_teams(self):
        return self.db.query(Team).filter(Team.active.is_(True)).order_by(Team.name).all()

    def get_teams_for_wrestler(self, wrestler_id: str):
        return (
            self.db.query(Team)
            .filter(or_(Team.wrestler1_id == wrestler_id, Team.wrestler2_id == wrestler_id))
            .all()
        )

    def create_team(self, name: str, wrestler1_id: str, wrestler2_id: str) -> Team:
        if wrestler1_id == wrestler2_id:
            raise BusinessRuleError("A team needs two different wrestlers")
        if self.find_by_name(name):
            raise DuplicateEntityError("Team", name)
        team = Team(
            team_id=generate_custom_id(self.db, Team, "TM", "team_id"),
            name=name,
            wrestler1=self._wrestler(wrestler1_id),
            wrestler2=self._wrestler(wrestler2_id),
            active=True,
            creation_date=utcnow(),
        )
        self.db.add(team)
        self.db.commit()
        self.db.refresh(team)
        return team

    def update_team(self, team_id: str, name: Optional[str] = None, active: Optional[bool] = None) -> Team:
        team = self.get_team(team_id)
        if name and name != team.name:
            if self.find_by_name(name):
                raise DuplicateEntityError("Team", name)
            team.name = name
        if active is not None:
            team.active = active
        self.db.commit()
        self.db.refresh(team)
        return team

    def delete_team(self, team_id: str):
        self.db.delete(self.get_team(team_id))
        self.db.commit()
