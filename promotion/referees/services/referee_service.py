from typing import Optional
from sqlalchemy.orm import Session
from promotion.referees.models import Referee
from promotion.core.exceptions import EntityNotFoundError, DuplicateEntityError
from promotion.core.utils import generate_custom_id, paginate, utcnow

class RefereeService:
    def __init__(self, db: Session):
        self.db = db

    def list_referees(self, page: int = 0, size: Optional[int] = None):
        return paginate(self.db.query(Referee).order_by(Referee.ref_name), page, size)

    def count(self) -> int:
        return self.db.query(Referee).count()

    def get_referee(self, ref_id: str) -> Referee:
        referee = self.db.query(Referee).filter(Referee.ref_id == ref_id).first()
        if not referee:
            raise EntityNotFoundError("Referee", ref_id)
        return referee

    def find_by_name(self, ref_name: str) -> Optional[Referee]:
        return self.db.query(Referee).filter(Referee.ref_name == ref_name).first()

    def create_referee(self, ref_name: str, description: Optional[str] = None) -> Referee:
        if self.find_by_name(ref_name):
            raise DuplicateEntityError("Referee", ref_name)
        try:
            referee = Referee(
                ref_id=generate_custom_id(self.db, Referee, "R", "ref_id"),
                ref_name=ref_name,
                description=description,
                creation_date=utcnow(),
            )
            self.db.add(referee)
            self.db.commit()
            self.db.refresh(referee)
            return referee
        except Exception:
            self.db.rollback()
            raise

    def get_or_create_referee(self, ref_name: str) -> Referee:
        """Retrieve a referee or create a new one."""
        return self.find_by_name(ref_name) or self.create_referee(ref_name)

    def update_referee(self, ref_id: str, ref_name: Optional[str] = None, description: Optional[str] = None):
        referee = self.get_referee(ref_id)
        if ref_name and ref_name != referee.ref_name:
            if self.find_by_name(ref_name):
                raise DuplicateEntityError("Referee", ref_name)
            referee.ref_name = ref_name
        if description is not None:
            referee.description = description
        self.db.commit()
        self.db.refresh(referee)
        return referee

    def delete_referee(self, ref_id: str):
        referee = self.get_referee(ref_id)
        self.db.delete(referee)
        self.db.commit()
