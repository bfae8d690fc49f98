from typing import Optional
from sqlalchemy.orm import Session
from promotion.segments.models import MatchType, Segment
from promotion.core.exceptions import EntityNotFoundError, DuplicateEntityError
from promotion.core.utils import ensure_unused, generate_custom_id, paginate, utcnow

class MatchTypeService:
    def __init__(self, db: Session):
        self.db = db

    def list_match_types(self, page: int = 0, size: Optional[int] = None):
        return paginate(self.db.query(MatchType).order_by(MatchType.name), page, size)

    def count(self) -> int:
        return self.db.query(MatchType).count()

    def get_match_type(self, match_type_id: str) -> MatchType:
        match_type = self.db.query(MatchType).filter(MatchType.match_type_id == match_type_id).first()
        if not match_type:
            raise EntityNotFoundError("MatchType", match_type_id)
        return match_type

    def find_by_name(self, name: str) -> Optional[MatchType]:
        return self.db.query(MatchType).filter(MatchType.name == name).first()

    def create_match_type(self, name: str, description: Optional[str] = None) -> MatchType:
        if self.find_by_name(name):
            raise DuplicateEntityError("MatchType", name)
        match_type = MatchType(
            match_type_id=generate_custom_id(self.db, MatchType, "MT", "match_type_id"),
            name=name,
            description=description,
            creation_date=utcnow(),
        )
        self.db.add(match_type)
        self.db.commit()
        self.db.refresh(match_type)
        return match_type

    def update_match_type(self, match_type_id: str, name: Optional[str] = None, description: Optional[str] = None):
        match_type = self.get_match_type(match_type_id)
        if name and name != match_type.name:
            if self.find_by_name(name):
                raise DuplicateEntityError("MatchType", name)
            match_type.name = name
        if description is not None:
            match_type.description = description
        self.db.commit()
        self.db.refresh(match_type)
        return match_type

    def delete_match_type(self, match_type_id: str):
        match_type = self.get_match_type(match_type_id)
        ensure_unused("MatchType", match_type_id, {
            "segments": self.db.query(Segment).filter(Segment.match_type_id == match_type_id).count(),
        })
        self.db.delete(match_type)
        self.db.commit()
