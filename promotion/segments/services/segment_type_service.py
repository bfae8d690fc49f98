from typing import Optional
from sqlalchemy.orm import Session
from promotion.segments.models import Segment, SegmentType
from promotion.core.exceptions import EntityNotFoundError, DuplicateEntityError
from promotion.core.utils import ensure_unused, generate_custom_id, paginate, utcnow

class SegmentTypeService:
    def __init__(self, db: Session):
        self.db = db

    def list_segment_types(self, page: int = 0, size: Optional[int] = None):
        return paginate(self.db.query(SegmentType).order_by(SegmentType.name), page, size)

    def count(self) -> int:
        return self.db.query(SegmentType).count()

    def get_segment_type(self, segment_type_id: str) -> SegmentType:
        segment_type = self.db.query(SegmentType).filter(SegmentType.segment_type_id == segment_type_id).first()
        if not segment_type:
            raise EntityNotFoundError("SegmentType", segment_type_id)
        return segment_type

    def find_by_name(self, name: str) -> Optional[SegmentType]:
        return self.db.query(SegmentType).filter(SegmentType.name == name).first()

    def create_segment_type(self, name: str, description: Optional[str] = None, is_match: bool = True):
        if self.find_by_name(name):
            raise DuplicateEntityError("SegmentType", name)
        segment_type = SegmentType(
            segment_type_id=generate_custom_id(self.db, SegmentType, "SGT", "segment_type_id"),
            name=name,
            description=description,
            is_match=is_match,
            creation_date=utcnow(),
        )
        self.db.add(segment_type)
        self.db.commit()
        self.db.refresh(segment_type)
        return segment_type

    def update_segment_type(self, segment_type_id: str, name: Optional[str] = None,
                            description: Optional[str] = None, is_match: Optional[bool] = None):
        segment_type = self.get_segment_type(segment_type_id)
        if name and name != segment_type.name:
            if self.find_by_name(name):
                raise DuplicateEntityError("SegmentType", name)
            segment_type.name = name
        if description is not None:
            segment_type.description = description
        if is_match is not None:
            segment_type.is_match = is_match
        self.db.commit()
        self.db.refresh(segment_type)
        return segment_type

    def delete_segment_type(self, segment_type_id: str):
        segment_type = self.get_segment_type(segment_type_id)
        ensure_unused("SegmentType", segment_type_id, {
            "segments": self.db.query(Segment).filter(Segment.segment_type_id == segment_type_id).count(),
        })
        self.db.delete(segment_type)
        self.db.commit()
