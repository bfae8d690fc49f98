from typing import Optional
from sqlalchemy.orm import Session
from promotion.shows.models import Show, ShowType
from promotion.core.exceptions import EntityNotFoundError, DuplicateEntityError
from promotion.core.utils import ensure_unused, generate_custom_id, paginate, utcnow

class ShowTypeService:
    def __init__(self, db: Session):
        self.db = db

    def list_show_types(self, page: int = 0, size: Optional[int] = None):
        return paginate(self.db.query(ShowType).order_by(ShowType.name), page, size)

    def count(self) -> int:
        return self.db.query(ShowType).count()

    def get_show_type(self, show_type_id: str) -> ShowType:
        show_type = self.db.query(ShowType).filter(ShowType.show_type_id == show_type_id).first()
        if not show_type:
            raise EntityNotFoundError("ShowType", show_type_id)
        return show_type

    def find_by_name(self, name: str) -> Optional[ShowType]:
        return self.db.query(ShowType).filter(ShowType.name == name).first()

    def create_show_type(self, name: str, description: Optional[str] = None,
                         expected_matches: int = 0, expected_promos: int = 0) -> ShowType:
        if self.find_by_name(name):
            raise DuplicateEntityError("ShowType", name)
        show_type = ShowType(
            show_type_id=generate_custom_id(self.db, ShowType, "ST", "show_type_id"),
            name=name,
            description=description,
            expected_matches=expected_matches,
            expected_promos=expected_promos,
            creation_date=utcnow(),
        )
        self.db.add(show_type)
        self.db.commit()
        self.db.refresh(show_type)
        return show_type

    def update_show_type(self, show_type_id: str, **changes) -> ShowType:
        show_type = self.get_show_type(show_type_id)
        name = changes.pop("name", None)
        if name and name != show_type.name:
            if self.find_by_name(name):
                raise DuplicateEntityError("ShowType", name)
            show_type.name = name
        for key, value in changes.items():
            if value is not None:
                setattr(show_type, key, value)
        self.db.commit()
        self.db.refresh(show_type)
        return show_type

    def delete_show_type(self, show_type_id: str):
        show_type = self.get_show_type(show_type_id)
        ensure_unused("ShowType", show_type_id, {
            "shows": self.db.query(Show).filter(Show.show_type_id == show_type_id).count(),
        })
        self.db.delete(show_type)
        self.db.commit()
