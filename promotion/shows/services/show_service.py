import logging
from datetime import date
from typing import Optional
from sqlalchemy.orm import Session
from promotion.shows.models import Show
from promotion.shows.services.show_type_service import ShowTypeService
from promotion.seasons.services.season_service import SeasonService
from promotion.core.exceptions import EntityNotFoundError, DuplicateEntityError
from promotion.core.utils import generate_custom_id, paginate, utcnow

logger = logging.getLogger(__name__)

class ShowService:
    def __init__(self, db: Session):
        self.db = db
        self.show_type_service = ShowTypeService(db)

    def list_shows(self, page: int = 0, size: Optional[int] = None):
        query = self.db.query(Show).order_by(Show.show_date.is_(None), Show.show_date, Show.name)
        return paginate(query, page, size)

    def count(self) -> int:
        return self.db.query(Show).count()

    def get_show(self, show_id: str) -> Show:
        show = self.db.query(Show).filter(Show.show_id == show_id).first()
        if not show:
            raise EntityNotFoundError("Show", show_id)
        return show

    def find_by_name(self, name: str) -> Optional[Show]:
        return self.db.query(Show).filter(Show.name == name).first()

    def create_show(self, name: str, show_type_id: str, description: Optional[str] = None,
                    show_date: Optional[date] = None) -> Show:
        if self.find_by_name(name):
            raise DuplicateEntityError("Show", name)
        show_type = self.show_type_service.get_show_type(show_type_id)
        try:
            show = Show(
                show_id=generate_custom_id(self.db, Show, "SH", "show_id"),
                name=name,
                description=description,
                show_type=show_type,
                show_date=show_date,
                creation_date=utcnow(),
            )
            self.db.add(show)
            SeasonService(self.db).add_show_to_active_season(show)
            self.db.commit()
            self.db.refresh(show)
            logger.info(f"Show '{show.name}' created ({show.show_id})")
            return show
        except Exception:
            self.db.rollback()
            raise

    def update_show(self, show_id: str, name: Optional[str] = None, description: Optional[str] = None,
                    show_type_id: Optional[str] = None, show_date: Optional[date] = None) -> Show:
        show = self.get_show(show_id)
        if name and name != show.name:
            if self.find_by_name(name):
                raise DuplicateEntityError("Show", name)
            show.name = name
        if description is not None:
            show.description = description
        if show_type_id:
            show.show_type = self.show_type_service.get_show_type(show_type_id)
        if show_date is not None:
            show.show_date = show_date
        self.db.commit()
        self.db.refresh(show)
        return show

    def delete_show(self, show_id: str):
        show = self.get_show(show_id)
        self.db.delete(show)
        self.db.commit()

    def get_shows_between(self, start: date, end: date):
        """Shows dated within [start, end], earliest first."""
        return (
            self.db.query(Show)
            .filter(Show.show_date >= start, Show.show_date <= end)
            .order_by(Show.show_date)
            .all()
        )

    def get_upcoming_shows(self, reference_date: Optional[date] = None, limit: int = 5):
        reference_date = reference_date or utcnow().date()
        return (
            self.db.query(Show)
            .filter(Show.show_date >= reference_date)
            .order_by(Show.show_date)
            .limit(limit)
            .all()
        )

    def get_segments(self, show_id: str):
        return list(self.get_show(show_id).segments)
