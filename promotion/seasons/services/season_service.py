import logging
from typing import Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session
from promotion.seasons.models import Season, DEFAULT_SHOWS_PER_PPV
from promotion.shows.models import Show
from promotion.core.exceptions import EntityNotFoundError, DuplicateEntityError, BusinessRuleError
from promotion.core.utils import ensure_unused, generate_custom_id, paginate, utcnow

logger = logging.getLogger(__name__)


class SeasonService:
    def __init__(self, db: Session):
        self.db = db

    def _show(self, show_id: str) -> Show:
        show = self.db.query(Show).filter(Show.show_id == show_id).first()
        if not show:
            raise EntityNotFoundError("Show", show_id)
        return show

    def _save(self, season: Season) -> Season:
        self.db.commit()
        self.db.refresh(season)
        return season

    def list_seasons(self, page: int = 0, size: Optional[int] = None):
        return paginate(self.db.query(Season).order_by(Season.start_date.desc()), page, size)

    def count(self) -> int:
        return self.db.query(Season).count()

    def get_season(self, season_id: str) -> Season:
        season = self.db.query(Season).filter(Season.season_id == season_id).first()
        if not season:
            raise EntityNotFoundError("Season", season_id)
        return season

    def find_by_name(self, name: str) -> Optional[Season]:
        return self.db.query(Season).filter(Season.name == name).first()

    def get_by_name(self, name: str) -> Season:
        season = self.find_by_name(name)
        if not season:
            raise EntityNotFoundError("Season", name)
        return season

    def search_seasons(self, term: str):
        pattern = f"%{term}%"
        return (
            self.db.query(Season)
            .filter(or_(Season.name.ilike(pattern), Season.description.ilike(pattern)))
            .order_by(Season.start_date.desc())
            .all()
        )

    def create_season(self, name: str, description: Optional[str] = None,
                      shows_per_ppv: Optional[int] = None) -> Season:
        """Open a new season; whichever season was running ends first."""
        if self.find_by_name(name):
            raise DuplicateEntityError("Season", name)
        now = utcnow()
        current = self._running_season()
        if current is not None:
            current.end_season(now)
            logger.info(f"Season {current.name} ended to make way for {name}")

        season = Season(
            season_id=generate_custom_id(self.db, Season, "SE", "season_id"),
            name=name,
            description=description,
            shows_per_ppv=shows_per_ppv or DEFAULT_SHOWS_PER_PPV,
            is_active=True,
            start_date=now,
            creation_date=now,
        )
        self.db.add(season)
        season = self._save(season)
        logger.info(f"Season {season.name} started as {season.season_id}")
        return season

    def update_season(self, season_id: str, name: Optional[str] = None, description: Optional[str] = None,
                      shows_per_ppv: Optional[int] = None) -> Season:
        season = self.get_season(season_id)
        if name and name != season.name:
            if self.find_by_name(name):
                raise DuplicateEntityError("Season", name)
            season.name = name
        if description is not None:
            season.description = description
        if shows_per_ppv is not None:
            season.shows_per_ppv = shows_per_ppv
        return self._save(season)

    def _running_season(self) -> Optional[Season]:
        return self.db.query(Season).filter(Season.is_active.is_(True)).order_by(Season.start_date.desc()).first()

    def get_active_season(self) -> Optional[Season]:
        """The active season whose dates cover today."""
        now = utcnow()
        season = self._running_season()
        if season is None or season.start_date > now:
            return None
        if season.end_date is not None and season.end_date < now:
            return None
        return season

    def get_latest_season(self) -> Optional[Season]:
        return self.db.query(Season).order_by(Season.creation_date.desc()).first()

    def end_season(self, season_id: str) -> Season:
        season = self.get_season(season_id)
        if not season.is_active:
            raise BusinessRuleError(f"Season {season.name} has already ended")
        season.end_season(utcnow())
        logger.info(f"Season {season.name} ended after {season.total_shows} shows")
        return self._save(season)

    def end_current_season(self) -> Optional[Season]:
        season = self._running_season()
        if season is None:
            return None
        return self.end_season(season.season_id)

    def add_show(self, season_id: str, show_id: str) -> Season:
        season = self.get_season(season_id)
        show = self._show(show_id)
        season.add_show(show)
        return self._save(season)

    def remove_show(self, season_id: str, show_id: str) -> Season:
        season = self.get_season(season_id)
        show = self._show(show_id)
        if show.season_id != season.season_id:
            raise BusinessRuleError(f"Show {show.name} is not part of season {season.name}")
        season.remove_show(show)
        return self._save(season)

    def add_show_to_active_season(self, show: Show) -> Optional[Season]:
        """Attach a freshly booked show to the running season, if there is one. Does not commit."""
        season = self.get_active_season()
        if season is not None:
            season.add_show(show)
        return season

    def is_time_for_ppv(self) -> bool:
        season = self.get_active_season()
        return season is not None and season.is_time_for_ppv()

    def get_seasons_needing_ppv(self):
        season = self.get_active_season()
        return [season] if season is not None and season.is_time_for_ppv() else []

    def delete_season(self, season_id: str):
        season = self.get_season(season_id)
        if season.is_active:
            raise BusinessRuleError(f"Season {season.name} is still running")
        ensure_unused("Season", season_id, {"shows": season.total_shows})
        self.db.delete(season)
        self.db.commit()

    def get_season_stats(self, season_id: str) -> dict:
        season = self.get_season(season_id)
        return {
            "season_id": season.season_id,
            "name": season.name,
            "total_shows": season.total_shows,
            "regular_shows": season.regular_shows,
            "ppv_shows": season.premium_shows,
            "expected_ppvs": season.expected_ppv_count,
            "time_for_ppv": season.is_time_for_ppv(),
            "duration_days": season.duration_days(utcnow()),
            "is_active": bool(season.is_active),
        }
