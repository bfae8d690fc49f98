import logging
from datetime import datetime
from typing import Optional
from sqlalchemy import and_, or_
from sqlalchemy.orm import Session
from promotion.rivalries.models import Rivalry, RivalryIntensity
from promotion.wrestlers.models import Wrestler
from promotion.core.dice import DiceBag
from promotion.core.events import event_bus, HeatChangeEvent, RivalryResolvedEvent
from promotion.core.exceptions import EntityNotFoundError, BusinessRuleError
from promotion.core.resolution import ResolutionResult
from promotion.core.utils import generate_custom_id, paginate, utcnow

logger = logging.getLogger(__name__)

class RivalryService:
    def __init__(self, db: Session):
        self.db = db

    def _wrestler(self, wrestler_id: str) -> Wrestler:
        wrestler = self.db.query(Wrestler).filter(Wrestler.wrestler_id == wrestler_id).first()
        if not wrestler:
            raise EntityNotFoundError("Wrestler", wrestler_id)
        return wrestler

    def _between(self, wrestler1_id: str, wrestler2_id: str):
        return self.db.query(Rivalry).filter(
            or_(
                and_(Rivalry.wrestler1_id == wrestler1_id, Rivalry.wrestler2_id == wrestler2_id),
                and_(Rivalry.wrestler1_id == wrestler2_id, Rivalry.wrestler2_id == wrestler1_id),
            )
        )

    def _active(self):
        return self.db.query(Rivalry).filter(Rivalry.is_active.is_(True))

    def create_rivalry(self, wrestler1_id: str, wrestler2_id: str, storyline_notes: Optional[str] = None) -> Rivalry:
        """Start a rivalry, or hand back the one already running between the pair."""
        if wrestler1_id == wrestler2_id:
            raise BusinessRuleError("A wrestler cannot feud with themselves")
        wrestler1 = self._wrestler(wrestler1_id)
        wrestler2 = self._wrestler(wrestler2_id)

        existing = self.get_rivalry_between_wrestlers(wrestler1_id, wrestler2_id)
        if existing is not None:
            return existing

        now = utcnow()
        rivalry = Rivalry(
            rivalry_id=generate_custom_id(self.db, Rivalry, "RV", "rivalry_id"),
            wrestler1=wrestler1,
            wrestler2=wrestler2,
            heat=0,
            is_active=True,
            started_date=now,
            storyline_notes=storyline_notes,
            creation_date=now,
        )
        self.db.add(rivalry)
        self.db.commit()
        self.db.refresh(rivalry)
        logger.info(f"Rivalry {rivalry.rivalry_id} started: {wrestler1.name} vs {wrestler2.name}")
        return rivalry

    def get_rivalry(self, rivalry_id: str) -> Rivalry:
        rivalry = self.db.query(Rivalry).filter(Rivalry.rivalry_id == rivalry_id).first()
        if not rivalry:
            raise EntityNotFoundError("Rivalry", rivalry_id)
        return rivalry

    def _active_rivalry(self, rivalry_id: str) -> Rivalry:
        rivalry = self.get_rivalry(rivalry_id)
        if not rivalry.is_active:
            raise BusinessRuleError(f"Rivalry {rivalry_id} has already ended")
        return rivalry

    def add_heat(self, rivalry_id: str, heat_change: int, reason: str) -> Rivalry:
        rivalry = self._active_rivalry(rivalry_id)
        old_heat = rivalry.heat
        rivalry.add_heat(heat_change, reason, utcnow())
        self.db.flush()
        event_bus.publish(self.db, HeatChangeEvent(
            rivalry_id=rivalry.rivalry_id,
            old_heat=old_heat,
            new_heat=rivalry.heat,
            reason=reason,
            wrestler_ids=(rivalry.wrestler1_id, rivalry.wrestler2_id),
        ))
        self.db.commit()
        self.db.refresh(rivalry)
        logger.info(f"Rivalry {rivalry.rivalry_id}: heat {old_heat} -> {rivalry.heat} ({reason})")
        return rivalry

    def add_heat_between_wrestlers(self, wrestler1_id: str, wrestler2_id: str, heat_change: int, reason: str):
        rivalry = self.get_rivalry_between_wrestlers(wrestler1_id, wrestler2_id)
        if rivalry is None:
            rivalry = self.create_rivalry(wrestler1_id, wrestler2_id, "Auto-generated from heat event")
        return self.add_heat(rivalry.rivalry_id, heat_change, reason)

    def attempt_resolution(self, rivalry_id: str, roll1: Optional[int] = None,
                           roll2: Optional[int] = None) -> ResolutionResult:
        """Each side rolls a d20 unless rolls are given; the rivalry ends when the total beats 30."""
        rivalry = self.get_rivalry(rivalry_id)
        if not rivalry.can_attempt_resolution():
            return ResolutionResult(
                False,
                f"Rivalry needs at least {RivalryIntensity.INTENSE.min_heat} heat to attempt resolution "
                f"(current: {rivalry.heat})",
                rivalry,
            )

        roll1 = roll1 if roll1 is not None else DiceBag(20).roll()
        roll2 = roll2 if roll2 is not None else DiceBag(20).roll()
        total = roll1 + roll2

        resolved = rivalry.attempt_resolution(roll1, roll2, utcnow())
        if resolved:
            event_bus.publish(self.db, RivalryResolvedEvent(rivalry_id=rivalry.rivalry_id, total_roll=total))
        self.db.commit()
        self.db.refresh(rivalry)
        logger.info(f"Rivalry {rivalry.rivalry_id} resolution roll {roll1}+{roll2}={total}: resolved={resolved}")
        return ResolutionResult(
            resolved,
            "Rivalry resolved successfully" if resolved else "Resolution attempt failed",
            rivalry,
            roll1,
            roll2,
            total,
        )

    def end_rivalry(self, rivalry_id: str, reason: str) -> Rivalry:
        rivalry = self._active_rivalry(rivalry_id)
        rivalry.end_rivalry(reason, utcnow())
        self.db.commit()
        self.db.refresh(rivalry)
        return rivalry

    def list_rivalries(self, page: int = 0, size: Optional[int] = None):
        return paginate(self.db.query(Rivalry).order_by(Rivalry.started_date.desc()), page, size)

    def count(self) -> int:
        return self.db.query(Rivalry).count()

    def get_active_rivalries(self):
        return self._active().order_by(Rivalry.heat.desc()).all()

    def get_active_rivalries_between(self, start: datetime, end: datetime):
        return self._active().filter(Rivalry.started_date >= start, Rivalry.started_date <= end).all()

    def get_rivalries_for_wrestler(self, wrestler_id: str):
        self._wrestler(wrestler_id)
        return (
            self.db.query(Rivalry)
            .filter(or_(Rivalry.wrestler1_id == wrestler_id, Rivalry.wrestler2_id == wrestler_id))
            .order_by(Rivalry.started_date.desc())
            .all()
        )

    def get_rivalries_requiring_matches(self):
        return self._active().filter(Rivalry.heat >= RivalryIntensity.HEATED.min_heat).all()

    def get_rivalries_eligible_for_resolution(self):
        return self._active().filter(Rivalry.heat >= RivalryIntensity.INTENSE.min_heat).all()

    def get_rivalries_requiring_stipulation_matches(self):
        return self._active().filter(Rivalry.heat >= RivalryIntensity.EXPLOSIVE.min_heat).all()

    def get_rivalries_by_intensity(self, intensity: RivalryIntensity):
        return self._active().filter(
            Rivalry.heat >= intensity.min_heat, Rivalry.heat <= intensity.max_heat
        ).all()

    def get_hottest_rivalries(self, limit: int = 5):
        return self._active().order_by(Rivalry.heat.desc()).limit(limit).all()

    def update_storyline_notes(self, rivalry_id: str, storyline_notes: str) -> Rivalry:
        rivalry = self.get_rivalry(rivalry_id)
        rivalry.storyline_notes = storyline_notes
        self.db.commit()
        self.db.refresh(rivalry)
        return rivalry

    def get_rivalry_stats(self, rivalry_id: str) -> dict:
        rivalry = self.get_rivalry(rivalry_id)
        return {
            "rivalry_id": rivalry.rivalry_id,
            "wrestler1_name": rivalry.wrestler1.name,
            "wrestler2_name": rivalry.wrestler2.name,
            "heat": rivalry.heat,
            "intensity": rivalry.intensity.name,
            "must_wrestle_next_show": rivalry.must_wrestle_next_show(),
            "can_attempt_resolution": rivalry.can_attempt_resolution(),
            "requires_stipulation_match": rivalry.requires_stipulation_match(),
            "duration_days": rivalry.duration_days(utcnow()),
            "is_active": rivalry.is_active,
            "heat_events": len(rivalry.heat_events),
        }

    def get_rivalry_between_wrestlers(self, wrestler1_id: str, wrestler2_id: str) -> Optional[Rivalry]:
        return self._between(wrestler1_id, wrestler2_id).filter(Rivalry.is_active.is_(True)).first()

    def has_rivalry_history(self, wrestler1_id: str, wrestler2_id: str) -> bool:
        return self._between(wrestler1_id, wrestler2_id).first() is not None
