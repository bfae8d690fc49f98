import logging
from typing import Optional
from sqlalchemy import and_, or_
from sqlalchemy.orm import Session
from promotion.factions.models import FactionRivalry, FactionType, scale_heat_gain
from promotion.factions.services.faction_service import FactionService
from promotion.rivalries.models import RivalryIntensity
from promotion.core.dice import DiceBag
from promotion.core.events import event_bus, FactionHeatChangeEvent
from promotion.core.exceptions import EntityNotFoundError, BusinessRuleError
from promotion.core.resolution import ResolutionResult
from promotion.core.utils import generate_custom_id, paginate, utcnow

logger = logging.getLogger(__name__)


class FactionRivalryService:
    def __init__(self, db: Session):
        self.db = db
        self.faction_service = FactionService(db)

    def _between(self, faction1_id: str, faction2_id: str):
        return self.db.query(FactionRivalry).filter(
            or_(
                and_(FactionRivalry.faction1_id == faction1_id, FactionRivalry.faction2_id == faction2_id),
                and_(FactionRivalry.faction1_id == faction2_id, FactionRivalry.faction2_id == faction1_id),
            )
        )

    def _active(self):
        return self.db.query(FactionRivalry).filter(FactionRivalry.is_active.is_(True))

    def _active_rivalry(self, faction_rivalry_id: str) -> FactionRivalry:
        rivalry = self.get_faction_rivalry(faction_rivalry_id)
        if not rivalry.is_active:
            raise BusinessRuleError(f"Faction rivalry {faction_rivalry_id} has already ended")
        return rivalry

    def create_faction_rivalry(self, faction1_id: str, faction2_id: str,
                               storyline_notes: Optional[str] = None) -> FactionRivalry:
        """Start a feud between two factions, or return the one already running."""
        if faction1_id == faction2_id:
            raise BusinessRuleError("A faction cannot feud with itself")
        faction1 = self.faction_service.get_faction(faction1_id)
        faction2 = self.faction_service.get_faction(faction2_id)

        existing = self.get_rivalry_between_factions(faction1_id, faction2_id)
        if existing is not None:
            return existing
        if not self.faction_service.can_have_rivalry(faction1_id, faction2_id):
            raise BusinessRuleError(
                f"{faction1.name} and {faction2.name} must both be active and have members to feud"
            )

        now = utcnow()
        rivalry = FactionRivalry(
            faction_rivalry_id=generate_custom_id(self.db, FactionRivalry, "FR", "faction_rivalry_id"),
            faction1=faction1,
            faction2=faction2,
            heat=0,
            is_active=True,
            started_date=now,
            storyline_notes=storyline_notes,
            creation_date=now,
        )
        self.db.add(rivalry)
        self.db.commit()
        self.db.refresh(rivalry)
        logger.info(f"Faction rivalry {rivalry.faction_rivalry_id} started: {rivalry.display_name}")
        return rivalry

    def get_faction_rivalry(self, faction_rivalry_id: str) -> FactionRivalry:
        rivalry = (
            self.db.query(FactionRivalry)
            .filter(FactionRivalry.faction_rivalry_id == faction_rivalry_id)
            .first()
        )
        if not rivalry:
            raise EntityNotFoundError("FactionRivalry", faction_rivalry_id)
        return rivalry

    def add_heat(self, faction_rivalry_id: str, heat_gain: int, reason: str) -> FactionRivalry:
        """Add heat scaled by the current intensity and tell every member of both factions."""
        rivalry = self._active_rivalry(faction_rivalry_id)
        old_heat = rivalry.heat
        adjusted = scale_heat_gain(rivalry.intensity, heat_gain)
        rivalry.add_heat(adjusted, reason, utcnow())
        self.db.flush()
        members = rivalry.faction1.members + rivalry.faction2.members
        event_bus.publish(self.db, FactionHeatChangeEvent(
            faction_rivalry_id=rivalry.faction_rivalry_id,
            old_heat=old_heat,
            new_heat=rivalry.heat,
            reason=reason,
            wrestler_ids=tuple(w.wrestler_id for w in members),
        ))
        self.db.commit()
        self.db.refresh(rivalry)
        logger.info(
            f"Faction rivalry {rivalry.display_name}: {adjusted:+} heat (total {rivalry.heat}, {reason})"
        )
        return rivalry

    def add_heat_between_factions(self, faction1_id: str, faction2_id: str, heat_gain: int,
                                  reason: str) -> FactionRivalry:
        rivalry = self.get_rivalry_between_factions(faction1_id, faction2_id)
        if rivalry is None:
            rivalry = self.create_faction_rivalry(faction1_id, faction2_id, "Auto-generated from heat event")
        return self.add_heat(rivalry.faction_rivalry_id, heat_gain, reason)

    def attempt_resolution(self, faction_rivalry_id: str, roll1: Optional[int] = None,
                           roll2: Optional[int] = None) -> ResolutionResult:
        rivalry = self.get_faction_rivalry(faction_rivalry_id)
        if not rivalry.can_attempt_resolution():
            return ResolutionResult(
                False,
                f"Faction rivalry needs at least {RivalryIntensity.INTENSE.min_heat} heat to attempt resolution "
                f"(current: {rivalry.heat})",
                rivalry,
            )

        roll1 = roll1 if roll1 is not None else DiceBag(20).roll()
        roll2 = roll2 if roll2 is not None else DiceBag(20).roll()
        total = roll1 + roll2
        resolved = rivalry.attempt_resolution(roll1, roll2, utcnow())
        self.db.commit()
        self.db.refresh(rivalry)
        logger.info(f"Faction rivalry {rivalry.faction_rivalry_id} roll {roll1}+{roll2}={total}: resolved={resolved}")
        return ResolutionResult(
            resolved,
            "Faction rivalry resolved successfully" if resolved else "Resolution attempt failed",
            rivalry,
            roll1,
            roll2,
            total,
        )

    def end_faction_rivalry(self, faction_rivalry_id: str, reason: str) -> FactionRivalry:
        rivalry = self._active_rivalry(faction_rivalry_id)
        rivalry.end_rivalry(reason, utcnow())
        self.db.commit()
        self.db.refresh(rivalry)
        return rivalry

    def update_storyline_notes(self, faction_rivalry_id: str, storyline_notes: str) -> FactionRivalry:
        rivalry = self.get_faction_rivalry(faction_rivalry_id)
        rivalry.storyline_notes = storyline_notes
        self.db.commit()
        self.db.refresh(rivalry)
        return rivalry

    def list_faction_rivalries(self, page: int = 0, size: Optional[int] = None):
        query = self.db.query(FactionRivalry).order_by(FactionRivalry.started_date.desc())
        return paginate(query, page, size)

    def count(self) -> int:
        return self.db.query(FactionRivalry).count()

    def get_active_faction_rivalries(self):
        return self._active().order_by(FactionRivalry.heat.desc()).all()

    def get_rivalries_for_faction(self, faction_id: str):
        self.faction_service.get_faction(faction_id)
        return (
            self.db.query(FactionRivalry)
            .filter(or_(FactionRivalry.faction1_id == faction_id, FactionRivalry.faction2_id == faction_id))
            .order_by(FactionRivalry.started_date.desc())
            .all()
        )

    def get_rivalries_requiring_matches(self):
        return self._active().filter(FactionRivalry.heat >= RivalryIntensity.HEATED.min_heat).all()

    def get_rivalries_eligible_for_resolution(self):
        return self._active().filter(FactionRivalry.heat >= RivalryIntensity.INTENSE.min_heat).all()

    def get_rivalries_requiring_stipulation_matches(self):
        return self._active().filter(FactionRivalry.heat >= RivalryIntensity.EXPLOSIVE.min_heat).all()

    def get_hottest_rivalries(self, limit: int = 5):
        return self._active().order_by(FactionRivalry.heat.desc()).limit(limit).all()

    def get_tag_team_rivalries(self):
        return [
            r for r in self.get_active_faction_rivalries()
            if r.faction1.faction_type == FactionType.TAG_TEAM and r.faction2.faction_type == FactionType.TAG_TEAM
        ]

    def get_rivalries_involving_stables(self):
        return [
            r for r in self.get_active_faction_rivalries()
            if FactionType.STABLE in (r.faction1.faction_type, r.faction2.faction_type)
        ]

    def get_rivalry_between_factions(self, faction1_id: str, faction2_id: str) -> Optional[FactionRivalry]:
        return self._between(faction1_id, faction2_id).filter(FactionRivalry.is_active.is_(True)).first()

    def get_total_wrestlers_in_rivalries(self) -> int:
        return sum(r.total_wrestlers_involved for r in self.get_active_faction_rivalries())

    def get_statistics(self) -> dict:
        return {
            "active_rivalries": self._active().count(),
            "requiring_matches": len(self.get_rivalries_requiring_matches()),
            "eligible_for_resolution": len(self.get_rivalries_eligible_for_resolution()),
            "requiring_stipulation": len(self.get_rivalries_requiring_stipulation_matches()),
            "total_wrestlers": self.get_total_wrestlers_in_rivalries(),
        }
