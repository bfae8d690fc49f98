import logging
import random
from dataclasses import dataclass
from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from promotion.injuries.models import Injury, InjurySeverity
from promotion.wrestlers.models import Wrestler, WrestlerTier
from promotion.core.dice import DiceBag
from promotion.core.events import event_bus, WrestlerInjuryEvent, WrestlerInjuryHealedEvent
from promotion.core.exceptions import EntityNotFoundError
from promotion.core.utils import generate_custom_id, paginate, utcnow

logger = logging.getLogger(__name__)

# Upper bound of a d100 roll for MINOR, MODERATE and SEVERE; anything above is CRITICAL.
# Higher tiers are more resilient.
SEVERITY_CUTOFFS = {
    WrestlerTier.ROOKIE: (35, 65, 90),
    WrestlerTier.RISER: (40, 70, 92),
    WrestlerTier.CONTENDER: (45, 75, 94),
    WrestlerTier.MIDCARDER: (55, 80, 96),
    WrestlerTier.MAIN_EVENTER: (60, 85, 97),
    WrestlerTier.ICON: (65, 88, 98),
}

INJURY_NAMES = {
    InjurySeverity.MINOR: ["Bruised Ribs", "Twisted Ankle", "Minor Cut", "Muscle Strain"],
    InjurySeverity.MODERATE: ["Sprained Wrist", "Bruised Shoulder", "Minor Concussion", "Pulled Muscle"],
    InjurySeverity.SEVERE: ["Dislocated Shoulder", "Knee Injury", "Back Strain", "Severe Bruising"],
    InjurySeverity.CRITICAL: ["Broken Ribs", "Torn ACL", "Severe Concussion", "Fractured Bone"],
}

INJURY_DESCRIPTIONS = {
    InjurySeverity.MINOR: "A minor injury that should heal quickly with proper rest.",
    InjurySeverity.MODERATE: "A moderate injury that requires some time to heal properly.",
    InjurySeverity.SEVERE: "A severe injury that significantly impacts performance and requires extended recovery.",
    InjurySeverity.CRITICAL: "A critical injury that poses serious health risks and requires immediate medical attention.",
}


def severity_for_roll(tier: WrestlerTier, roll: int) -> InjurySeverity:
    minor, moderate, severe = SEVERITY_CUTOFFS[tier]
    if roll <= minor:
        return InjurySeverity.MINOR
    if roll <= moderate:
        return InjurySeverity.MODERATE
    if roll <= severe:
        return InjurySeverity.SEVERE
    return InjurySeverity.CRITICAL


@dataclass
class HealingResult:
    success: bool
    message: str
    injury: Optional[Injury]
    dice_roll: int
    fans_spent: bool


class InjuryService:
    def __init__(self, db: Session, rng: Optional[random.Random] = None):
        self.db = db
        self.rng = rng or random.Random()

    def _get_wrestler(self, wrestler_id: str) -> Wrestler:
        wrestler = self.db.query(Wrestler).filter(Wrestler.wrestler_id == wrestler_id).first()
        if not wrestler:
            raise EntityNotFoundError("Wrestler", wrestler_id)
        return wrestler

    def _store(self, wrestler: Wrestler, name: str, description: Optional[str],
               severity: InjurySeverity, injury_notes: Optional[str]) -> Injury:
        now = utcnow()
        injury = Injury(
            injury_id=generate_custom_id(self.db, Injury, "INJ", "injury_id"),
            name=name,
            description=description,
            severity=severity,
            health_penalty=severity.random_health_penalty(self.rng),
            healing_cost=severity.base_healing_cost,
            is_active=True,
            injury_date=now,
            injury_notes=injury_notes,
            creation_date=now,
        )
        wrestler.injuries.append(injury)
        self.db.flush()
        event_bus.publish(self.db, WrestlerInjuryEvent(
            wrestler_id=wrestler.wrestler_id,
            wrestler_name=wrestler.name,
            injury_id=injury.injury_id,
            injury_name=injury.name,
            severity=severity.name,
        ))
        self.db.commit()
        self.db.refresh(injury)
        logger.info(f"{wrestler.name} suffered a {severity.display_name} injury: {injury.name}")
        return injury

    def create_injury(self, wrestler_id: str, name: str, description: Optional[str],
                      severity: InjurySeverity, injury_notes: Optional[str] = None) -> Injury:
        wrestler = self._get_wrestler(wrestler_id)
        return self._store(wrestler, name, description, severity, injury_notes)

    def create_injury_from_bumps(self, wrestler_id: str) -> Injury:
        """Roll an injury for a wrestler whose bumps just turned into one."""
        wrestler = self._get_wrestler(wrestler_id)
        severity = severity_for_roll(wrestler.tier, DiceBag(100, rng=self.rng).roll())
        return self._store(
            wrestler,
            self.rng.choice(INJURY_NAMES[severity]),
            INJURY_DESCRIPTIONS[severity],
            severity,
            f"Generated from bump accumulation (tier: {wrestler.tier.name})",
        )

    def attempt_healing(self, injury_id: str, dice_roll: Optional[int] = None) -> HealingResult:
        injury = self.get_injury(injury_id)
        if not injury.can_be_healed():
            return HealingResult(False, "Injury cannot be healed (already healed or inactive)", injury, 0, False)

        wrestler = injury.wrestler
        if not wrestler.can_afford(injury.healing_cost):
            return HealingResult(
                False, f"Wrestler cannot afford {injury.healing_cost:,} fans healing cost", injury, 0, False
            )

        roll = dice_roll if dice_roll is not None else DiceBag(6, rng=self.rng).roll()
        success = injury.severity.is_healing_successful(roll)

        # The cost is paid whether or not the treatment works
        wrestler.spend_fans(injury.healing_cost)
        if success:
            injury.heal(utcnow())
            event_bus.publish(self.db, WrestlerInjuryHealedEvent(
                wrestler_id=wrestler.wrestler_id,
                wrestler_name=wrestler.name,
                injury_id=injury.injury_id,
                injury_name=injury.name,
            ))
        self.db.commit()
        self.db.refresh(injury)
        logger.info(f"Healing {injury.injury_id} for {wrestler.name}: roll {roll}, success={success}")
        return HealingResult(
            success, "Injury healed successfully" if success else "Healing attempt failed", injury, roll, True
        )

    def get_injury(self, injury_id: str) -> Injury:
        injury = self.db.query(Injury).filter(Injury.injury_id == injury_id).first()
        if not injury:
            raise EntityNotFoundError("Injury", injury_id)
        return injury

    def list_injuries(self, page: int = 0, size: Optional[int] = None):
        return paginate(self.db.query(Injury).order_by(Injury.injury_date.desc()), page, size)

    def count(self) -> int:
        return self.db.query(Injury).count()

    def get_active_injuries_for_wrestler(self, wrestler_id: str):
        self._get_wrestler(wrestler_id)
        return (
            self.db.query(Injury)
            .filter(Injury.wrestler_id == wrestler_id, Injury.is_active.is_(True))
            .order_by(Injury.injury_date)
            .all()
        )

    def get_all_injuries_for_wrestler(self, wrestler_id: str):
        self._get_wrestler(wrestler_id)
        return self.db.query(Injury).filter(Injury.wrestler_id == wrestler_id).order_by(Injury.injury_date).all()

    def get_injuries_by_severity(self, severity: InjurySeverity):
        return self.db.query(Injury).filter(Injury.severity == severity).all()

    def get_all_active_injuries(self):
        return self.db.query(Injury).filter(Injury.is_active.is_(True)).all()

    def get_total_health_penalty(self, wrestler_id: str) -> int:
        self._get_wrestler(wrestler_id)
        total = (
            self.db.query(func.sum(Injury.health_penalty))
            .filter(Injury.wrestler_id == wrestler_id, Injury.is_active.is_(True))
            .scalar()
        )
        return int(total or 0)

    def get_injury_stats(self, wrestler_id: str) -> dict:
        wrestler = self._get_wrestler(wrestler_id)
        active = wrestler.active_injuries
        return {
            "wrestler_id": wrestler.wrestler_id,
            "wrestler_name": wrestler.name,
            "active_injuries": len(active),
            "healed_injuries": len(wrestler.injuries) - len(active),
            "total_health_penalty": wrestler.total_injury_penalty,
            "effective_health": wrestler.effective_starting_health,
            "total_healing_cost": sum(injury.healing_cost for injury in active),
        }
