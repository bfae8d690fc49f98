import logging
from typing import Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session
from promotion.wrestlers.models import Wrestler, WrestlerTier, Gender
from promotion.drafts.models import DraftPick
from promotion.factions.models import Faction
from promotion.rivalries.models import Rivalry
from promotion.teams.models import Team
from promotion.titles.models import Title
from promotion.injuries.services.injury_service import InjuryService
from promotion.segments.models import Segment, SegmentType, segment_participants
from promotion.core.dice import DiceBag
from promotion.core.events import event_bus, FanAwardedEvent
from promotion.core.exceptions import EntityNotFoundError, DuplicateEntityError, BusinessRuleError
from promotion.core.utils import ensure_unused, generate_custom_id, paginate, utcnow

logger = logging.getLogger(__name__)

# Established names gain a smaller share of every crowd reaction
FAN_GAIN_PERCENT = {
    WrestlerTier.ICON: 90,
    WrestlerTier.MAIN_EVENTER: 93,
    WrestlerTier.MIDCARDER: 95,
    WrestlerTier.CONTENDER: 97,
}


def scale_fan_gain(tier: WrestlerTier, fan_gain: int) -> int:
    """Scale a positive gain by tier, then round half up to the nearest thousand."""
    if fan_gain <= 0:
        return fan_gain
    scaled = fan_gain * FAN_GAIN_PERCENT.get(tier, 100) // 100
    return (scaled + 500) // 1000 * 1000


class WrestlerService:
    def __init__(self, db: Session):
        self.db = db
        self.injury_service = InjuryService(db)

    def list_wrestlers(self, page: int = 0, size: Optional[int] = None):
        return paginate(self.db.query(Wrestler).order_by(Wrestler.name), page, size)

    def count(self) -> int:
        return self.db.query(Wrestler).count()

    def get_wrestler(self, wrestler_id: str) -> Wrestler:
        wrestler = self.db.query(Wrestler).filter(Wrestler.wrestler_id == wrestler_id).first()
        if not wrestler:
            raise EntityNotFoundError("Wrestler", wrestler_id)
        return wrestler

    def find_by_name(self, name: str) -> Optional[Wrestler]:
        return self.db.query(Wrestler).filter(Wrestler.name == name).first()

    def save(self, wrestler: Wrestler) -> Wrestler:
        existing = self.find_by_name(wrestler.name)
        if existing is not None and existing is not wrestler:
            raise DuplicateEntityError("Wrestler", wrestler.name)
        if not wrestler.wrestler_id:
            wrestler.wrestler_id = generate_custom_id(self.db, Wrestler, "W", "wrestler_id")
        if wrestler.creation_date is None:
            wrestler.creation_date = utcnow()
        try:
            self.db.add(wrestler)
            self.db.commit()
            self.db.refresh(wrestler)
            return wrestler
        except Exception:
            self.db.rollback()
            raise

    def create_wrestler(self, name: str, is_player: bool = False, description: Optional[str] = None,
                        **attributes) -> Wrestler:
        """Create a wrestler with the tabletop defaults; ``attributes`` override them."""
        values = dict(
            deck_size=15,
            starting_health=15,
            low_health=0,
            starting_stamina=0,
            low_stamina=0,
            fans=0,
            gender=Gender.MALE,
            bumps=0,
        )
        values.update({key: value for key, value in attributes.items() if value is not None})
        values.setdefault("tier", WrestlerTier.from_fans(values["fans"]))
        wrestler = Wrestler(
            name=name,
            is_player=is_player,
            description=description if description is not None else "Default Description",
            **values,
        )
        wrestler = self.save(wrestler)
        logger.info(f"Wrestler {wrestler.name} signed as {wrestler.wrestler_id}")
        return wrestler

    def update_wrestler(self, wrestler_id: str, **changes) -> Wrestler:
        wrestler = self.get_wrestler(wrestler_id)
        for key, value in changes.items():
            if value is not None:
                setattr(wrestler, key, value)
        if changes.get("fans") is not None and changes.get("tier") is None:
            wrestler.tier = WrestlerTier.from_fans(wrestler.fans)
        return self.save(wrestler)

    def delete_wrestler(self, wrestler_id: str):
        wrestler = self.get_wrestler(wrestler_id)
        ensure_unused("Wrestler", wrestler_id, {
            "teams": self.db.query(Team).filter(
                or_(Team.wrestler1_id == wrestler_id, Team.wrestler2_id == wrestler_id)
            ).count(),
            "rivalries": self.db.query(Rivalry).filter(
                or_(Rivalry.wrestler1_id == wrestler_id, Rivalry.wrestler2_id == wrestler_id)
            ).count(),
            "title reigns": len(wrestler.reigns),
            "segments": self.db.query(segment_participants).filter(
                segment_participants.c.wrestler_id == wrestler_id
            ).count(),
            "draft picks": self.db.query(DraftPick).filter(DraftPick.wrestler_id == wrestler_id).count(),
        })
        for title in self.db.query(Title).filter(Title.challengers.any(Wrestler.wrestler_id == wrestler_id)):
            title.challengers.remove(wrestler)
        for faction in self.db.query(Faction).filter(Faction.leader_id == wrestler_id):
            faction.leader = None
        self.db.delete(wrestler)
        self.db.commit()
        logger.info(f"Wrestler {wrestler.name} ({wrestler_id}) deleted")

    def award_fans(self, wrestler_id: str, fan_gain: int) -> Wrestler:
        wrestler = self.get_wrestler(wrestler_id)
        if fan_gain < 0 and not wrestler.can_afford(-fan_gain):
            raise BusinessRuleError(f"{wrestler.name} cannot afford to lose {-fan_gain:,} fans")
        change = scale_fan_gain(wrestler.tier, fan_gain)
        wrestler.add_fans(change)
        wrestler.tier = WrestlerTier.from_fans(wrestler.fans)
        event_bus.publish(self.db, FanAwardedEvent(wrestler_id=wrestler.wrestler_id, fan_change=change))
        self.db.commit()
        self.db.refresh(wrestler)
        logger.info(f"{wrestler.name}: {change:+,} fans (now {wrestler.fans:,}, {wrestler.tier.display_name})")
        return wrestler

    def spend_fans(self, wrestler_id: str, cost: int) -> bool:
        try:
            self.award_fans(wrestler_id, -cost)
            return True
        except BusinessRuleError:
            return False

    def add_bump(self, wrestler_id: str) -> Wrestler:
        wrestler = self.get_wrestler(wrestler_id)
        injured = wrestler.add_bump()
        self.db.commit()
        if injured:
            logger.info(f"{wrestler.name} took a third bump and is injured")
            self.injury_service.create_injury_from_bumps(wrestler.wrestler_id)
        self.db.refresh(wrestler)
        return wrestler

    def heal_bump(self, wrestler_id: str) -> Wrestler:
        wrestler = self.get_wrestler(wrestler_id)
        if wrestler.bumps > 0:
            wrestler.bumps -= 1
            self.db.commit()
            self.db.refresh(wrestler)
        return wrestler

    def heal_chance(self, wrestler_id: str, dice_bag: Optional[DiceBag] = None) -> Wrestler:
        """One recovery round: a d20 try at each active injury, then maybe shed a bump."""
        wrestler = self.get_wrestler(wrestler_id)
        dice_bag = dice_bag or DiceBag(6)
        for injury in list(wrestler.active_injuries):
            result = self.injury_service.attempt_healing(injury.injury_id, DiceBag(20).roll())
            if result.success:
                logger.info(f"{wrestler.name} healed an injury: {injury.name} ({injury.severity.display_name})")
        if wrestler.bumps > 0 and dice_bag.roll() > 3:
            wrestler.bumps -= 1
            logger.info(f"{wrestler.name} healed a bump (now {wrestler.bumps})")
        self.db.commit()
        self.db.refresh(wrestler)
        return wrestler

    def get_eligible_wrestlers(self, title_tier: WrestlerTier):
        return [w for w in self.db.query(Wrestler).all() if w.tier.rank >= title_tier.rank]

    def get_wrestlers_by_tier(self, tier: WrestlerTier):
        return self.db.query(Wrestler).filter(Wrestler.tier == tier).order_by(Wrestler.name).all()

    def get_player_wrestlers(self):
        return self.db.query(Wrestler).filter(Wrestler.is_player.is_(True)).order_by(Wrestler.name).all()

    def get_npc_wrestlers(self):
        return self.db.query(Wrestler).filter(Wrestler.is_player.is_(False)).order_by(Wrestler.name).all()

    def get_wrestler_stats(self, wrestler_id: str) -> dict:
        wrestler = self.get_wrestler(wrestler_id)
        match_segments = (
            self.db.query(Segment)
            .join(SegmentType, Segment.segment_type_id == SegmentType.segment_type_id)
            .filter(SegmentType.is_match.is_(True), Segment.participants.any(wrestler_id=wrestler_id))
            .count()
        )
        wins = self.db.query(Segment).filter(Segment.winners.any(wrestler_id=wrestler_id)).count()
        titles_held = {reign.title_id for reign in wrestler.current_reigns}
        return {
            "wrestler_id": wrestler.wrestler_id,
            "wins": wins,
            "losses": max(0, match_segments - wins),
            "titles_held": len(titles_held),
        }

    def recalculate_tiers(self) -> int:
        """Bring every wrestler's tier in line with their fan count; returns how many moved."""
        changed = 0
        for wrestler in self.db.query(Wrestler).all():
            tier = WrestlerTier.from_fans(wrestler.fans or 0)
            if wrestler.tier != tier:
                logger.info(f"{wrestler.name}: {wrestler.tier.display_name} -> {tier.display_name}")
                wrestler.tier = tier
                changed += 1
        self.db.commit()
        return changed
