from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from promotion.core.database import Base
from promotion.rivalries.models.rivalry_model import HeatTrackedMixin, RivalryIntensity

# Hotter feuds pull the whole locker room in faster
HEAT_MULTIPLIER = {
    RivalryIntensity.SIMMERING: 1.0,
    RivalryIntensity.HEATED: 1.1,
    RivalryIntensity.INTENSE: 1.2,
    RivalryIntensity.EXPLOSIVE: 1.5,
}


def scale_heat_gain(intensity: RivalryIntensity, heat_gain: int) -> int:
    """Apply the intensity multiplier, rounding half away from zero."""
    scaled = abs(heat_gain) * HEAT_MULTIPLIER[intensity]
    rounded = int(scaled + 0.5)
    return rounded if heat_gain >= 0 else -rounded


class FactionRivalry(HeatTrackedMixin, Base):
    __tablename__ = "faction_rivalries"
    __table_args__ = (
        CheckConstraint("heat >= 0", name="ck_faction_rivalry_heat"),
        CheckConstraint("faction1_id <> faction2_id", name="ck_faction_rivalry_distinct"),
    )

    label = "Faction rivalry"
    failed_resolution_reason = "Failed faction resolution attempt"

    faction_rivalry_id = Column(String, primary_key=True, index=True)
    faction1_id = Column(String, ForeignKey("factions.faction_id"), nullable=False)
    faction2_id = Column(String, ForeignKey("factions.faction_id"), nullable=False)
    heat = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    started_date = Column(DateTime, nullable=False)
    ended_date = Column(DateTime)
    storyline_notes = Column(String(4000))
    creation_date = Column(DateTime, nullable=False)

    faction1 = relationship("Faction", foreign_keys=[faction1_id])
    faction2 = relationship("Faction", foreign_keys=[faction2_id])
    heat_events = relationship(
        "FactionHeatEvent",
        back_populates="faction_rivalry",
        order_by="FactionHeatEvent.event_number",
        cascade="all, delete-orphan",
    )

    @property
    def display_name(self) -> str:
        return f"{self.faction1.name} vs {self.faction2.name}"

    @property
    def summary(self) -> str:
        return f"{self.display_name} ({self.heat} heat - {self.intensity.display_name})"

    @property
    def total_wrestlers_involved(self) -> int:
        return self.faction1.member_count + self.faction2.member_count

    def both_factions_active(self) -> bool:
        return bool(self.faction1.is_active and self.faction2.is_active)

    def involves_faction(self, faction) -> bool:
        return faction.faction_id in (self.faction1_id, self.faction2_id)

    def get_opponent(self, faction):
        if faction.faction_id == self.faction1_id:
            return self.faction2
        if faction.faction_id == self.faction2_id:
            return self.faction1
        raise ValueError("Faction is not part of this rivalry")

    def _new_heat_event(self, event_number: int):
        return FactionHeatEvent(
            faction_heat_event_id=f"{self.faction_rivalry_id}-{event_number}", event_number=event_number
        )


class FactionHeatEvent(Base):
    __tablename__ = "faction_heat_events"

    faction_heat_event_id = Column(String, primary_key=True, index=True)
    faction_rivalry_id = Column(String, ForeignKey("faction_rivalries.faction_rivalry_id"), nullable=False)
    event_number = Column(Integer, nullable=False)
    heat_change = Column(Integer, nullable=False)
    heat_after_event = Column(Integer, nullable=False)
    reason = Column(String(1000), nullable=False)
    event_date = Column(DateTime, nullable=False)

    faction_rivalry = relationship("FactionRivalry", back_populates="heat_events")
