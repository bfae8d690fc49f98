import enum
import sys
from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from promotion.core.database import Base

RESOLUTION_TARGET = 30


class RivalryIntensity(enum.Enum):
    SIMMERING = ("Simmering", "😐", 0, 9, "Early stages of conflict, no match obligations yet.")
    HEATED = ("Heated", "🔥", 10, 19, "Must wrestle at next show.")
    INTENSE = ("Intense", "💥", 20, 29, "Can attempt resolution with a dice roll.")
    EXPLOSIVE = ("Explosive", "🌋", 30, sys.maxsize, "Requires stipulation match to settle.")

    def __init__(self, display_name, emoji, min_heat, max_heat, description):
        self.display_name = display_name
        self.emoji = emoji
        self.min_heat = min_heat
        self.max_heat = max_heat
        self.description = description

    @classmethod
    def from_heat(cls, heat: int) -> "RivalryIntensity":
        for intensity in cls:
            if intensity.min_heat <= heat <= intensity.max_heat:
                return intensity
        # Out of every range (negative heat) falls back to the top intensity
        return cls.EXPLOSIVE

    @property
    def display_with_emoji(self) -> str:
        return f"{self.emoji} {self.display_name}"

    @property
    def heat_range_display(self) -> str:
        if self.max_heat == sys.maxsize:
            return f"{self.min_heat}+ heat"
        return f"{self.min_heat}-{self.max_heat} heat"

    def requires_next_show_match(self) -> bool:
        return self.min_heat >= RivalryIntensity.HEATED.min_heat

    def allows_resolution_attempt(self) -> bool:
        return self.min_heat >= RivalryIntensity.INTENSE.min_heat

    def requires_stipulation_match(self) -> bool:
        return self is RivalryIntensity.EXPLOSIVE


class HeatTrackedMixin:
    """Heat bands, the heat event log and dice resolution shared by every kind of feud.

    Subclasses map ``heat``, ``is_active``, ``started_date``, ``ended_date`` and
    ``heat_events`` and build their own event rows in ``_new_heat_event``.
    """

    label = "Rivalry"
    failed_resolution_reason = "Failed resolution attempt"

    @property
    def intensity(self) -> RivalryIntensity:
        return RivalryIntensity.from_heat(self.heat or 0)

    def must_wrestle_next_show(self) -> bool:
        return bool(self.is_active) and self.intensity.requires_next_show_match()

    def can_attempt_resolution(self) -> bool:
        return bool(self.is_active) and self.intensity.allows_resolution_attempt()

    def requires_stipulation_match(self) -> bool:
        return bool(self.is_active) and self.intensity.requires_stipulation_match()

    def duration_days(self, now) -> int:
        end = self.ended_date or now
        return max(0, (end - self.started_date).days)

    def _new_heat_event(self, event_number: int):
        raise NotImplementedError

    def _record(self, heat_change: int, reason: str, when):
        event = self._new_heat_event(len(self.heat_events) + 1)
        event.heat_change = heat_change
        event.heat_after_event = self.heat
        event.reason = reason
        event.event_date = when
        self.heat_events.append(event)
        return event

    def add_heat(self, heat_change: int, reason: str, when):
        self.heat = max(0, (self.heat or 0) + heat_change)
        return self._record(heat_change, reason, when)

    def attempt_resolution(self, roll1: int, roll2: int, when) -> bool:
        """Resolve with two dice; succeeds when the total beats the target."""
        if not self.can_attempt_resolution():
            return False
        total = roll1 + roll2
        if total > RESOLUTION_TARGET:
            self._record(0, f"{self.label} resolved by dice roll ({total})", when)
            self.end_rivalry("Resolved by dice roll", when)
            return True
        self._record(0, f"{self.failed_resolution_reason} ({total})", when)
        return False

    def end_rivalry(self, reason: str, when):
        self.is_active = False
        self.ended_date = when
        self._record(0, f"{self.label} ended: {reason}", when)


class Rivalry(HeatTrackedMixin, Base):
    __tablename__ = "rivalries"
    __table_args__ = (
        CheckConstraint("heat >= 0", name="ck_rivalry_heat"),
        CheckConstraint("wrestler1_id <> wrestler2_id", name="ck_rivalry_distinct"),
    )

    rivalry_id = Column(String, primary_key=True, index=True)
    wrestler1_id = Column(String, ForeignKey("wrestlers.wrestler_id"), nullable=False)
    wrestler2_id = Column(String, ForeignKey("wrestlers.wrestler_id"), nullable=False)
    heat = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    started_date = Column(DateTime, nullable=False)
    ended_date = Column(DateTime)
    storyline_notes = Column(String(4000))
    creation_date = Column(DateTime, nullable=False)

    wrestler1 = relationship("Wrestler", foreign_keys=[wrestler1_id])
    wrestler2 = relationship("Wrestler", foreign_keys=[wrestler2_id])
    heat_events = relationship(
        "HeatEvent", back_populates="rivalry", order_by="HeatEvent.event_number", cascade="all, delete-orphan"
    )

    def involves_wrestler(self, wrestler) -> bool:
        return wrestler.wrestler_id in (self.wrestler1_id, self.wrestler2_id)

    def get_opponent(self, wrestler):
        if wrestler.wrestler_id == self.wrestler1_id:
            return self.wrestler2
        if wrestler.wrestler_id == self.wrestler2_id:
            return self.wrestler1
        raise ValueError("Wrestler is not part of this rivalry")

    def _new_heat_event(self, event_number: int):
        # Composite key: rivalry id + sequence number
        return HeatEvent(heat_event_id=f"{self.rivalry_id}-{event_number}", event_number=event_number)


class HeatEvent(Base):
    __tablename__ = "heat_events"

    heat_event_id = Column(String, primary_key=True, index=True)
    rivalry_id = Column(String, ForeignKey("rivalries.rivalry_id"), nullable=False)
    event_number = Column(Integer, nullable=False)
    heat_change = Column(Integer, nullable=False)
    heat_after_event = Column(Integer, nullable=False)
    reason = Column(String(1000), nullable=False)
    event_date = Column(DateTime, nullable=False)

    rivalry = relationship("Rivalry", back_populates="heat_events")
