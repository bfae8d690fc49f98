import enum
import random
from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from promotion.core.database import Base


class InjurySeverity(enum.Enum):
    # display name, health penalty range, base healing cost, minimum d6 to heal
    MINOR = ("Minor", 1, 2, 5_000, 3)
    MODERATE = ("Moderate", 2, 3, 10_000, 4)
    SEVERE = ("Severe", 3, 4, 15_000, 5)
    CRITICAL = ("Critical", 4, 5, 25_000, 6)

    def __init__(self, display_name, min_penalty, max_penalty, base_healing_cost, healing_threshold):
        self.display_name = display_name
        self.min_penalty = min_penalty
        self.max_penalty = max_penalty
        self.base_healing_cost = base_healing_cost
        self.healing_threshold = healing_threshold

    def random_health_penalty(self, rng: random.Random) -> int:
        return self.min_penalty + rng.randrange(self.max_penalty - self.min_penalty + 1)

    def is_healing_successful(self, roll: int) -> bool:
        return roll >= self.healing_threshold


class Injury(Base):
    __tablename__ = "injuries"

    injury_id = Column(String, primary_key=True, index=True)
    wrestler_id = Column(String, ForeignKey("wrestlers.wrestler_id"), nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(String(1000))
    severity = Column(Enum(InjurySeverity), nullable=False)
    health_penalty = Column(Integer, nullable=False, default=0)
    healing_cost = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    injury_date = Column(DateTime, nullable=False)
    healed_date = Column(DateTime)
    injury_notes = Column(String(1000))
    creation_date = Column(DateTime, nullable=False)

    wrestler = relationship("Wrestler", back_populates="injuries")

    def can_be_healed(self) -> bool:
        return bool(self.is_active) and self.healed_date is None

    def heal(self, when):
        self.is_active = False
        self.healed_date = when
