import enum
from sqlalchemy import Column, String, Integer, BigInteger, Boolean, DateTime, ForeignKey, Enum, CheckConstraint
from sqlalchemy.orm import relationship
from promotion.core.database import Base


class WrestlerTier(str, enum.Enum):
    # Declared lowest to highest; rank follows declaration order
    ROOKIE = "ROOKIE"
    RISER = "RISER"
    CONTENDER = "CONTENDER"
    MIDCARDER = "MIDCARDER"
    MAIN_EVENTER = "MAIN_EVENTER"
    ICON = "ICON"

    @property
    def rank(self) -> int:
        return list(WrestlerTier).index(self)

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()

    @property
    def min_fans(self) -> int:
        return TIER_MIN_FANS[self]

    @property
    def challenge_cost(self) -> int:
        return TIER_CHALLENGE_COST[self]

    @property
    def contender_entry_fee(self) -> int:
        return TIER_ENTRY_FEE[self]

    @classmethod
    def from_fans(cls, fans: int) -> "WrestlerTier":
        for tier in reversed(list(cls)):
            if fans >= tier.min_fans:
                return tier
        return cls.ROOKIE


TIER_MIN_FANS = {
    WrestlerTier.ROOKIE: 0,
    WrestlerTier.RISER: 10_000,
    WrestlerTier.CONTENDER: 25_000,
    WrestlerTier.MIDCARDER: 40_000,
    WrestlerTier.MAIN_EVENTER: 60_000,
    WrestlerTier.ICON: 100_000,
}

TIER_CHALLENGE_COST = {
    WrestlerTier.ROOKIE: 5_000,
    WrestlerTier.RISER: 10_000,
    WrestlerTier.CONTENDER: 15_000,
    WrestlerTier.MIDCARDER: 25_000,
    WrestlerTier.MAIN_EVENTER: 40_000,
    WrestlerTier.ICON: 50_000,
}

TIER_ENTRY_FEE = {
    WrestlerTier.ROOKIE: 1_000,
    WrestlerTier.RISER: 2_000,
    WrestlerTier.CONTENDER: 5_000,
    WrestlerTier.MIDCARDER: 10_000,
    WrestlerTier.MAIN_EVENTER: 15_000,
    WrestlerTier.ICON: 20_000,
}


class Gender(str, enum.Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"


BUMPS_PER_INJURY = 3


class Wrestler(Base):
    __tablename__ = "wrestlers"
    __table_args__ = (
        CheckConstraint("fans >= 0", name="ck_wrestler_fans"),
        CheckConstraint("bumps >= 0", name="ck_wrestler_bumps"),
        CheckConstraint("physical_condition BETWEEN 0 AND 100", name="ck_wrestler_condition"),
        CheckConstraint("drive BETWEEN 1 AND 6", name="ck_wrestler_drive"),
        CheckConstraint("resilience BETWEEN 1 AND 6", name="ck_wrestler_resilience"),
        CheckConstraint("charisma BETWEEN 1 AND 6", name="ck_wrestler_charisma"),
        CheckConstraint("brawl BETWEEN 1 AND 6", name="ck_wrestler_brawl"),
    )

    wrestler_id = Column(String, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    starting_stamina = Column(Integer, nullable=False, default=0)
    low_stamina = Column(Integer, nullable=False, default=0)
    starting_health = Column(Integer, nullable=False, default=0)
    low_health = Column(Integer, nullable=False, default=0)
    deck_size = Column(Integer, nullable=False, default=0)
    fans = Column(BigInteger, nullable=False, default=0)
    tier = Column(Enum(WrestlerTier), nullable=False, default=WrestlerTier.ROOKIE)
    gender = Column(Enum(Gender), nullable=False, default=Gender.MALE)
    bumps = Column(Integer, nullable=False, default=0)
    is_player = Column(Boolean, nullable=False, default=False)
    active = Column(Boolean, nullable=False, default=True)
    description = Column(String(4000))
    physical_condition = Column(Integer, nullable=False, default=100)
    drive = Column(Integer, nullable=False, default=1)
    resilience = Column(Integer, nullable=False, default=1)
    charisma = Column(Integer, nullable=False, default=1)
    brawl = Column(Integer, nullable=False, default=1)
    manager_id = Column(String, ForeignKey("npcs.npc_id"))
    account_id = Column(String, ForeignKey("accounts.account_id"))
    creation_date = Column(DateTime, nullable=False)

    manager = relationship("Npc", back_populates="managed_wrestlers")
    account = relationship("Account", back_populates="wrestlers")
    injuries = relationship("Injury", back_populates="wrestler", cascade="all, delete-orphan")
    decks = relationship("Deck", back_populates="wrestler", cascade="all, delete-orphan")
    reigns = relationship("TitleReign", secondary="title_reign_champions", back_populates="champions")
    factions = relationship("Faction", secondary="faction_members", back_populates="members")

    def can_afford(self, cost: int) -> bool:
        return (self.fans or 0) >= cost

    def spend_fans(self, cost: int) -> bool:
        if not self.can_afford(cost):
            return False
        self.fans = (self.fans or 0) - cost
        return True

    def add_fans(self, fan_change: int):
        self.fans = max(0, (self.fans or 0) + fan_change)

    def add_bump(self) -> bool:
        """Add a bump; returns True when the bumps turn into an injury."""
        self.bumps = (self.bumps or 0) + 1
        if self.bumps >= BUMPS_PER_INJURY:
            self.bumps = 0
            return True
        return False

    @property
    def active_injuries(self):
        return [injury for injury in self.injuries if injury.is_active]

    @property
    def total_injury_penalty(self) -> int:
        return sum(injury.health_penalty for injury in self.active_injuries)

    @property
    def effective_starting_health(self) -> int:
        return max(0, (self.starting_health or 0) - self.total_injury_penalty)

    @property
    def faction(self):
        return self.factions[0] if self.factions else None

    @property
    def current_reigns(self):
        return [reign for reign in self.reigns if reign.is_current]

    @property
    def display_name_with_tier(self) -> str:
        return f"{self.name} ({self.tier.display_name})"
