import enum
from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, Table
from sqlalchemy.orm import relationship
from promotion.core.database import Base

# A wrestler belongs to at most one faction at a time
faction_members = Table(
    "faction_members",
    Base.metadata,
    Column("faction_id", String, ForeignKey("factions.faction_id"), primary_key=True),
    Column("wrestler_id", String, ForeignKey("wrestlers.wrestler_id"), primary_key=True, unique=True),
)


class FactionType(str, enum.Enum):
    SINGLES = "SINGLES"
    TAG_TEAM = "TAG_TEAM"
    STABLE = "STABLE"

    @classmethod
    def for_size(cls, member_count: int) -> "FactionType":
        if member_count <= 1:
            return cls.SINGLES
        if member_count == 2:
            return cls.TAG_TEAM
        return cls.STABLE


class Faction(Base):
    __tablename__ = "factions"

    faction_id = Column(String, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    description = Column(String(1000))
    leader_id = Column(String, ForeignKey("wrestlers.wrestler_id"))
    manager_id = Column(String, ForeignKey("npcs.npc_id"))
    is_active = Column(Boolean, nullable=False, default=True)
    affinity = Column(Integer, nullable=False, default=0)
    formed_date = Column(DateTime, nullable=False)
    disbanded_date = Column(DateTime)
    creation_date = Column(DateTime, nullable=False)

    leader = relationship("Wrestler", foreign_keys=[leader_id])
    manager = relationship("Npc")
    members = relationship(
        "Wrestler", secondary=faction_members, back_populates="factions", order_by="Wrestler.name"
    )

    @property
    def member_count(self) -> int:
        return len(self.members)

    @property
    def faction_type(self) -> FactionType:
        return FactionType.for_size(self.member_count)

    @property
    def display_name(self) -> str:
        if not self.is_active:
            return f"{self.name} (Disbanded)"
        return f"{self.name} ({self.member_count} members)"

    @property
    def combined_fans(self) -> int:
        return sum(member.fans or 0 for member in self.members)

    def has_member(self, wrestler) -> bool:
        return any(member.wrestler_id == wrestler.wrestler_id for member in self.members)

    def add_member(self, wrestler):
        if not self.has_member(wrestler):
            self.members.append(wrestler)

    def remove_member(self, wrestler):
        if self.has_member(wrestler):
            self.members.remove(wrestler)
        if self.leader_id == wrestler.wrestler_id:
            self.leader = None

    def disband(self, when):
        self.is_active = False
        self.disbanded_date = when
        self.leader = None
        self.members = []
