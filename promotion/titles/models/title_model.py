import enum
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Enum, Table
from sqlalchemy.orm import relationship
from promotion.core.database import Base
from promotion.wrestlers.models.wrestler_model import WrestlerTier, Gender


class ChampionshipType(str, enum.Enum):
    SINGLE = "SINGLE"
    TEAM = "TEAM"


title_challengers = Table(
    "title_challengers",
    Base.metadata,
    Column("title_id", String, ForeignKey("titles.title_id"), primary_key=True),
    Column("wrestler_id", String, ForeignKey("wrestlers.wrestler_id"), primary_key=True),
)


class Title(Base):
    __tablename__ = "titles"

    title_id = Column(String, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    description = Column(String(1000))
    tier = Column(Enum(WrestlerTier), nullable=False)
    gender = Column(Enum(Gender))
    championship_type = Column(Enum(ChampionshipType), nullable=False, default=ChampionshipType.SINGLE)
    is_active = Column(Boolean, nullable=False, default=True)
    include_in_rankings = Column(Boolean, nullable=False, default=True)
    creation_date = Column(DateTime, nullable=False)

    reigns = relationship(
        "TitleReign", back_populates="title", order_by="TitleReign.reign_number", cascade="all, delete-orphan"
    )
    challengers = relationship("Wrestler", secondary=title_challengers)

    @property
    def current_reign(self):
        for reign in self.reigns:
            if reign.is_current:
                return reign
        return None

    @property
    def current_champions(self):
        reign = self.current_reign
        return list(reign.champions) if reign else []

    @property
    def is_vacant(self) -> bool:
        return self.current_reign is None

    @property
    def total_reigns(self) -> int:
        return len(self.reigns)

    def award_title_to(self, champions, when, reign_id: str, won_at_segment=None):
        """Close the running reign and start a new one for ``champions``."""
        from promotion.titles.models.title_reign_model import TitleReign

        self.vacate_title(when)
        reign = TitleReign(
            reign_id=reign_id,
            start_date=when,
            reign_number=self.total_reigns + 1,
            won_at_segment=won_at_segment,
        )
        reign.champions = list(champions)
        self.reigns.append(reign)
        # A new champion is no longer a challenger
        self.challengers = [c for c in self.challengers if c not in reign.champions]
        return reign

    def vacate_title(self, when):
        reign = self.current_reign
        if reign is not None:
            reign.end_date = when
        return reign
