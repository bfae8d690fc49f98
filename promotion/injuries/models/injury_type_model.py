from sqlalchemy import Column, String, Integer, DateTime
from promotion.core.database import Base


class InjuryType(Base):
    """Catalogue entry describing what an injury does to a wrestler's card."""

    __tablename__ = "injury_types"

    injury_type_id = Column(String, primary_key=True, index=True)
    injury_name = Column(String(100), unique=True, nullable=False)
    # Effects are applied as deltas, so penalties are negative
    health_effect = Column(Integer)
    stamina_effect = Column(Integer)
    card_effect = Column(Integer)
    special_effects = Column(String(2000))
    creation_date = Column(DateTime, nullable=False)

    @property
    def total_effect(self) -> int:
        return (self.health_effect or 0) + (self.stamina_effect or 0) + (self.card_effect or 0)
