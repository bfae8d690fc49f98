from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from promotion.core.database import Base

class CardSet(Base):
    __tablename__ = "card_sets"

    set_id = Column(String, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    code = Column(String(10), unique=True, nullable=False)
    creation_date = Column(DateTime, nullable=False)

    cards = relationship("Card", back_populates="card_set")


class Card(Base):
    __tablename__ = "cards"
    __table_args__ = (UniqueConstraint("set_id", "number", name="uq_card_set_number"),)

    card_id = Column(String, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    number = Column(Integer, nullable=False)
    set_id = Column(String, ForeignKey("card_sets.set_id"), nullable=False)
    type = Column(String(50), nullable=False, default="Strike")
    target = Column(Integer, nullable=False, default=0)
    stamina = Column(Integer, nullable=False, default=0)
    damage = Column(Integer, nullable=False, default=0)
    momentum = Column(Integer, nullable=False, default=0)
    signature = Column(Boolean, nullable=False, default=False)
    finisher = Column(Boolean, nullable=False, default=False)
    taunt = Column(Boolean, nullable=False, default=False)
    recover = Column(Boolean, nullable=False, default=False)
    pin = Column(Boolean, nullable=False, default=False)
    creation_date = Column(DateTime, nullable=False)

    card_set = relationship("CardSet", back_populates="cards")
