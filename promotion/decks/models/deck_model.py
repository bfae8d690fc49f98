from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from promotion.core.database import Base

class Deck(Base):
    __tablename__ = "decks"

    deck_id = Column(String, primary_key=True, index=True)
    wrestler_id = Column(String, ForeignKey("wrestlers.wrestler_id"), nullable=False)
    creation_date = Column(DateTime, nullable=False)

    wrestler = relationship("Wrestler", back_populates="decks")
    cards = relationship("DeckCard", back_populates="deck", cascade="all, delete-orphan")

    @property
    def card_count(self) -> int:
        return sum(entry.amount for entry in self.cards)


class DeckCard(Base):
    __tablename__ = "deck_cards"
    __table_args__ = (CheckConstraint("amount > 0", name="ck_deck_card_amount"),)

    deck_id = Column(String, ForeignKey("decks.deck_id"), primary_key=True)
    card_id = Column(String, ForeignKey("cards.card_id"), primary_key=True)
    amount = Column(Integer, nullable=False, default=1)

    deck = relationship("Deck", back_populates="cards")
    card = relationship("Card")
