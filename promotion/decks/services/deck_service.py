from typing import Optional
from sqlalchemy.orm import Session
from promotion.decks.models import Deck, DeckCard
from promotion.wrestlers.models import Wrestler
from promotion.cards.services.card_service import CardService
from promotion.core.exceptions import EntityNotFoundError, BusinessRuleError
from promotion.core.utils import generate_custom_id, paginate, utcnow

class DeckService:
    def __init__(self, db: Session):
        self.db = db
        self.card_service = CardService(db)

    def list_decks(self, page: int = 0, size: Optional[int] = None):
        return paginate(self.db.query(Deck).order_by(Deck.creation_date), page, size)

    def count(self) -> int:
        return self.db.query(Deck).count()

    def get_deck(self, deck_id: str) -> Deck:
        deck = self.db.query(Deck).filter(Deck.deck_id == deck_id).first()
        if not deck:
            raise EntityNotFoundError("Deck", deck_id)
        return deck

    def find_by_wrestler(self, wrestler_id: str):
        return self.db.query(Deck).filter(Deck.wrestler_id == wrestler_id).all()

    def create_deck(self, wrestler_id: str) -> Deck:
        wrestler = self.db.query(Wrestler).filter(Wrestler.wrestler_id == wrestler_id).first()
        if not wrestler:
            raise EntityNotFoundError("Wrestler", wrestler_id)
        deck = Deck(
            deck_id=generate_custom_id(self.db, Deck, "D", "deck_id"),
            wrestler=wrestler,
            creation_date=utcnow(),
        )
        self.db.add(deck)
        self.db.commit()
        self.db.refresh(deck)
        return deck

    def add_card(self, deck_id: str, card_id: str, amount: int = 1) -> Deck:
        if amount < 1:
            raise BusinessRuleError("Amount must be at least 1")
        deck = self.get_deck(deck_id)
        card = self.card_service.get_card(card_id)
        entry = next((e for e in deck.cards if e.card_id == card.card_id), None)
        if entry is None:
            deck.cards.append(DeckCard(card=card, amount=amount))
        else:
            entry.amount += amount
        self.db.commit()
        self.db.refresh(deck)
        return deck

    def set_card_amount(self, deck_id: str, card_id: str, amount: int) -> Deck:
        if amount < 1:
            raise BusinessRuleError("Amount must be at least 1")
        deck = self.get_deck(deck_id)
        entry = next((e for e in deck.cards if e.card_id == card_id), None)
        if entry is None:
            raise EntityNotFoundError("DeckCard", f"{deck_id}/{card_id}")
        entry.amount = amount
        self.db.commit()
        self.db.refresh(deck)
        return deck

    def remove_card(self, deck_id: str, card_id: str, amount: int = 1) -> Deck:
        """Take copies of a card out; the entry disappears when none are left."""
        deck = self.get_deck(deck_id)
        entry = next((e for e in deck.cards if e.card_id == card_id), None)
        if entry is None:
            raise EntityNotFoundError("DeckCard", f"{deck_id}/{card_id}")
        if entry.amount <= amount:
            deck.cards.remove(entry)
        else:
            entry.amount -= amount
        self.db.commit()
        self.db.refresh(deck)
        return deck

    def delete_deck(self, deck_id: str):
        self.db.delete(self.get_deck(deck_id))
        self.db.commit()
