import logging
from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from promotion.cards.models import Card, CardSet
from promotion.decks.models import DeckCard
from promotion.core.exceptions import EntityNotFoundError, DuplicateEntityError, BusinessRuleError
from promotion.core.utils import ensure_unused, generate_custom_id, paginate, utcnow

logger = logging.getLogger(__name__)

class CardSetService:
    def __init__(self, db: Session):
        self.db = db

    def list_sets(self):
        return self.db.query(CardSet).order_by(CardSet.creation_date).all()

    def get_set(self, set_id: str) -> CardSet:
        card_set = self.db.query(CardSet).filter(CardSet.set_id == set_id).first()
        if not card_set:
            raise EntityNotFoundError("CardSet", set_id)
        return card_set

    def find_by_code(self, code: str) -> Optional[CardSet]:
        return self.db.query(CardSet).filter(CardSet.code == code.upper()).first()

    def create_set(self, name: str, code: str) -> CardSet:
        code = code.upper()
        if self.db.query(CardSet).filter(CardSet.name == name).first():
            raise DuplicateEntityError("CardSet", name)
        if self.find_by_code(code):
            raise DuplicateEntityError("CardSet", code)
        card_set = CardSet(
            set_id=generate_custom_id(self.db, CardSet, "CS", "set_id"),
            name=name,
            code=code,
            creation_date=utcnow(),
        )
        self.db.add(card_set)
        self.db.commit()
        self.db.refresh(card_set)
        return card_set


class CardService:
    def __init__(self, db: Session):
        self.db = db
        self.set_service = CardSetService(db)

    def list_cards(self, page: int = 0, size: Optional[int] = None):
        return paginate(self.db.query(Card).order_by(Card.set_id, Card.number), page, size)

    def count(self) -> int:
        return self.db.query(Card).count()

    def get_card(self, card_id: str) -> Card:
        card = self.db.query(Card).filter(Card.card_id == card_id).first()
        if not card:
            raise EntityNotFoundError("Card", card_id)
        return card

    def find_by_name(self, name: str):
        return self.db.query(Card).filter(Card.name == name).all()

    def find_by_number_and_set(self, number: int, set_code: str) -> Optional[Card]:
        return (
            self.db.query(Card)
            .join(CardSet, Card.set_id == CardSet.set_id)
            .filter(Card.number == number, CardSet.code == set_code.upper())
            .first()
        )

    def _next_number(self, set_id: str) -> int:
        current = self.db.query(func.max(Card.number)).filter(Card.set_id == set_id).scalar()
        return (current or 0) + 1

    def create_card(self, name: str, set_code: Optional[str] = None, number: Optional[int] = None,
                    **attributes) -> Card:
        """Add a card to a set; without a set code the newest set is used."""
        if set_code:
            card_set = self.set_service.find_by_code(set_code)
            if card_set is None:
                raise EntityNotFoundError("CardSet", set_code)
        else:
            sets = self.set_service.list_sets()
            if not sets:
                raise BusinessRuleError("Create a card set before adding cards")
            card_set = sets[-1]

        number = number or self._next_number(card_set.set_id)
        if self.find_by_number_and_set(number, card_set.code):
            raise DuplicateEntityError("Card", f"{card_set.code} #{number}")

        card = Card(
            card_id=generate_custom_id(self.db, Card, "C", "card_id"),
            name=name,
            number=number,
            card_set=card_set,
            creation_date=utcnow(),
            **{key: value for key, value in attributes.items() if value is not None},
        )
        try:
            self.db.add(card)
            self.db.commit()
            self.db.refresh(card)
        except Exception:
            self.db.rollback()
            raise
        logger.info(f"Card {card_set.code} #{number} '{name}' created")
        return card

    def update_card(self, card_id: str, **changes) -> Card:
        card = self.get_card(card_id)
        for key, value in changes.items():
            if value is not None:
                setattr(card, key, value)
        self.db.commit()
        self.db.refresh(card)
        return card

    def delete_card(self, card_id: str):
        card = self.get_card(card_id)
        ensure_unused("Card", card_id, {
            "decks": self.db.query(DeckCard).filter(DeckCard.card_id == card_id).count(),
        })
        self.db.delete(card)
        self.db.commit()
