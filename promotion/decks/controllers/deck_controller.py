from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from promotion.core.database import get_db
from promotion.decks.schemas.deck_schema import DeckCreate, DeckCardChange, DeckCardAmount, DeckRead
from promotion.decks.services.deck_service import DeckService

router = APIRouter()


@router.get("/", response_model=List[DeckRead])
def list_decks(wrestler_id: Optional[str] = None, page: int = 0, size: Optional[int] = None,
               db: Session = Depends(get_db)):
    service = DeckService(db)
    if wrestler_id:
        return service.find_by_wrestler(wrestler_id)
    return service.list_decks(page, size)


@router.get("/count")
def count_decks(db: Session = Depends(get_db)):
    return {"count": DeckService(db).count()}


@router.get("/{deck_id}", response_model=DeckRead)
def get_deck(deck_id: str, db: Session = Depends(get_db)):
    return DeckService(db).get_deck(deck_id)


@router.post("/", response_model=DeckRead, status_code=201)
def create_deck(payload: DeckCreate, db: Session = Depends(get_db)):
    return DeckService(db).create_deck(payload.wrestler_id)


@router.post("/{deck_id}/cards", response_model=DeckRead)
def add_card(deck_id: str, payload: DeckCardChange, db: Session = Depends(get_db)):
    return DeckService(db).add_card(deck_id, payload.card_id, payload.amount)


@router.put("/{deck_id}/cards/{card_id}", response_model=DeckRead)
def set_card_amount(deck_id: str, card_id: str, payload: DeckCardAmount, db: Session = Depends(get_db)):
    return DeckService(db).set_card_amount(deck_id, card_id, payload.amount)


@router.delete("/{deck_id}/cards/{card_id}", response_model=DeckRead)
def remove_card(deck_id: str, card_id: str, amount: int = 1, db: Session = Depends(get_db)):
    return DeckService(db).remove_card(deck_id, card_id, amount)


@router.delete("/{deck_id}", status_code=204)
def delete_deck(deck_id: str, db: Session = Depends(get_db)):
    DeckService(db).delete_deck(deck_id)
