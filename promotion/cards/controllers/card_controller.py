from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from promotion.core.database import get_db
from promotion.cards.schemas.card_schema import CardCreate, CardUpdate, CardRead, CardSetCreate, CardSetRead
from promotion.cards.services.card_service import CardService, CardSetService

router = APIRouter()


@router.get("/sets", response_model=List[CardSetRead])
def list_sets(db: Session = Depends(get_db)):
    return CardSetService(db).list_sets()


@router.post("/sets", response_model=CardSetRead, status_code=201)
def create_set(payload: CardSetCreate, db: Session = Depends(get_db)):
    return CardSetService(db).create_set(payload.name, payload.code)


@router.get("/", response_model=List[CardRead])
def list_cards(page: int = 0, size: Optional[int] = None, db: Session = Depends(get_db)):
    return CardService(db).list_cards(page, size)


@router.get("/count")
def count_cards(db: Session = Depends(get_db)):
    return {"count": CardService(db).count()}


@router.get("/sets/{set_code}/{number}", response_model=CardRead)
def card_by_number(set_code: str, number: int, db: Session = Depends(get_db)):
    card = CardService(db).find_by_number_and_set(number, set_code)
    if not card:
        raise HTTPException(status_code=404, detail=f"No card #{number} in set {set_code}")
    return card


@router.get("/{card_id}", response_model=CardRead)
def get_card(card_id: str, db: Session = Depends(get_db)):
    return CardService(db).get_card(card_id)


@router.post("/", response_model=CardRead, status_code=201)
def create_card(payload: CardCreate, db: Session = Depends(get_db)):
    data = payload.model_dump()
    return CardService(db).create_card(data.pop("name"), data.pop("set_code"), data.pop("number"), **data)


@router.put("/{card_id}", response_model=CardRead)
def update_card(card_id: str, payload: CardUpdate, db: Session = Depends(get_db)):
    return CardService(db).update_card(card_id, **payload.model_dump(exclude_unset=True))


@router.delete("/{card_id}", status_code=204)
def delete_card(card_id: str, db: Session = Depends(get_db)):
    CardService(db).delete_card(card_id)
