from datetime import datetime
from typing import List
from pydantic import BaseModel, ConfigDict, Field


class DeckCreate(BaseModel):
    wrestler_id: str


class DeckCardChange(BaseModel):
    card_id: str
    amount: int = Field(default=1, ge=1)


class DeckCardAmount(BaseModel):
    amount: int = Field(..., ge=1)


class DeckCardRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    card_id: str
    amount: int


class DeckRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    deck_id: str
    wrestler_id: str
    card_count: int
    cards: List[DeckCardRead] = []
    creation_date: datetime
