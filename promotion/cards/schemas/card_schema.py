from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class CardSetCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    code: str = Field(..., min_length=1, max_length=10)


class CardSetRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    set_id: str
    name: str
    code: str
    creation_date: datetime


class CardFields(BaseModel):
    type: Optional[str] = Field(default=None, max_length=50)
    target: Optional[int] = None
    stamina: Optional[int] = None
    damage: Optional[int] = None
    momentum: Optional[int] = None
    signature: Optional[bool] = None
    finisher: Optional[bool] = None
    taunt: Optional[bool] = None
    recover: Optional[bool] = None
    pin: Optional[bool] = None


class CardCreate(CardFields):
    name: str = Field(..., min_length=1, max_length=255)
    set_code: Optional[str] = None
    number: Optional[int] = Field(default=None, ge=1)


class CardUpdate(CardFields):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)


class CardRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    card_id: str
    name: str
    number: int
    set_id: str
    type: str
    target: int
    stamina: int
    damage: int
    momentum: int
    signature: bool
    finisher: bool
    taunt: bool
    recover: bool
    pin: bool
    creation_date: datetime
