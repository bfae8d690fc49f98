from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class InjuryTypeCreate(BaseModel):
    injury_name: str = Field(..., min_length=1, max_length=100)
    health_effect: Optional[int] = None
    stamina_effect: Optional[int] = None
    card_effect: Optional[int] = None
    special_effects: Optional[str] = Field(default=None, max_length=2000)


class InjuryTypeUpdate(BaseModel):
    injury_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    health_effect: Optional[int] = None
    stamina_effect: Optional[int] = None
    card_effect: Optional[int] = None
    special_effects: Optional[str] = Field(default=None, max_length=2000)


class InjuryTypeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    injury_type_id: str
    injury_name: str
    health_effect: Optional[int] = None
    stamina_effect: Optional[int] = None
    card_effect: Optional[int] = None
    special_effects: Optional[str] = None
    creation_date: datetime


class InjuryTypeStats(BaseModel):
    health_effect_count: int
    stamina_effect_count: int
    card_effect_count: int
    special_effect_count: int
    total_types: int
