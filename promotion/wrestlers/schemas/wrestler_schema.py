from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from promotion.wrestlers.models import WrestlerTier, Gender


class WrestlerCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    is_player: bool = False
    description: Optional[str] = Field(default=None, max_length=4000)
    gender: Optional[Gender] = None
    fans: Optional[int] = Field(default=None, ge=0)
    tier: Optional[WrestlerTier] = None
    deck_size: Optional[int] = Field(default=None, ge=0)
    starting_health: Optional[int] = Field(default=None, ge=0)
    low_health: Optional[int] = Field(default=None, ge=0)
    starting_stamina: Optional[int] = Field(default=None, ge=0)
    low_stamina: Optional[int] = Field(default=None, ge=0)
    drive: Optional[int] = Field(default=None, ge=1, le=6)
    resilience: Optional[int] = Field(default=None, ge=1, le=6)
    charisma: Optional[int] = Field(default=None, ge=1, le=6)
    brawl: Optional[int] = Field(default=None, ge=1, le=6)
    physical_condition: Optional[int] = Field(default=None, ge=0, le=100)
    manager_id: Optional[str] = None
    account_id: Optional[str] = None


class WrestlerUpdate(WrestlerCreate):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    is_player: Optional[bool] = None
    active: Optional[bool] = None
    bumps: Optional[int] = Field(default=None, ge=0)


class FanChange(BaseModel):
    fans: int


class WrestlerRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    wrestler_id: str
    name: str
    description: Optional[str] = None
    fans: int
    tier: WrestlerTier
    gender: Gender
    bumps: int
    is_player: bool
    active: bool
    deck_size: int
    starting_health: int
    low_health: int
    starting_stamina: int
    low_stamina: int
    effective_starting_health: int
    drive: int
    resilience: int
    charisma: int
    brawl: int
    physical_condition: int
    manager_id: Optional[str] = None
    account_id: Optional[str] = None
    creation_date: datetime
