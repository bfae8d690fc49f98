from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class RivalryCreate(BaseModel):
    wrestler1_id: str
    wrestler2_id: str
    storyline_notes: Optional[str] = Field(default=None, max_length=4000)


class HeatChange(BaseModel):
    heat: int
    reason: str = Field(..., min_length=1, max_length=1000)


class WrestlerHeatChange(HeatChange):
    wrestler1_id: str
    wrestler2_id: str


class ResolutionRequest(BaseModel):
    roll1: Optional[int] = Field(default=None, ge=1, le=20)
    roll2: Optional[int] = Field(default=None, ge=1, le=20)


class EndRivalryRequest(BaseModel):
    reason: str = Field(..., min_length=1)


class StorylineNotesUpdate(BaseModel):
    storyline_notes: str = Field(..., max_length=4000)


class HeatEventRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    event_number: int
    heat_change: int
    heat_after_event: int
    reason: str
    event_date: datetime


class RivalryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    rivalry_id: str
    wrestler1_id: str
    wrestler2_id: str
    heat: int
    is_active: bool
    started_date: datetime
    ended_date: Optional[datetime] = None
    storyline_notes: Optional[str] = None
    heat_events: List[HeatEventRead] = []


class ResolutionRead(BaseModel):
    success: bool
    message: str
    roll1: int
    roll2: int
    total: int
    entity: Optional[RivalryRead] = None
