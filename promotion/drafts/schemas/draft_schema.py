from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from promotion.drafts.models import DraftStatus


class DraftCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    participant_ids: List[str] = Field(..., min_length=1)
    rounds: int = Field(..., ge=1)


class PickRequest(BaseModel):
    account_id: str
    wrestler_id: str


class DraftPickRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    pick_id: str
    account_id: str
    wrestler_id: str
    round: int
    pick_number: int
    pick_date: datetime


class DraftRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    draft_id: str
    name: str
    participant_ids: List[str]
    rounds: int
    current_round: int
    current_pick_number: int
    status: DraftStatus
    current_turn_account_id: Optional[str] = None
    picks: List[DraftPickRead] = []


class DraftUpdate(BaseModel):
    """What subscribers of a draft receive after every pick."""

    draft_id: str
    pick: DraftPickRead
    wrestler_name: str
    current_round: int
    current_pick_number: int
    next_account_id: Optional[str] = None
    status: DraftStatus
