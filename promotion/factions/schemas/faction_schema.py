from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from promotion.factions.models import FactionType
from promotion.rivalries.schemas.rivalry_schema import HeatEventRead


class FactionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)
    leader_id: Optional[str] = None
    manager_id: Optional[str] = None


class FactionUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)
    manager_id: Optional[str] = None


class MemberRequest(BaseModel):
    wrestler_id: str


class ReasonRequest(BaseModel):
    reason: Optional[str] = Field(default=None, max_length=1000)


class AffinityChange(BaseModel):
    points: int


class FactionMember(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    wrestler_id: str
    name: str
    fans: int


class FactionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    faction_id: str
    name: str
    description: Optional[str] = None
    leader_id: Optional[str] = None
    manager_id: Optional[str] = None
    is_active: bool
    affinity: int
    formed_date: datetime
    disbanded_date: Optional[datetime] = None
    faction_type: FactionType
    display_name: str
    members: List[FactionMember] = []


class FactionRivalryCreate(BaseModel):
    faction1_id: str
    faction2_id: str
    storyline_notes: Optional[str] = Field(default=None, max_length=4000)


class FactionHeatChange(BaseModel):
    heat: int
    reason: str = Field(..., min_length=1, max_length=1000)


class FactionsHeatChange(FactionHeatChange):
    faction1_id: str
    faction2_id: str


class FactionRivalryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    faction_rivalry_id: str
    faction1_id: str
    faction2_id: str
    heat: int
    is_active: bool
    started_date: datetime
    ended_date: Optional[datetime] = None
    storyline_notes: Optional[str] = None
    display_name: str
    heat_events: List[HeatEventRead] = []


class FactionResolutionRead(BaseModel):
    success: bool
    message: str
    roll1: int
    roll2: int
    total: int
    entity: Optional[FactionRivalryRead] = None


class FactionRivalryStatistics(BaseModel):
    active_rivalries: int
    requiring_matches: int
    eligible_for_resolution: int
    requiring_stipulation: int
    total_wrestlers: int
