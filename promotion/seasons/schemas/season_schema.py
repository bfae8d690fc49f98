from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class SeasonCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)
    shows_per_ppv: Optional[int] = Field(default=None, ge=1)


class SeasonUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)
    shows_per_ppv: Optional[int] = Field(default=None, ge=1)


class SeasonShowRequest(BaseModel):
    show_id: str


class SeasonRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    season_id: str
    name: str
    description: Optional[str] = None
    start_date: datetime
    end_date: Optional[datetime] = None
    is_active: bool
    shows_per_ppv: int
    total_shows: int
    creation_date: datetime


class SeasonStats(BaseModel):
    season_id: str
    name: str
    total_shows: int
    regular_shows: int
    ppv_shows: int
    expected_ppvs: int
    time_for_ppv: bool
    duration_days: int
    is_active: bool
