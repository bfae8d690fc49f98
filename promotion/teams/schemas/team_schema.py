from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class TeamCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    wrestler1_id: str
    wrestler2_id: str


class TeamUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    active: Optional[bool] = None


class TeamRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    team_id: str
    name: str
    wrestler1_id: str
    wrestler2_id: str
    active: bool
    combined_fans: int
    creation_date: datetime
