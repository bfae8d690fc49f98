from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class RefereeCreate(BaseModel):
    ref_name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)


class RefereeUpdate(BaseModel):
    ref_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)


class RefereeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    ref_id: str
    ref_name: str
    description: Optional[str] = None
    creation_date: datetime
