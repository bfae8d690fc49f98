from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class NpcCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    npc_type: str = Field(default="Other", max_length=50)
    description: Optional[str] = Field(default=None, max_length=4000)


class NpcUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    npc_type: Optional[str] = Field(default=None, max_length=50)
    description: Optional[str] = Field(default=None, max_length=4000)


class NpcRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    npc_id: str
    name: str
    npc_type: str
    description: Optional[str] = None
    creation_date: datetime
