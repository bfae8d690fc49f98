from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class TaskCreate(BaseModel):
    description: str = Field(..., min_length=1, max_length=255)
    due_date: Optional[date] = None


class TaskUpdate(BaseModel):
    description: Optional[str] = Field(default=None, min_length=1, max_length=255)
    due_date: Optional[date] = None


class TaskRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    task_id: str
    description: str
    due_date: Optional[date] = None
    creation_date: datetime
