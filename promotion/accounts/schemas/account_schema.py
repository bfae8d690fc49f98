from datetime import datetime
from typing import List
from pydantic import BaseModel, ConfigDict, Field


class AccountCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)


class AssignWrestler(BaseModel):
    wrestler_id: str


class AchievementRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    achievement_key: str
    xp_value: int
    unlocked_date: datetime


class AccountRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    account_id: str
    username: str
    legacy_score: int
    prestige: int
    shows_booked: int
    achievements: List[AchievementRead] = []
    creation_date: datetime
