from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from promotion.titles.models import ChampionshipType
from promotion.wrestlers.models import WrestlerTier, Gender


class TitleCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    tier: WrestlerTier
    description: Optional[str] = Field(default=None, max_length=1000)
    gender: Optional[Gender] = None
    championship_type: ChampionshipType = ChampionshipType.SINGLE
    include_in_rankings: bool = True


class TitleUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)
    is_active: Optional[bool] = None
    include_in_rankings: Optional[bool] = None


class AwardTitleRequest(BaseModel):
    champion_ids: List[str] = Field(..., min_length=1)
    won_at_segment_id: Optional[str] = None


class ChallengeRequest(BaseModel):
    wrestler_id: str


class ChallengeResultRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    success: bool
    message: str


class ChampionRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    wrestler_id: str
    name: str


class TitleReignRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    reign_id: str
    reign_number: int
    start_date: datetime
    end_date: Optional[datetime] = None
    won_at_segment_id: Optional[str] = None
    champions: List[ChampionRef] = []


class TitleRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    title_id: str
    name: str
    description: Optional[str] = None
    tier: WrestlerTier
    gender: Optional[Gender] = None
    championship_type: ChampionshipType
    is_active: bool
    include_in_rankings: bool
    is_vacant: bool
    current_champions: List[ChampionRef] = []
    challengers: List[ChampionRef] = []
    creation_date: datetime
