from typing import List
from pydantic import BaseModel
from promotion.wrestlers.models import WrestlerTier


class ChampionshipDTO(BaseModel):
    id: str
    name: str
    image_name: str
    tier: WrestlerTier


class RankedWrestlerDTO(BaseModel):
    id: str
    name: str
    fans: int
    rank: int
    tier: WrestlerTier


class RankedTeamDTO(BaseModel):
    id: str
    name: str
    fans: int
    rank: int
    members: List[str]


class ChampionDTO(BaseModel):
    id: str
    name: str
    fans: int
    reign_days: int
