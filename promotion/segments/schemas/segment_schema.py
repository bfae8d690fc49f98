from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class MatchTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)


class MatchTypeUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)


class MatchTypeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    match_type_id: str
    name: str
    description: Optional[str] = None
    creation_date: datetime


class SegmentTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)
    is_match: bool = True


class SegmentTypeUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)
    is_match: Optional[bool] = None


class SegmentTypeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    segment_type_id: str
    name: str
    description: Optional[str] = None
    is_match: bool
    creation_date: datetime


class SegmentCreate(BaseModel):
    show_id: str
    segment_type_id: str
    participant_ids: List[str] = []
    match_type_id: Optional[str] = None
    referee_id: Optional[str] = None
    segment_order: Optional[int] = Field(default=None, ge=1)
    title_ids: List[str] = []
    stipulation: Optional[str] = Field(default=None, max_length=255)


class SegmentWinners(BaseModel):
    winner_ids: List[str]


class SegmentNarrationUpdate(BaseModel):
    narration: Optional[str] = None
    summary: Optional[str] = None


class SegmentParticipant(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    wrestler_id: str
    name: str


class SegmentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    segment_id: str
    show_id: str
    segment_type_id: str
    match_type_id: Optional[str] = None
    referee_id: Optional[str] = None
    segment_order: int
    is_title_segment: bool
    stipulation: Optional[str] = None
    narration: Optional[str] = None
    summary: Optional[str] = None
    participants: List[SegmentParticipant] = []
    winners: List[SegmentParticipant] = []
    creation_date: datetime
