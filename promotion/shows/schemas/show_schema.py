from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ShowTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)
    expected_matches: int = Field(default=0, ge=0)
    expected_promos: int = Field(default=0, ge=0)


class ShowTypeUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)
    expected_matches: Optional[int] = Field(default=None, ge=0)
    expected_promos: Optional[int] = Field(default=None, ge=0)


class ShowTypeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    show_type_id: str
    name: str
    description: Optional[str] = None
    expected_matches: int
    expected_promos: int
    creation_date: datetime


class ShowCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    show_type_id: str
    description: Optional[str] = Field(default=None, max_length=4000)
    show_date: Optional[date] = None


class ShowUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    show_type_id: Optional[str] = None
    description: Optional[str] = Field(default=None, max_length=4000)
    show_date: Optional[date] = None


class ShowRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    show_id: str
    name: str
    description: Optional[str] = None
    show_type_id: str
    show_date: Optional[date] = None
    season_id: Optional[str] = None
    creation_date: datetime
