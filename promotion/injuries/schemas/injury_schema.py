from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from promotion.injuries.models import InjurySeverity


def severity_name(value):
    """Severities travel as their names (MINOR, MODERATE, ...)."""
    if isinstance(value, InjurySeverity):
        return value.name
    name = str(value).strip().upper()
    if name not in InjurySeverity.__members__:
        raise ValueError(f"Unknown severity: {value}")
    return name


class InjuryCreate(BaseModel):
    wrestler_id: str
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)
    severity: str
    injury_notes: Optional[str] = Field(default=None, max_length=1000)

    @field_validator("severity", mode="before")
    @classmethod
    def normalize_severity(cls, value):
        return severity_name(value)


class HealingRequest(BaseModel):
    dice_roll: Optional[int] = Field(default=None, ge=1, le=6)


class InjuryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    injury_id: str
    wrestler_id: str
    name: str
    description: Optional[str] = None
    severity: str
    health_penalty: int
    healing_cost: int
    is_active: bool
    injury_date: datetime
    healed_date: Optional[datetime] = None
    injury_notes: Optional[str] = None

    @field_validator("severity", mode="before")
    @classmethod
    def normalize_severity(cls, value):
        return severity_name(value)


class HealingResultRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    success: bool
    message: str
    injury: Optional[InjuryRead] = None
    dice_roll: int
    fans_spent: bool
