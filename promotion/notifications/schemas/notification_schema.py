from datetime import datetime
from typing import Any, Dict
from pydantic import BaseModel, Field
from promotion.core.utils import utcnow


class Notification(BaseModel):
    type: str
    message: str
    payload: Dict[str, Any] = {}
    sent_at: datetime = Field(default_factory=utcnow)
