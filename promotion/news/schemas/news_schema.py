from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from promotion.news.models import NewsCategory


class NewsCreate(BaseModel):
    headline: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    category: NewsCategory = NewsCategory.GENERAL
    importance: int = Field(default=3, ge=1, le=5)
    is_rumor: bool = False
    publish_date: Optional[datetime] = None


class NewsUpdate(BaseModel):
    headline: Optional[str] = Field(default=None, min_length=1, max_length=255)
    content: Optional[str] = None
    category: Optional[NewsCategory] = None
    importance: Optional[int] = Field(default=None, ge=1, le=5)
    is_rumor: Optional[bool] = None
    publish_date: Optional[datetime] = None


class NewsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    news_id: str
    headline: str
    content: str
    category: NewsCategory
    importance: int
    is_rumor: bool
    publish_date: datetime
    creation_date: datetime
