import enum
from sqlalchemy import Column, String, Integer, Boolean, Text, DateTime, Enum, CheckConstraint
from promotion.core.database import Base


class NewsCategory(str, enum.Enum):
    BREAKING = "BREAKING"
    RUMOR = "RUMOR"
    INJURY = "INJURY"
    CHAMPIONSHIP = "CHAMPIONSHIP"
    GENERAL = "GENERAL"


class NewsItem(Base):
    __tablename__ = "news_items"
    __table_args__ = (CheckConstraint("importance BETWEEN 1 AND 5", name="ck_news_importance"),)

    news_id = Column(String, primary_key=True, index=True)
    headline = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    category = Column(Enum(NewsCategory), nullable=False, default=NewsCategory.GENERAL)
    importance = Column(Integer, nullable=False, default=3)
    is_rumor = Column(Boolean, nullable=False, default=False)
    publish_date = Column(DateTime, nullable=False)
    creation_date = Column(DateTime, nullable=False)
