from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from promotion.news.models import NewsItem, NewsCategory
from promotion.core.exceptions import EntityNotFoundError
from promotion.core.utils import generate_custom_id, paginate, utcnow

class NewsService:
    def __init__(self, db: Session):
        self.db = db

    def list_news(self, page: int = 0, size: Optional[int] = None):
        return paginate(self.db.query(NewsItem).order_by(NewsItem.publish_date.desc()), page, size)

    def count(self) -> int:
        return self.db.query(NewsItem).count()

    def get_news_item(self, news_id: str) -> NewsItem:
        item = self.db.query(NewsItem).filter(NewsItem.news_id == news_id).first()
        if not item:
            raise EntityNotFoundError("NewsItem", news_id)
        return item

    def build_news_item(self, headline: str, content: str, category: NewsCategory = NewsCategory.GENERAL,
                        importance: int = 3, is_rumor: bool = False,
                        publish_date: Optional[datetime] = None) -> NewsItem:
        """Stage a news item in the session without committing."""
        if not 1 <= importance <= 5:
            raise ValueError("Importance must be between 1 and 5")
        now = utcnow()
        item = NewsItem(
            news_id=generate_custom_id(self.db, NewsItem, "N", "news_id"),
            headline=headline[:255],
            content=content,
            category=category,
            importance=importance,
            is_rumor=is_rumor,
            publish_date=publish_date or now,
            creation_date=now,
        )
        self.db.add(item)
        self.db.flush()
        return item

    def create_news_item(self, headline: str, content: str, category: NewsCategory = NewsCategory.GENERAL,
                         importance: int = 3, is_rumor: bool = False,
                         publish_date: Optional[datetime] = None) -> NewsItem:
        item = self.build_news_item(headline, content, category, importance, is_rumor, publish_date)
        self.db.commit()
        self.db.refresh(item)
        return item

    def update_news_item(self, news_id: str, **changes) -> NewsItem:
        item = self.get_news_item(news_id)
        for key, value in changes.items():
            if value is not None:
                setattr(item, key, value)
        self.db.commit()
        self.db.refresh(item)
        return item

    def delete_news_item(self, news_id: str):
        self.db.delete(self.get_news_item(news_id))
        self.db.commit()

    def get_latest_news(self, limit: int = 10):
        return self.db.query(NewsItem).order_by(NewsItem.publish_date.desc()).limit(limit).all()

    def get_news_by_category(self, category: NewsCategory):
        return (
            self.db.query(NewsItem)
            .filter(NewsItem.category == category)
            .order_by(NewsItem.publish_date.desc())
            .all()
        )
