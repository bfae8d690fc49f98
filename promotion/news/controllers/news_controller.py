from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from promotion.core.database import get_db
from promotion.news.models import NewsCategory
from promotion.news.schemas.news_schema import NewsCreate, NewsUpdate, NewsRead
from promotion.news.services.news_service import NewsService

router = APIRouter()


@router.get("/", response_model=List[NewsRead])
def list_news(category: Optional[NewsCategory] = None, page: int = 0, size: Optional[int] = None,
              db: Session = Depends(get_db)):
    service = NewsService(db)
    if category:
        return service.get_news_by_category(category)
    return service.list_news(page, size)


@router.get("/count")
def count_news(db: Session = Depends(get_db)):
    return {"count": NewsService(db).count()}


@router.get("/latest", response_model=List[NewsRead])
def latest_news(limit: int = 10, db: Session = Depends(get_db)):
    return NewsService(db).get_latest_news(limit)


@router.get("/{news_id}", response_model=NewsRead)
def get_news_item(news_id: str, db: Session = Depends(get_db)):
    return NewsService(db).get_news_item(news_id)


@router.post("/", response_model=NewsRead, status_code=201)
def create_news_item(payload: NewsCreate, db: Session = Depends(get_db)):
    return NewsService(db).create_news_item(**payload.model_dump())


@router.put("/{news_id}", response_model=NewsRead)
def update_news_item(news_id: str, payload: NewsUpdate, db: Session = Depends(get_db)):
    return NewsService(db).update_news_item(news_id, **payload.model_dump(exclude_unset=True))


@router.delete("/{news_id}", status_code=204)
def delete_news_item(news_id: str, db: Session = Depends(get_db)):
    NewsService(db).delete_news_item(news_id)
