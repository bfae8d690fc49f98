from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from promotion.core.database import get_db
from promotion.shows.schemas.show_schema import ShowCreate, ShowUpdate, ShowRead
from promotion.shows.services.show_service import ShowService
from promotion.segments.schemas.segment_schema import SegmentRead

router = APIRouter()


@router.get("/", response_model=List[ShowRead])
def list_shows(page: int = 0, size: Optional[int] = None, db: Session = Depends(get_db)):
    return ShowService(db).list_shows(page, size)


@router.get("/count")
def count_shows(db: Session = Depends(get_db)):
    return {"count": ShowService(db).count()}


@router.get("/upcoming", response_model=List[ShowRead])
def upcoming_shows(reference_date: Optional[date] = None, limit: int = 5, db: Session = Depends(get_db)):
    return ShowService(db).get_upcoming_shows(reference_date, limit)


@router.get("/between", response_model=List[ShowRead])
def shows_between(start: date, end: date, db: Session = Depends(get_db)):
    return ShowService(db).get_shows_between(start, end)


@router.get("/{show_id}", response_model=ShowRead)
def get_show(show_id: str, db: Session = Depends(get_db)):
    return ShowService(db).get_show(show_id)


@router.get("/{show_id}/segments", response_model=List[SegmentRead])
def show_segments(show_id: str, db: Session = Depends(get_db)):
    return ShowService(db).get_segments(show_id)


@router.post("/", response_model=ShowRead, status_code=201)
def create_show(payload: ShowCreate, db: Session = Depends(get_db)):
    return ShowService(db).create_show(payload.name, payload.show_type_id, payload.description, payload.show_date)


@router.put("/{show_id}", response_model=ShowRead)
def update_show(show_id: str, payload: ShowUpdate, db: Session = Depends(get_db)):
    return ShowService(db).update_show(show_id, **payload.model_dump(exclude_unset=True))


@router.delete("/{show_id}", status_code=204)
def delete_show(show_id: str, db: Session = Depends(get_db)):
    ShowService(db).delete_show(show_id)
