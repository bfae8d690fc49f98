from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from promotion.core.database import get_db
from promotion.segments.schemas.segment_schema import MatchTypeCreate, MatchTypeUpdate, MatchTypeRead
from promotion.segments.services.match_type_service import MatchTypeService

router = APIRouter()


@router.get("/", response_model=List[MatchTypeRead])
def list_match_types(page: int = 0, size: Optional[int] = None, db: Session = Depends(get_db)):
    return MatchTypeService(db).list_match_types(page, size)


@router.get("/count")
def count_match_types(db: Session = Depends(get_db)):
    return {"count": MatchTypeService(db).count()}


@router.get("/{match_type_id}", response_model=MatchTypeRead)
def get_match_type(match_type_id: str, db: Session = Depends(get_db)):
    return MatchTypeService(db).get_match_type(match_type_id)


@router.post("/", response_model=MatchTypeRead, status_code=201)
def create_match_type(payload: MatchTypeCreate, db: Session = Depends(get_db)):
    return MatchTypeService(db).create_match_type(payload.name, payload.description)


@router.put("/{match_type_id}", response_model=MatchTypeRead)
def update_match_type(match_type_id: str, payload: MatchTypeUpdate, db: Session = Depends(get_db)):
    return MatchTypeService(db).update_match_type(match_type_id, payload.name, payload.description)


@router.delete("/{match_type_id}", status_code=204)
def delete_match_type(match_type_id: str, db: Session = Depends(get_db)):
    MatchTypeService(db).delete_match_type(match_type_id)
