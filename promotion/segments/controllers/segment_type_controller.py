from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from promotion.core.database import get_db
from promotion.segments.schemas.segment_schema import SegmentTypeCreate, SegmentTypeUpdate, SegmentTypeRead
from promotion.segments.services.segment_type_service import SegmentTypeService

router = APIRouter()


@router.get("/", response_model=List[SegmentTypeRead])
def list_segment_types(page: int = 0, size: Optional[int] = None, db: Session = Depends(get_db)):
    return SegmentTypeService(db).list_segment_types(page, size)


@router.get("/count")
def count_segment_types(db: Session = Depends(get_db)):
    return {"count": SegmentTypeService(db).count()}


@router.get("/{segment_type_id}", response_model=SegmentTypeRead)
def get_segment_type(segment_type_id: str, db: Session = Depends(get_db)):
    return SegmentTypeService(db).get_segment_type(segment_type_id)


@router.post("/", response_model=SegmentTypeRead, status_code=201)
def create_segment_type(payload: SegmentTypeCreate, db: Session = Depends(get_db)):
    return SegmentTypeService(db).create_segment_type(payload.name, payload.description, payload.is_match)


@router.put("/{segment_type_id}", response_model=SegmentTypeRead)
def update_segment_type(segment_type_id: str, payload: SegmentTypeUpdate, db: Session = Depends(get_db)):
    return SegmentTypeService(db).update_segment_type(
        segment_type_id, payload.name, payload.description, payload.is_match
    )


@router.delete("/{segment_type_id}", status_code=204)
def delete_segment_type(segment_type_id: str, db: Session = Depends(get_db)):
    SegmentTypeService(db).delete_segment_type(segment_type_id)
