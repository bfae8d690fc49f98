from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from promotion.core.database import get_db
from promotion.segments.schemas.segment_schema import (
    SegmentCreate, SegmentRead, SegmentWinners, SegmentNarrationUpdate
)
from promotion.segments.services.segment_service import SegmentService

router = APIRouter()


@router.get("/count")
def count_segments(db: Session = Depends(get_db)):
    return {"count": SegmentService(db).count()}


@router.get("/{segment_id}", response_model=SegmentRead)
def get_segment(segment_id: str, db: Session = Depends(get_db)):
    return SegmentService(db).get_segment(segment_id)


@router.post("/", response_model=SegmentRead, status_code=201)
def create_segment(payload: SegmentCreate, db: Session = Depends(get_db)):
    return SegmentService(db).create_segment(**payload.model_dump())


@router.put("/{segment_id}/winners", response_model=SegmentRead)
def set_winners(segment_id: str, payload: SegmentWinners, db: Session = Depends(get_db)):
    return SegmentService(db).set_winners(segment_id, payload.winner_ids)


@router.put("/{segment_id}/narration", response_model=SegmentRead)
def update_narration(segment_id: str, payload: SegmentNarrationUpdate, db: Session = Depends(get_db)):
    return SegmentService(db).update_narration(segment_id, payload.narration, payload.summary)


@router.delete("/{segment_id}", status_code=204)
def delete_segment(segment_id: str, db: Session = Depends(get_db)):
    SegmentService(db).delete_segment(segment_id)
