from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from promotion.core.database import get_db
from promotion.narration.schemas.narration_schema import (
    PromptRequest, PromptRead, NarrationRequest, NarrationRead, NarrationStatus,
)
from promotion.narration.services.narration_service import NarrationService, get_narration_service
from promotion.narration.services.segment_narration_service import SegmentNarrationService

router = APIRouter()


def get_narrator() -> NarrationService:
    return get_narration_service()


@router.get("/status", response_model=NarrationStatus)
def narration_status(narrator: NarrationService = Depends(get_narrator)):
    return NarrationStatus(provider=narrator.provider_name, available=narrator.is_available(), model=narrator.model)


@router.post("/prompt", response_model=PromptRead)
def preview_prompt(payload: PromptRequest, narrator: NarrationService = Depends(get_narrator)):
    return PromptRead(prompt=narrator.build_prompt(payload.context, payload.simplified))


@router.post("/segments/{segment_id}", response_model=NarrationRead)
def narrate_segment(segment_id: str, payload: Optional[NarrationRequest] = None,
                    db: Session = Depends(get_db), narrator: NarrationService = Depends(get_narrator)):
    simplified = payload.simplified if payload else None
    return SegmentNarrationService(db, narrator).narrate_segment(segment_id, simplified)
