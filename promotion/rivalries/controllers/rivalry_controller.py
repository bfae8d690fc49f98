from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from promotion.core.database import get_db
from promotion.rivalries.models import RivalryIntensity
from promotion.rivalries.schemas.rivalry_schema import (
    RivalryCreate, RivalryRead, HeatChange, WrestlerHeatChange, ResolutionRequest, ResolutionRead,
    EndRivalryRequest, StorylineNotesUpdate,
)
from promotion.rivalries.services.rivalry_service import RivalryService

router = APIRouter()


@router.get("/", response_model=List[RivalryRead])
def list_rivalries(page: int = 0, size: Optional[int] = None, db: Session = Depends(get_db)):
    return RivalryService(db).list_rivalries(page, size)


@router.get("/count")
def count_rivalries(db: Session = Depends(get_db)):
    return {"count": RivalryService(db).count()}


@router.get("/active", response_model=List[RivalryRead])
def active_rivalries(db: Session = Depends(get_db)):
    return RivalryService(db).get_active_rivalries()


@router.get("/hottest", response_model=List[RivalryRead])
def hottest_rivalries(limit: int = 5, db: Session = Depends(get_db)):
    return RivalryService(db).get_hottest_rivalries(limit)


@router.get("/requiring-matches", response_model=List[RivalryRead])
def rivalries_requiring_matches(db: Session = Depends(get_db)):
    return RivalryService(db).get_rivalries_requiring_matches()


@router.get("/eligible-for-resolution", response_model=List[RivalryRead])
def rivalries_eligible_for_resolution(db: Session = Depends(get_db)):
    return RivalryService(db).get_rivalries_eligible_for_resolution()


@router.get("/requiring-stipulation", response_model=List[RivalryRead])
def rivalries_requiring_stipulation(db: Session = Depends(get_db)):
    return RivalryService(db).get_rivalries_requiring_stipulation_matches()


@router.get("/intensity/{intensity}", response_model=List[RivalryRead])
def rivalries_by_intensity(intensity: str, db: Session = Depends(get_db)):
    try:
        level = RivalryIntensity[intensity.upper()]
    except KeyError:
        raise HTTPException(status_code=400, detail=f"Unknown intensity: {intensity}")
    return RivalryService(db).get_rivalries_by_intensity(level)


@router.get("/wrestler/{wrestler_id}", response_model=List[RivalryRead])
def rivalries_for_wrestler(wrestler_id: str, db: Session = Depends(get_db)):
    return RivalryService(db).get_rivalries_for_wrestler(wrestler_id)


@router.get("/{rivalry_id}", response_model=RivalryRead)
def get_rivalry(rivalry_id: str, db: Session = Depends(get_db)):
    return RivalryService(db).get_rivalry(rivalry_id)


@router.get("/{rivalry_id}/stats")
def rivalry_stats(rivalry_id: str, db: Session = Depends(get_db)):
    return RivalryService(db).get_rivalry_stats(rivalry_id)


@router.post("/", response_model=RivalryRead, status_code=201)
def create_rivalry(payload: RivalryCreate, db: Session = Depends(get_db)):
    return RivalryService(db).create_rivalry(payload.wrestler1_id, payload.wrestler2_id, payload.storyline_notes)


@router.post("/heat", response_model=RivalryRead)
def add_heat_between_wrestlers(payload: WrestlerHeatChange, db: Session = Depends(get_db)):
    return RivalryService(db).add_heat_between_wrestlers(
        payload.wrestler1_id, payload.wrestler2_id, payload.heat, payload.reason
    )


@router.post("/{rivalry_id}/heat", response_model=RivalryRead)
def add_heat(rivalry_id: str, payload: HeatChange, db: Session = Depends(get_db)):
    return RivalryService(db).add_heat(rivalry_id, payload.heat, payload.reason)


@router.post("/{rivalry_id}/resolve", response_model=ResolutionRead)
def attempt_resolution(rivalry_id: str, payload: Optional[ResolutionRequest] = None,
                       db: Session = Depends(get_db)):
    payload = payload or ResolutionRequest()
    result = RivalryService(db).attempt_resolution(rivalry_id, payload.roll1, payload.roll2)
    view = RivalryRead.model_validate(result.entity) if result.entity is not None else None
    return result.to_dict(view)


@router.post("/{rivalry_id}/end", response_model=RivalryRead)
def end_rivalry(rivalry_id: str, payload: EndRivalryRequest, db: Session = Depends(get_db)):
    return RivalryService(db).end_rivalry(rivalry_id, payload.reason)


@router.put("/{rivalry_id}/notes", response_model=RivalryRead)
def update_storyline_notes(rivalry_id: str, payload: StorylineNotesUpdate, db: Session = Depends(get_db)):
    return RivalryService(db).update_storyline_notes(rivalry_id, payload.storyline_notes)
