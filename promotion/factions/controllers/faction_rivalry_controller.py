from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from promotion.core.database import get_db
from promotion.factions.schemas.faction_schema import (
    FactionRivalryCreate, FactionRivalryRead, FactionHeatChange, FactionsHeatChange, FactionResolutionRead,
    FactionRivalryStatistics,
)
from promotion.factions.services.faction_rivalry_service import FactionRivalryService
from promotion.rivalries.schemas.rivalry_schema import ResolutionRequest, EndRivalryRequest, StorylineNotesUpdate

router = APIRouter()


@router.get("/", response_model=List[FactionRivalryRead])
def list_faction_rivalries(page: int = 0, size: Optional[int] = None, db: Session = Depends(get_db)):
    return FactionRivalryService(db).list_faction_rivalries(page, size)


@router.get("/count")
def count_faction_rivalries(db: Session = Depends(get_db)):
    return {"count": FactionRivalryService(db).count()}


@router.get("/statistics", response_model=FactionRivalryStatistics)
def faction_rivalry_statistics(db: Session = Depends(get_db)):
    return FactionRivalryService(db).get_statistics()


@router.get("/active", response_model=List[FactionRivalryRead])
def active_faction_rivalries(db: Session = Depends(get_db)):
    return FactionRivalryService(db).get_active_faction_rivalries()


@router.get("/hottest", response_model=List[FactionRivalryRead])
def hottest_faction_rivalries(limit: int = 5, db: Session = Depends(get_db)):
    return FactionRivalryService(db).get_hottest_rivalries(limit)


@router.get("/requiring-matches", response_model=List[FactionRivalryRead])
def faction_rivalries_requiring_matches(db: Session = Depends(get_db)):
    return FactionRivalryService(db).get_rivalries_requiring_matches()


@router.get("/eligible-for-resolution", response_model=List[FactionRivalryRead])
def faction_rivalries_eligible_for_resolution(db: Session = Depends(get_db)):
    return FactionRivalryService(db).get_rivalries_eligible_for_resolution()


@router.get("/requiring-stipulation", response_model=List[FactionRivalryRead])
def faction_rivalries_requiring_stipulation(db: Session = Depends(get_db)):
    return FactionRivalryService(db).get_rivalries_requiring_stipulation_matches()


@router.get("/tag-team", response_model=List[FactionRivalryRead])
def tag_team_faction_rivalries(db: Session = Depends(get_db)):
    return FactionRivalryService(db).get_tag_team_rivalries()


@router.get("/involving-stables", response_model=List[FactionRivalryRead])
def faction_rivalries_involving_stables(db: Session = Depends(get_db)):
    return FactionRivalryService(db).get_rivalries_involving_stables()


@router.get("/faction/{faction_id}", response_model=List[FactionRivalryRead])
def rivalries_for_faction(faction_id: str, db: Session = Depends(get_db)):
    return FactionRivalryService(db).get_rivalries_for_faction(faction_id)


@router.get("/{faction_rivalry_id}", response_model=FactionRivalryRead)
def get_faction_rivalry(faction_rivalry_id: str, db: Session = Depends(get_db)):
    return FactionRivalryService(db).get_faction_rivalry(faction_rivalry_id)


@router.post("/", response_model=FactionRivalryRead, status_code=201)
def create_faction_rivalry(payload: FactionRivalryCreate, db: Session = Depends(get_db)):
    return FactionRivalryService(db).create_faction_rivalry(
        payload.faction1_id, payload.faction2_id, payload.storyline_notes
    )


@router.post("/heat", response_model=FactionRivalryRead)
def add_heat_between_factions(payload: FactionsHeatChange, db: Session = Depends(get_db)):
    return FactionRivalryService(db).add_heat_between_factions(
        payload.faction1_id, payload.faction2_id, payload.heat, payload.reason
    )


@router.post("/{faction_rivalry_id}/heat", response_model=FactionRivalryRead)
def add_heat(faction_rivalry_id: str, payload: FactionHeatChange, db: Session = Depends(get_db)):
    return FactionRivalryService(db).add_heat(faction_rivalry_id, payload.heat, payload.reason)


@router.post("/{faction_rivalry_id}/resolve", response_model=FactionResolutionRead)
def attempt_resolution(faction_rivalry_id: str, payload: Optional[ResolutionRequest] = None,
                       db: Session = Depends(get_db)):
    payload = payload or ResolutionRequest()
    result = FactionRivalryService(db).attempt_resolution(faction_rivalry_id, payload.roll1, payload.roll2)
    view = FactionRivalryRead.model_validate(result.entity) if result.entity is not None else None
    return result.to_dict(view)


@router.post("/{faction_rivalry_id}/end", response_model=FactionRivalryRead)
def end_faction_rivalry(faction_rivalry_id: str, payload: EndRivalryRequest, db: Session = Depends(get_db)):
    return FactionRivalryService(db).end_faction_rivalry(faction_rivalry_id, payload.reason)


@router.put("/{faction_rivalry_id}/notes", response_model=FactionRivalryRead)
def update_storyline_notes(faction_rivalry_id: str, payload: StorylineNotesUpdate, db: Session = Depends(get_db)):
    return FactionRivalryService(db).update_storyline_notes(faction_rivalry_id, payload.storyline_notes)
