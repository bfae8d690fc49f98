from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from promotion.core.database import get_db
from promotion.injuries.models import InjurySeverity
from promotion.injuries.schemas.injury_schema import InjuryCreate, InjuryRead, HealingRequest, HealingResultRead
from promotion.injuries.services.injury_service import InjuryService

router = APIRouter()


@router.get("/", response_model=List[InjuryRead])
def list_injuries(page: int = 0, size: Optional[int] = None, db: Session = Depends(get_db)):
    return InjuryService(db).list_injuries(page, size)


@router.get("/count")
def count_injuries(db: Session = Depends(get_db)):
    return {"count": InjuryService(db).count()}


@router.get("/active", response_model=List[InjuryRead])
def active_injuries(db: Session = Depends(get_db)):
    return InjuryService(db).get_all_active_injuries()


@router.get("/wrestler/{wrestler_id}", response_model=List[InjuryRead])
def injuries_for_wrestler(wrestler_id: str, active_only: bool = False, db: Session = Depends(get_db)):
    service = InjuryService(db)
    if active_only:
        return service.get_active_injuries_for_wrestler(wrestler_id)
    return service.get_all_injuries_for_wrestler(wrestler_id)


@router.get("/wrestler/{wrestler_id}/stats")
def injury_stats(wrestler_id: str, db: Session = Depends(get_db)):
    return InjuryService(db).get_injury_stats(wrestler_id)


@router.get("/{injury_id}", response_model=InjuryRead)
def get_injury(injury_id: str, db: Session = Depends(get_db)):
    return InjuryService(db).get_injury(injury_id)


@router.post("/", response_model=InjuryRead, status_code=201)
def create_injury(payload: InjuryCreate, db: Session = Depends(get_db)):
    return InjuryService(db).create_injury(
        payload.wrestler_id, payload.name, payload.description, InjurySeverity[payload.severity], payload.injury_notes
    )


@router.post("/{injury_id}/heal", response_model=HealingResultRead)
def heal_injury(injury_id: str, payload: Optional[HealingRequest] = None, db: Session = Depends(get_db)):
    dice_roll = payload.dice_roll if payload else None
    result = InjuryService(db).attempt_healing(injury_id, dice_roll)
    return HealingResultRead.model_validate(result, from_attributes=True)
