from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from promotion.core.database import get_db
from promotion.referees.schemas.referee_schema import RefereeCreate, RefereeUpdate, RefereeRead
from promotion.referees.services.referee_service import RefereeService

router = APIRouter()


@router.get("/", response_model=List[RefereeRead])
def list_referees(page: int = 0, size: Optional[int] = None, db: Session = Depends(get_db)):
    return RefereeService(db).list_referees(page, size)


@router.get("/count")
def count_referees(db: Session = Depends(get_db)):
    return {"count": RefereeService(db).count()}


@router.get("/{ref_id}", response_model=RefereeRead)
def get_referee(ref_id: str, db: Session = Depends(get_db)):
    return RefereeService(db).get_referee(ref_id)


@router.post("/", response_model=RefereeRead, status_code=201)
def create_referee(payload: RefereeCreate, db: Session = Depends(get_db)):
    return RefereeService(db).create_referee(payload.ref_name, payload.description)


@router.put("/{ref_id}", response_model=RefereeRead)
def update_referee(ref_id: str, payload: RefereeUpdate, db: Session = Depends(get_db)):
    return RefereeService(db).update_referee(ref_id, payload.ref_name, payload.description)


@router.delete("/{ref_id}", status_code=204)
def delete_referee(ref_id: str, db: Session = Depends(get_db)):
    RefereeService(db).delete_referee(ref_id)
