from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from promotion.core.database import get_db
from promotion.injuries.schemas.injury_type_schema import (
    InjuryTypeCreate, InjuryTypeUpdate, InjuryTypeRead, InjuryTypeStats,
)
from promotion.injuries.services.injury_type_service import InjuryTypeService

router = APIRouter()


@router.get("/", response_model=List[InjuryTypeRead])
def list_injury_types(page: int = 0, size: Optional[int] = None, db: Session = Depends(get_db)):
    return InjuryTypeService(db).list_injury_types(page, size)


@router.get("/count")
def count_injury_types(db: Session = Depends(get_db)):
    return {"count": InjuryTypeService(db).count()}


@router.get("/stats", response_model=InjuryTypeStats)
def injury_type_stats(db: Session = Depends(get_db)):
    return InjuryTypeService(db).get_stats()


@router.get("/by-severity", response_model=List[InjuryTypeRead])
def injury_types_by_severity(db: Session = Depends(get_db)):
    return InjuryTypeService(db).get_ordered_by_severity()


@router.get("/with-special-effects", response_model=List[InjuryTypeRead])
def injury_types_with_special_effects(db: Session = Depends(get_db)):
    return InjuryTypeService(db).get_with_special_effects()


@router.get("/by-name/{injury_name}", response_model=InjuryTypeRead)
def get_injury_type_by_name(injury_name: str, db: Session = Depends(get_db)):
    return InjuryTypeService(db).get_by_name(injury_name)


@router.get("/{injury_type_id}", response_model=InjuryTypeRead)
def get_injury_type(injury_type_id: str, db: Session = Depends(get_db)):
    return InjuryTypeService(db).get_injury_type(injury_type_id)


@router.post("/", response_model=InjuryTypeRead, status_code=201)
def create_injury_type(payload: InjuryTypeCreate, db: Session = Depends(get_db)):
    return InjuryTypeService(db).create_injury_type(**payload.model_dump())


@router.put("/{injury_type_id}", response_model=InjuryTypeRead)
def update_injury_type(injury_type_id: str, payload: InjuryTypeUpdate, db: Session = Depends(get_db)):
    return InjuryTypeService(db).update_injury_type(injury_type_id, **payload.model_dump(exclude_unset=True))


@router.delete("/{injury_type_id}", status_code=204)
def delete_injury_type(injury_type_id: str, db: Session = Depends(get_db)):
    InjuryTypeService(db).delete_injury_type(injury_type_id)
