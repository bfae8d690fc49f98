from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from promotion.core.database import get_db
from promotion.core.exceptions import EntityNotFoundError
from promotion.factions.models import FactionType
from promotion.factions.schemas.faction_schema import (
    FactionCreate, FactionUpdate, FactionRead, MemberRequest, ReasonRequest, AffinityChange,
)
from promotion.factions.services.faction_service import FactionService

router = APIRouter()


@router.get("/", response_model=List[FactionRead])
def list_factions(page: int = 0, size: Optional[int] = None, db: Session = Depends(get_db)):
    return FactionService(db).list_factions(page, size)


@router.get("/count")
def count_factions(db: Session = Depends(get_db)):
    return {"count": FactionService(db).count()}


@router.get("/active", response_model=List[FactionRead])
def active_factions(db: Session = Depends(get_db)):
    return FactionService(db).get_active_factions()


@router.get("/type/{faction_type}", response_model=List[FactionRead])
def factions_by_type(faction_type: FactionType, db: Session = Depends(get_db)):
    return FactionService(db).get_factions_by_type(faction_type)


@router.get("/largest", response_model=List[FactionRead])
def largest_factions(limit: int = 10, db: Session = Depends(get_db)):
    return FactionService(db).get_largest_factions(limit)


@router.get("/with-rivalries", response_model=List[FactionRead])
def factions_with_rivalries(db: Session = Depends(get_db)):
    return FactionService(db).get_factions_with_active_rivalries()


@router.get("/name/{name}", response_model=FactionRead)
def get_faction_by_name(name: str, db: Session = Depends(get_db)):
    return FactionService(db).get_by_name(name)


@router.get("/wrestler/{wrestler_id}", response_model=FactionRead)
def faction_for_wrestler(wrestler_id: str, db: Session = Depends(get_db)):
    faction = FactionService(db).get_faction_for_wrestler(wrestler_id)
    if faction is None:
        raise EntityNotFoundError("Faction for wrestler", wrestler_id)
    return faction


@router.get("/{faction_id}", response_model=FactionRead)
def get_faction(faction_id: str, db: Session = Depends(get_db)):
    return FactionService(db).get_faction(faction_id)


@router.post("/", response_model=FactionRead, status_code=201)
def create_faction(payload: FactionCreate, db: Session = Depends(get_db)):
    return FactionService(db).create_faction(**payload.model_dump())


@router.put("/{faction_id}", response_model=FactionRead)
def update_faction(faction_id: str, payload: FactionUpdate, db: Session = Depends(get_db)):
    return FactionService(db).update_faction(faction_id, **payload.model_dump(exclude_unset=True))


@router.delete("/{faction_id}", status_code=204)
def delete_faction(faction_id: str, db: Session = Depends(get_db)):
    FactionService(db).delete_faction(faction_id)


@router.post("/{faction_id}/members", response_model=FactionRead)
def add_member(faction_id: str, payload: MemberRequest, db: Session = Depends(get_db)):
    return FactionService(db).add_member(faction_id, payload.wrestler_id)


@router.delete("/{faction_id}/members/{wrestler_id}", response_model=FactionRead)
def remove_member(faction_id: str, wrestler_id: str, reason: Optional[str] = None, db: Session = Depends(get_db)):
    return FactionService(db).remove_member(faction_id, wrestler_id, reason)


@router.put("/{faction_id}/leader", response_model=FactionRead)
def change_leader(faction_id: str, payload: MemberRequest, db: Session = Depends(get_db)):
    return FactionService(db).change_leader(faction_id, payload.wrestler_id)


@router.post("/{faction_id}/disband", response_model=FactionRead)
def disband_faction(faction_id: str, payload: Optional[ReasonRequest] = None, db: Session = Depends(get_db)):
    return FactionService(db).disband_faction(faction_id, payload.reason if payload else None)


@router.post("/{faction_id}/affinity", response_model=FactionRead)
def add_affinity(faction_id: str, payload: AffinityChange, db: Session = Depends(get_db)):
    return FactionService(db).add_affinity(faction_id, payload.points)
