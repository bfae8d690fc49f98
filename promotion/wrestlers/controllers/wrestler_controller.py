from typing import List, Optional
from fastapi import APIRouter, Depends, UploadFile, File
from sqlalchemy.orm import Session
from promotion.core.database import get_db
from promotion.core.exceptions import BusinessRuleError
from promotion.wrestlers.models import WrestlerTier
from promotion.wrestlers.schemas.wrestler_schema import WrestlerCreate, WrestlerUpdate, WrestlerRead, FanChange
from promotion.wrestlers.services.wrestler_service import WrestlerService
from promotion.wrestlers.services.roster_upload_service import RosterUploadService

router = APIRouter()


@router.get("/", response_model=List[WrestlerRead])
def list_wrestlers(page: int = 0, size: Optional[int] = None, db: Session = Depends(get_db)):
    return WrestlerService(db).list_wrestlers(page, size)


@router.get("/count")
def count_wrestlers(db: Session = Depends(get_db)):
    return {"count": WrestlerService(db).count()}


@router.get("/players", response_model=List[WrestlerRead])
def player_wrestlers(db: Session = Depends(get_db)):
    return WrestlerService(db).get_player_wrestlers()


@router.get("/npcs", response_model=List[WrestlerRead])
def npc_wrestlers(db: Session = Depends(get_db)):
    return WrestlerService(db).get_npc_wrestlers()


@router.get("/tier/{tier}", response_model=List[WrestlerRead])
def wrestlers_by_tier(tier: WrestlerTier, db: Session = Depends(get_db)):
    return WrestlerService(db).get_wrestlers_by_tier(tier)


@router.get("/eligible/{tier}", response_model=List[WrestlerRead])
def eligible_wrestlers(tier: WrestlerTier, db: Session = Depends(get_db)):
    return WrestlerService(db).get_eligible_wrestlers(tier)


@router.get("/{wrestler_id}", response_model=WrestlerRead)
def get_wrestler(wrestler_id: str, db: Session = Depends(get_db)):
    return WrestlerService(db).get_wrestler(wrestler_id)


@router.get("/{wrestler_id}/stats")
def wrestler_stats(wrestler_id: str, db: Session = Depends(get_db)):
    return WrestlerService(db).get_wrestler_stats(wrestler_id)


@router.post("/", response_model=WrestlerRead, status_code=201)
def create_wrestler(payload: WrestlerCreate, db: Session = Depends(get_db)):
    data = payload.model_dump()
    return WrestlerService(db).create_wrestler(data.pop("name"), data.pop("is_player"), data.pop("description"), **data)


@router.put("/{wrestler_id}", response_model=WrestlerRead)
def update_wrestler(wrestler_id: str, payload: WrestlerUpdate, db: Session = Depends(get_db)):
    return WrestlerService(db).update_wrestler(wrestler_id, **payload.model_dump(exclude_unset=True))


@router.delete("/{wrestler_id}", status_code=204)
def delete_wrestler(wrestler_id: str, db: Session = Depends(get_db)):
    WrestlerService(db).delete_wrestler(wrestler_id)


@router.post("/{wrestler_id}/fans", response_model=WrestlerRead)
def award_fans(wrestler_id: str, payload: FanChange, db: Session = Depends(get_db)):
    return WrestlerService(db).award_fans(wrestler_id, payload.fans)


@router.post("/{wrestler_id}/spend-fans", response_model=WrestlerRead)
def spend_fans(wrestler_id: str, payload: FanChange, db: Session = Depends(get_db)):
    service = WrestlerService(db)
    if not service.spend_fans(wrestler_id, payload.fans):
        raise BusinessRuleError(f"Wrestler {wrestler_id} cannot afford to spend {payload.fans:,} fans")
    return service.get_wrestler(wrestler_id)


@router.post("/{wrestler_id}/bump", response_model=WrestlerRead)
def add_bump(wrestler_id: str, db: Session = Depends(get_db)):
    return WrestlerService(db).add_bump(wrestler_id)


@router.post("/{wrestler_id}/heal-bump", response_model=WrestlerRead)
def heal_bump(wrestler_id: str, db: Session = Depends(get_db)):
    return WrestlerService(db).heal_bump(wrestler_id)


@router.post("/{wrestler_id}/heal-chance", response_model=WrestlerRead)
def heal_chance(wrestler_id: str, db: Session = Depends(get_db)):
    return WrestlerService(db).heal_chance(wrestler_id)


@router.post("/upload-roster-csv/")
async def upload_roster_csv(
    file: UploadFile = File(...),
    db: Session = Depends(get_db)
):
    """Upload a roster CSV and delegate processing to the service layer."""
    upload_service = RosterUploadService(db)
    return await upload_service.process_csv(file)
