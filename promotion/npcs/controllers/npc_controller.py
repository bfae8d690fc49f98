from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from promotion.core.database import get_db
from promotion.npcs.schemas.npc_schema import NpcCreate, NpcUpdate, NpcRead
from promotion.npcs.services.npc_service import NpcService

router = APIRouter()


@router.get("/", response_model=List[NpcRead])
def list_npcs(npc_type: Optional[str] = None, page: int = 0, size: Optional[int] = None,
              db: Session = Depends(get_db)):
    service = NpcService(db)
    if npc_type:
        return service.find_by_type(npc_type)
    return service.list_npcs(page, size)


@router.get("/count")
def count_npcs(db: Session = Depends(get_db)):
    return {"count": NpcService(db).count()}


@router.get("/{npc_id}", response_model=NpcRead)
def get_npc(npc_id: str, db: Session = Depends(get_db)):
    return NpcService(db).get_npc(npc_id)


@router.post("/", response_model=NpcRead, status_code=201)
def create_npc(payload: NpcCreate, db: Session = Depends(get_db)):
    return NpcService(db).create_npc(payload.name, payload.npc_type, payload.description)


@router.put("/{npc_id}", response_model=NpcRead)
def update_npc(npc_id: str, payload: NpcUpdate, db: Session = Depends(get_db)):
    return NpcService(db).update_npc(npc_id, **payload.model_dump(exclude_unset=True))


@router.delete("/{npc_id}", status_code=204)
def delete_npc(npc_id: str, db: Session = Depends(get_db)):
    NpcService(db).delete_npc(npc_id)
