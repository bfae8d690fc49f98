from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from promotion.core.database import get_db
from promotion.accounts.schemas.account_schema import AccountCreate, AccountRead, AssignWrestler
from promotion.accounts.services.account_service import AccountService
from promotion.accounts.services.legacy_service import LegacyService

router = APIRouter()


@router.get("/", response_model=List[AccountRead])
def list_accounts(page: int = 0, size: Optional[int] = None, db: Session = Depends(get_db)):
    return AccountService(db).list_accounts(page, size)


@router.get("/count")
def count_accounts(db: Session = Depends(get_db)):
    return {"count": AccountService(db).count()}


@router.get("/{account_id}", response_model=AccountRead)
def get_account(account_id: str, db: Session = Depends(get_db)):
    return AccountService(db).get_account(account_id)


@router.post("/", response_model=AccountRead, status_code=201)
def create_account(payload: AccountCreate, db: Session = Depends(get_db)):
    return AccountService(db).create_account(payload.username)


@router.post("/{account_id}/wrestlers", response_model=AccountRead)
def assign_wrestler(account_id: str, payload: AssignWrestler, db: Session = Depends(get_db)):
    AccountService(db).assign_wrestler(account_id, payload.wrestler_id)
    return LegacyService(db).update_legacy_score(account_id)


@router.post("/{account_id}/legacy", response_model=AccountRead)
def recalculate_legacy(account_id: str, db: Session = Depends(get_db)):
    return LegacyService(db).update_legacy_score(account_id)


@router.post("/{account_id}/shows-booked", response_model=AccountRead)
def increment_shows_booked(account_id: str, db: Session = Depends(get_db)):
    return LegacyService(db).increment_shows_booked(account_id)


@router.delete("/{account_id}", status_code=204)
def delete_account(account_id: str, db: Session = Depends(get_db)):
    AccountService(db).delete_account(account_id)
