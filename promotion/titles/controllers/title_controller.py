from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from promotion.core.database import get_db
from promotion.wrestlers.models import WrestlerTier
from promotion.wrestlers.schemas.wrestler_schema import WrestlerRead
from promotion.titles.schemas.title_schema import (
    TitleCreate, TitleUpdate, TitleRead, TitleReignRead, AwardTitleRequest, ChallengeRequest, ChallengeResultRead,
)
from promotion.titles.services.title_service import TitleService

router = APIRouter()


@router.get("/", response_model=List[TitleRead])
def list_titles(page: int = 0, size: Optional[int] = None, db: Session = Depends(get_db)):
    return TitleService(db).list_titles(page, size)


@router.get("/count")
def count_titles(db: Session = Depends(get_db)):
    return {"count": TitleService(db).count()}


@router.get("/active", response_model=List[TitleRead])
def active_titles(db: Session = Depends(get_db)):
    return TitleService(db).get_active_titles()


@router.get("/vacant", response_model=List[TitleRead])
def vacant_titles(db: Session = Depends(get_db)):
    return TitleService(db).get_vacant_titles()


@router.get("/tier/{tier}", response_model=List[TitleRead])
def titles_by_tier(tier: WrestlerTier, db: Session = Depends(get_db)):
    return TitleService(db).get_titles_by_tier(tier)


@router.get("/held-by/{wrestler_id}", response_model=List[TitleRead])
def titles_held_by(wrestler_id: str, db: Session = Depends(get_db)):
    return TitleService(db).get_titles_held_by(wrestler_id)


@router.get("/{title_id}", response_model=TitleRead)
def get_title(title_id: str, db: Session = Depends(get_db)):
    return TitleService(db).get_title(title_id)


@router.get("/{title_id}/reigns", response_model=List[TitleReignRead])
def title_reigns(title_id: str, db: Session = Depends(get_db)):
    return TitleService(db).get_title(title_id).reigns


@router.get("/{title_id}/stats")
def title_stats(title_id: str, db: Session = Depends(get_db)):
    return TitleService(db).get_title_stats(title_id)


@router.get("/{title_id}/costs")
def title_costs(title_id: str, db: Session = Depends(get_db)):
    service = TitleService(db)
    return {
        "challenge_cost": service.get_challenge_cost(title_id),
        "contender_entry_fee": service.get_contender_entry_fee(title_id),
    }


@router.get("/{title_id}/eligible-challengers", response_model=List[WrestlerRead])
def eligible_challengers(title_id: str, db: Session = Depends(get_db)):
    return TitleService(db).get_eligible_challengers(title_id)


@router.post("/", response_model=TitleRead, status_code=201)
def create_title(payload: TitleCreate, db: Session = Depends(get_db)):
    return TitleService(db).create_title(**payload.model_dump())


@router.put("/{title_id}", response_model=TitleRead)
def update_title(title_id: str, payload: TitleUpdate, db: Session = Depends(get_db)):
    return TitleService(db).update_title(title_id, **payload.model_dump(exclude_unset=True))


@router.delete("/{title_id}", status_code=204)
def delete_title(title_id: str, db: Session = Depends(get_db)):
    if not TitleService(db).delete_title(title_id):
        raise HTTPException(status_code=400, detail="Only inactive, vacant titles never defended in a segment can be deleted")


@router.post("/{title_id}/award", response_model=TitleRead)
def award_title(title_id: str, payload: AwardTitleRequest, db: Session = Depends(get_db)):
    return TitleService(db).award_title(title_id, payload.champion_ids, payload.won_at_segment_id)


@router.post("/{title_id}/vacate", response_model=TitleRead)
def vacate_title(title_id: str, db: Session = Depends(get_db)):
    return TitleService(db).vacate_title(title_id)


@router.post("/{title_id}/challenge", response_model=ChallengeResultRead)
def challenge_for_title(title_id: str, payload: ChallengeRequest, db: Session = Depends(get_db)):
    result = TitleService(db).challenge_for_title(payload.wrestler_id, title_id)
    return ChallengeResultRead.model_validate(result)


@router.post("/{title_id}/challengers", response_model=ChallengeResultRead)
def add_challenger(title_id: str, payload: ChallengeRequest, db: Session = Depends(get_db)):
    return ChallengeResultRead.model_validate(TitleService(db).add_challenger(title_id, payload.wrestler_id))


@router.delete("/{title_id}/challengers/{wrestler_id}", response_model=ChallengeResultRead)
def remove_challenger(title_id: str, wrestler_id: str, db: Session = Depends(get_db)):
    return ChallengeResultRead.model_validate(TitleService(db).remove_challenger(title_id, wrestler_id))
