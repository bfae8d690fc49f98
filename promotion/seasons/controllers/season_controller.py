from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from promotion.core.database import get_db
from promotion.core.exceptions import EntityNotFoundError
from promotion.seasons.schemas.season_schema import (
    SeasonCreate, SeasonUpdate, SeasonRead, SeasonShowRequest, SeasonStats,
)
from promotion.seasons.services.season_service import SeasonService
from promotion.shows.schemas.show_schema import ShowRead

router = APIRouter()


@router.get("/", response_model=List[SeasonRead])
def list_seasons(page: int = 0, size: Optional[int] = None, db: Session = Depends(get_db)):
    return SeasonService(db).list_seasons(page, size)


@router.get("/count")
def count_seasons(db: Session = Depends(get_db)):
    return {"count": SeasonService(db).count()}


@router.get("/active", response_model=SeasonRead)
def active_season(db: Session = Depends(get_db)):
    season = SeasonService(db).get_active_season()
    if season is None:
        raise EntityNotFoundError("Season", "active")
    return season


@router.get("/latest", response_model=SeasonRead)
def latest_season(db: Session = Depends(get_db)):
    season = SeasonService(db).get_latest_season()
    if season is None:
        raise EntityNotFoundError("Season", "latest")
    return season


@router.get("/ppv-due")
def ppv_due(db: Session = Depends(get_db)):
    return {"time_for_ppv": SeasonService(db).is_time_for_ppv()}


@router.get("/needing-ppv", response_model=List[SeasonRead])
def seasons_needing_ppv(db: Session = Depends(get_db)):
    return SeasonService(db).get_seasons_needing_ppv()


@router.get("/search", response_model=List[SeasonRead])
def search_seasons(q: str, db: Session = Depends(get_db)):
    return SeasonService(db).search_seasons(q)


@router.get("/name/{name}", response_model=SeasonRead)
def get_season_by_name(name: str, db: Session = Depends(get_db)):
    return SeasonService(db).get_by_name(name)


@router.post("/end-current", response_model=Optional[SeasonRead])
def end_current_season(db: Session = Depends(get_db)):
    return SeasonService(db).end_current_season()


@router.get("/{season_id}", response_model=SeasonRead)
def get_season(season_id: str, db: Session = Depends(get_db)):
    return SeasonService(db).get_season(season_id)


@router.get("/{season_id}/stats", response_model=SeasonStats)
def season_stats(season_id: str, db: Session = Depends(get_db)):
    return SeasonService(db).get_season_stats(season_id)


@router.get("/{season_id}/shows", response_model=List[ShowRead])
def season_shows(season_id: str, db: Session = Depends(get_db)):
    return SeasonService(db).get_season(season_id).shows


@router.post("/", response_model=SeasonRead, status_code=201)
def create_season(payload: SeasonCreate, db: Session = Depends(get_db)):
    return SeasonService(db).create_season(**payload.model_dump())


@router.put("/{season_id}", response_model=SeasonRead)
def update_season(season_id: str, payload: SeasonUpdate, db: Session = Depends(get_db)):
    return SeasonService(db).update_season(season_id, **payload.model_dump(exclude_unset=True))


@router.post("/{season_id}/end", response_model=SeasonRead)
def end_season(season_id: str, db: Session = Depends(get_db)):
    return SeasonService(db).end_season(season_id)


@router.post("/{season_id}/shows", response_model=SeasonRead)
def add_show(season_id: str, payload: SeasonShowRequest, db: Session = Depends(get_db)):
    return SeasonService(db).add_show(season_id, payload.show_id)


@router.delete("/{season_id}/shows/{show_id}", response_model=SeasonRead)
def remove_show(season_id: str, show_id: str, db: Session = Depends(get_db)):
    return SeasonService(db).remove_show(season_id, show_id)


@router.delete("/{season_id}", status_code=204)
def delete_season(season_id: str, db: Session = Depends(get_db)):
    SeasonService(db).delete_season(season_id)
