from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from promotion.core.database import get_db
from promotion.teams.schemas.team_schema import TeamCreate, TeamUpdate, TeamRead
from promotion.teams.services.team_service import TeamService

router = APIRouter()


@router.get("/", response_model=List[TeamRead])
def list_teams(active_only: bool = False, page: int = 0, size: Optional[int] = None,
               db: Session = Depends(get_db)):
    service = TeamService(db)
    if active_only:
        return service.get_active_teams()
    return service.list_teams(page, size)


@router.get("/count")
def count_teams(db: Session = Depends(get_db)):
    return {"count": TeamService(db).count()}


@router.get("/{team_id}", response_model=TeamRead)
def get_team(team_id: str, db: Session = Depends(get_db)):
    return TeamService(db).get_team(team_id)


@router.post("/", response_model=TeamRead, status_code=201)
def create_team(payload: TeamCreate, db: Session = Depends(get_db)):
    return TeamService(db).create_team(payload.name, payload.wrestler1_id, payload.wrestler2_id)


@router.put("/{team_id}", response_model=TeamRead)
def update_team(team_id: str, payload: TeamUpdate, db: Session = Depends(get_db)):
    return TeamService(db).update_team(team_id, payload.name, payload.active)


@router.delete("/{team_id}", status_code=204)
def delete_team(team_id: str, db: Session = Depends(get_db)):
    TeamService(db).delete_team(team_id)
