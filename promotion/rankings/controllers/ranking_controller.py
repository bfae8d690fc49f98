from typing import List, Union
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from promotion.core.database import get_db
from promotion.rankings.schemas.ranking_schema import ChampionshipDTO, RankedWrestlerDTO, RankedTeamDTO, ChampionDTO
from promotion.rankings.services.ranking_service import RankingService

router = APIRouter()


@router.get("/championships", response_model=List[ChampionshipDTO])
def get_championships(db: Session = Depends(get_db)):
    return RankingService(db).get_championships()


@router.get("/championships/{title_id}/contenders",
            response_model=Union[List[RankedWrestlerDTO], List[RankedTeamDTO]])
def get_ranked_contenders(title_id: str, db: Session = Depends(get_db)):
    return RankingService(db).get_ranked_contenders(title_id)


@router.get("/championships/{title_id}/champions", response_model=List[ChampionDTO])
def get_current_champions(title_id: str, db: Session = Depends(get_db)):
    return RankingService(db).get_current_champions(title_id)


@router.get("/factions", response_model=List[RankedTeamDTO])
def get_ranked_factions(db: Session = Depends(get_db)):
    return RankingService(db).get_ranked_factions()
