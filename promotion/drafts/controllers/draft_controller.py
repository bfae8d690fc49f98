from typing import List
from fastapi import APIRouter, Depends, WebSocket
from sqlalchemy.orm import Session
from promotion.core.broadcaster import draft_broadcaster
from promotion.core.database import get_db
from promotion.core.streaming import stream_to_websocket
from promotion.drafts.schemas.draft_schema import DraftCreate, DraftRead, DraftPickRead, PickRequest
from promotion.drafts.services.draft_service import DraftService

router = APIRouter()


@router.get("/", response_model=List[DraftRead])
def list_drafts(db: Session = Depends(get_db)):
    return DraftService(db).list_drafts()


@router.get("/{draft_id}", response_model=DraftRead)
def get_draft(draft_id: str, db: Session = Depends(get_db)):
    return DraftService(db).get_draft(draft_id)


@router.get("/{draft_id}/picks", response_model=List[DraftPickRead])
def get_picks(draft_id: str, db: Session = Depends(get_db)):
    return DraftService(db).get_picks(draft_id)


@router.get("/{draft_id}/turn")
def current_turn(draft_id: str, db: Session = Depends(get_db)):
    return {"account_id": DraftService(db).get_current_turn(draft_id)}


@router.post("/", response_model=DraftRead, status_code=201)
def start_draft(payload: DraftCreate, db: Session = Depends(get_db)):
    return DraftService(db).start_draft(payload.name, payload.participant_ids, payload.rounds)


@router.post("/{draft_id}/picks", response_model=DraftPickRead, status_code=201)
def make_pick(draft_id: str, payload: PickRequest, db: Session = Depends(get_db)):
    return DraftService(db).make_pick(draft_id, payload.account_id, payload.wrestler_id)


@router.websocket("/{draft_id}/ws")
async def draft_updates(websocket: WebSocket, draft_id: str):
    """Stream every pick of one draft to the connected client."""
    await stream_to_websocket(websocket, draft_broadcaster, lambda update: update.draft_id == draft_id)
