from fastapi import APIRouter, WebSocket
from promotion.core.broadcaster import notification_broadcaster
from promotion.core.streaming import stream_to_websocket

router = APIRouter()


@router.websocket("/ws")
async def notifications(websocket: WebSocket):
    await stream_to_websocket(websocket, notification_broadcaster)
