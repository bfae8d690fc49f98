import asyncio
import logging
from typing import Any, Callable, Optional
from fastapi import WebSocket, WebSocketDisconnect
from pydantic import BaseModel
from promotion.core.broadcaster import Broadcaster

logger = logging.getLogger(__name__)


def _as_json(message: Any):
    if isinstance(message, BaseModel):
        return message.model_dump(mode="json")
    return message


async def stream_to_websocket(websocket: WebSocket, broadcaster: Broadcaster,
                              accept: Optional[Callable[[Any], bool]] = None):
    """Relay broadcaster messages to a websocket until the client goes away.

    Broadcasts are delivered on the broadcaster's worker thread; they are
    handed over to the event loop through a queue. The listener is always
    unregistered on the way out.
    """
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue = asyncio.Queue()

    def on_message(message):
        if accept is None or accept(message):
            loop.call_soon_threadsafe(queue.put_nowait, message)

    async def pump():
        while True:
            message = await queue.get()
            await websocket.send_json(_as_json(message))

    async def drain():
        # Incoming frames are ignored; this only notices the disconnect
        while True:
            await websocket.receive_text()

    # Subscribed before the handshake completes so a connected client misses nothing
    unregister = broadcaster.register(on_message)
    try:
        await websocket.accept()
        tasks = [asyncio.create_task(pump()), asyncio.create_task(drain())]
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        for task in pending:
            task.cancel()
        for task in done:
            error = task.exception()
            if error is not None and not isinstance(error, WebSocketDisconnect):
                logger.error(f"[{broadcaster.name}] websocket stream failed: {error}")
    finally:
        unregister()
        logger.info(f"[{broadcaster.name}] websocket subscriber left")
