"""WebSocket endpoint: one long-lived connection per participant.

Learn: The handler:
1. Accepts the socket and creates a Session
2. Bootstraps it via relay.connect() (history goes to this socket only)
3. Runs a writer (outbox → socket) and a reader (socket → relay) concurrently
4. Unregisters the session when either side stops

A failed write ends only this connection. Other sessions keep receiving.
"""

import asyncio
import json

import structlog
from fastapi import APIRouter, Depends, WebSocket
from starlette.websockets import WebSocketState

from fireworks_relay.config import Settings
from fireworks_relay.dependencies import get_relay, get_settings
from fireworks_relay.events.types import LAUNCH, PING
from fireworks_relay.relay.messages import parse_client_frame, pong_message
from fireworks_relay.relay.relay import BroadcastRelay
from fireworks_relay.relay.session import DeliveryError, Session

logger = structlog.get_logger()
router = APIRouter()


@router.websocket("/ws")
async def fireworks_websocket(
    websocket: WebSocket,
    relay: BroadcastRelay = Depends(get_relay),
    settings: Settings = Depends(get_settings),
):
    """WebSocket endpoint for launching and receiving fireworks."""
    await websocket.accept()

    session = Session(outbox_size=settings.outbox_size)
    structlog.contextvars.bind_contextvars(session_id=session.id)
    relay.connect(session)

    async def session_writer():
        """Forward queued messages to the client, in order."""
        async for message in session.outgoing():
            await websocket.send_text(json.dumps(message))

    async def client_listener():
        """Handle incoming frames until the client disconnects."""
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                return
            text = message.get("text")
            if text is None:
                continue  # binary frames carry nothing we understand

            frame = parse_client_frame(text)
            if frame is None:
                continue
            kind, payload = frame

            if kind == LAUNCH:
                relay.on_inbound_event(session, payload)
            elif kind == PING:
                try:
                    session.deliver(pong_message())
                except DeliveryError:
                    pass  # best-effort; the client pings again

    writer_task = asyncio.create_task(session_writer())
    reader_task = asyncio.create_task(client_listener())

    try:
        # Wait for either to finish (usually client disconnect)
        done, _ = await asyncio.wait(
            [writer_task, reader_task],
            return_when=asyncio.FIRST_COMPLETED,
        )
        for task in done:
            error = task.exception()
            if error is not None:
                logger.warning(
                    "relay.session_error",
                    error=repr(error),
                    side="writer" if task is writer_task else "reader",
                )
    finally:
        for task in (writer_task, reader_task):
            task.cancel()
        await asyncio.gather(writer_task, reader_task, return_exceptions=True)

        relay.disconnect(session)
        structlog.contextvars.unbind_contextvars("session_id")
        if websocket.client_state == WebSocketState.CONNECTED:
            try:
                await websocket.close()
            except Exception:
                logger.debug("relay.close_failed", exc_info=True)
