"""Session: one connected participant's server-side handle.

Learn: A session owns a bounded outbox instead of writing to its socket
directly. Fan-out only ever does a non-blocking put into each outbox, and a
per-session writer task drains the outbox onto the transport. One slow or
stalled client therefore fills its own queue and nobody else's.
"""

import asyncio
import uuid
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Optional

_CLOSED = object()


class DeliveryError(Exception):
    """A message could not be queued for one session."""


class SessionClosed(DeliveryError):
    pass


class OutboxFull(DeliveryError):
    pass


class Session:
    """Opaque handle for one connection. Identity is the object itself."""

    def __init__(self, outbox_size: int = 256, session_id: Optional[str] = None):
        self.id = session_id or uuid.uuid4().hex
        self.connected_at = datetime.now(timezone.utc)
        self._outbox: asyncio.Queue = asyncio.Queue(maxsize=outbox_size)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending(self) -> int:
        """Messages queued but not yet written to the transport."""
        return self._outbox.qsize()

    def deliver(self, message: dict[str, Any]) -> None:
        """Queue a message for this session without blocking."""
        if self._closed:
            raise SessionClosed(self.id)
        try:
            self._outbox.put_nowait(message)
        except asyncio.QueueFull:
            raise OutboxFull(self.id) from None

    def close(self) -> None:
        """Stop accepting messages and wake the writer. Idempotent."""
        if self._closed:
            return
        self._closed = True
        try:
            self._outbox.put_nowait(_CLOSED)
        except asyncio.QueueFull:
            # Writer is stalled anyway; the connection handler cancels it.
            pass

    async def outgoing(self) -> AsyncIterator[dict[str, Any]]:
        """Yield queued messages in order until the session is closed."""
        while True:
            message = await self._outbox.get()
            if message is _CLOSED:
                return
            yield message

    def drain(self) -> list[dict[str, Any]]:
        """Pop everything queued right now (without waiting)."""
        messages = []
        while True:
            try:
                message = self._outbox.get_nowait()
            except asyncio.QueueEmpty:
                return messages
            if message is not _CLOSED:
                messages.append(message)

    def __repr__(self) -> str:
        return f"Session(id={self.id!r}, closed={self._closed})"
