"""Broadcast relay: validate, record, fan out.

Learn: RelayState is the only process-wide mutable state (history + connected
sessions). It is built once by the app factory and handed to handlers through
a dependency, never reached through module globals.

BroadcastRelay serializes two critical sections with one lock:

1. accept:  history.append(event), then queue a launch for every registered
            session (including the sender)
2. connect: snapshot history, queue it for the new session, then register it

Because both run under the same lock, a new session sees every event exactly
once: inside its history replay, or later as a live launch. Nothing inside the
lock awaits. Queueing is a non-blocking put and the socket writes happen in
each session's own writer task.
"""

from dataclasses import dataclass, field
from threading import Lock
from typing import Any, Optional

import structlog

from fireworks_relay.relay.history import HistoryBuffer
from fireworks_relay.relay.messages import history_message, launch_message
from fireworks_relay.relay.registry import ConnectionRegistry
from fireworks_relay.relay.session import OutboxFull, Session, SessionClosed
from fireworks_relay.relay.validator import accept
from fireworks_relay.schemas.event import FireworkEvent

logger = structlog.get_logger()


class RelayState:
    """History buffer + connection registry, owned for the process lifetime."""

    def __init__(self, history_capacity: int = 120) -> None:
        self.history = HistoryBuffer(history_capacity)
        self.registry = ConnectionRegistry()


@dataclass
class FanoutResult:
    """What happened to one accepted event."""

    event: FireworkEvent
    delivered: list[str] = field(default_factory=list)
    missed: list[str] = field(default_factory=list)

    @property
    def recipients(self) -> int:
        return len(self.delivered)


class BroadcastRelay:
    def __init__(self, state: RelayState) -> None:
        self.state = state
        self._lock = Lock()

    # ── Session lifecycle ─────────────────────────────────

    def connect(self, session: Session) -> list[FireworkEvent]:
        """Bootstrap a new session with history, then start live delivery.

        The history message is queued for this session only.
        """
        with self._lock:
            events = self.state.history.snapshot()
            session.deliver(history_message(events, session.id))
            self.state.registry.register(session)
        logger.info(
            "relay.session_connected",
            session_id=session.id,
            history=len(events),
            connections=len(self.state.registry),
        )
        return events

    def disconnect(self, session: Session) -> None:
        """Stop delivering to a session. Safe to call more than once."""
        removed = self.state.registry.unregister(session)
        session.close()
        if removed:
            logger.info(
                "relay.session_disconnected",
                session_id=session.id,
                connections=len(self.state.registry),
            )

    # ── Inbound events ────────────────────────────────────

    def on_inbound_event(self, session: Session, raw: Any) -> Optional[FanoutResult]:
        """Handle a launch from a connected session."""
        return self.publish(raw, sender=session.id)

    def publish(self, raw: Any, sender: Optional[str] = None) -> Optional[FanoutResult]:
        """Validate, record and fan out one event.

        Returns None when the payload was rejected; nothing is echoed back.
        """
        event = accept(raw)
        if event is None:
            return None

        message = launch_message(event)
        with self._lock:
            self.state.history.append(event)
            result = self._fanout(event, message)

        logger.debug(
            "relay.event_accepted",
            sender=sender,
            shape=event.shape.value,
            recipients=result.recipients,
            missed=len(result.missed),
        )
        return result

    def _fanout(self, event: FireworkEvent, message: dict[str, Any]) -> FanoutResult:
        result = FanoutResult(event=event)
        for session in self.state.registry.all():
            try:
                session.deliver(message)
            except SessionClosed:
                # Disconnected between snapshot and delivery
                logger.warning("relay.session_closed", session_id=session.id)
                result.missed.append(session.id)
            except OutboxFull:
                logger.warning(
                    "relay.outbox_full",
                    session_id=session.id,
                    pending=session.pending,
                )
                result.missed.append(session.id)
            else:
                result.delivered.append(session.id)
        return result

    # ── Shutdown ──────────────────────────────────────────

    def close_all(self) -> int:
        """Disconnect every session (used at shutdown)."""
        sessions = self.state.registry.all()
        for session in sessions:
            self.disconnect(session)
        return len(sessions)
