"""Connection registry: the set of sessions currently connected."""

from threading import Lock

from fireworks_relay.relay.session import Session


class ConnectionRegistry:
    """Thread-safe set of active sessions, keyed by session id."""

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}
        self._lock = Lock()

    def register(self, session: Session) -> None:
        with self._lock:
            self._sessions[session.id] = session

    def unregister(self, session: Session) -> bool:
        """Remove a session. Returns False if it was already gone."""
        with self._lock:
            if self._sessions.get(session.id) is not session:
                return False
            del self._sessions[session.id]
            return True

    def all(self) -> frozenset[Session]:
        """Snapshot of active sessions; safe to iterate while others connect."""
        with self._lock:
            return frozenset(self._sessions.values())

    def __contains__(self, session: object) -> bool:
        if not isinstance(session, Session):
            return False
        with self._lock:
            return self._sessions.get(session.id) is session

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
