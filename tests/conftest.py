"""Test fixtures: a fresh app (and fresh relay state) per test.

Learn: create_app() builds its own RelayState, so every test gets an empty
history and an empty registry without any global reset.

Two kinds of clients:
1. `client`: httpx AsyncClient over ASGITransport, for plain HTTP routes
2. `ws_app`: starlette TestClient used as a context manager. All WebSockets
   opened from it share one event loop, which the relay's per-session queues
   require (production runs a single uvicorn loop too).
"""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from fireworks_relay.config import Settings
from fireworks_relay.main import create_app
from fireworks_relay.relay.relay import BroadcastRelay, RelayState
from fireworks_relay.relay.session import Session


@pytest.fixture()
def settings():
    return Settings(history_capacity=3, outbox_size=16)


@pytest.fixture()
def app(settings):
    return create_app(settings)


@pytest.fixture()
def relay(app) -> BroadcastRelay:
    return app.state.relay


@pytest_asyncio.fixture()
async def client(app):
    """HTTP client bound to a fresh app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture()
def ws_app(app):
    """TestClient with lifespan running; use .websocket_connect("/ws")."""
    with TestClient(app) as tc:
        yield tc


@pytest.fixture()
def standalone_relay() -> BroadcastRelay:
    """Relay with no app around it, capacity 3."""
    return BroadcastRelay(RelayState(history_capacity=3))


@pytest.fixture()
def make_session():
    """Factory for sessions with readable ids."""
    def _make(name: str, outbox_size: int = 16) -> Session:
        return Session(outbox_size=outbox_size, session_id=name)
    return _make


@pytest.fixture()
def launches():
    """Drain a session and return the events of its queued launch messages."""
    def _launches(session: Session) -> list[dict]:
        return [m["event"] for m in session.drain() if m["type"] == "launch"]
    return _launches
