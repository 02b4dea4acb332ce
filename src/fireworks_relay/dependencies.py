"""FastAPI dependencies for reaching app-owned state.

Learn: HTTPConnection is the common base of Request and WebSocket, so the
same dependency works for HTTP routes and the WebSocket endpoint.
"""

from starlette.requests import HTTPConnection

from fireworks_relay.config import Settings
from fireworks_relay.relay.relay import BroadcastRelay


def get_relay(conn: HTTPConnection) -> BroadcastRelay:
    """The relay built by create_app()."""
    return conn.app.state.relay


def get_settings(conn: HTTPConnection) -> Settings:
    return conn.app.state.settings
