"""Health check endpoint.

Learn: The relay has no external dependencies (no database, no broker), so
health is just "the process answers" plus a few live gauges.
"""

from fastapi import APIRouter, Depends

from fireworks_relay import __version__
from fireworks_relay.dependencies import get_relay
from fireworks_relay.relay.relay import BroadcastRelay

router = APIRouter()


@router.get("/health")
async def health_check(relay: BroadcastRelay = Depends(get_relay)):
    """Report server status, connection count and history fill."""
    state = relay.state
    return {
        "status": "healthy",
        "server": "ok",
        "version": __version__,
        "connections": len(state.registry),
        "history_size": len(state.history),
        "history_capacity": state.history.capacity,
    }
