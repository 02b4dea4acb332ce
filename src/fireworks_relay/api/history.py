"""History API: read-only view of the replay buffer.

Learn: This is the same snapshot a new WebSocket session receives on
connect, exposed over HTTP for dashboards and the CLI.
"""

from fastapi import APIRouter, Depends

from fireworks_relay.dependencies import get_relay
from fireworks_relay.relay.relay import BroadcastRelay

router = APIRouter()


@router.get("/history")
async def get_history(relay: BroadcastRelay = Depends(get_relay)):
    """Buffered events, oldest first."""
    events = relay.state.history.snapshot()
    return {
        "events": [event.to_wire() for event in events],
        "capacity": relay.state.history.capacity,
    }
