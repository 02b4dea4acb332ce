"""Launch API: publish a firework without holding a WebSocket open.

Learn: The payload goes through exactly the same path as a WebSocket launch
(validate → history → fan-out). Malformed payloads are dropped silently here
too: the response says accepted=false and nothing else, never a 4xx with
validation details. The body is parsed by hand so that even undecodable JSON
never reaches FastAPI's 422 handler.
"""

from fastapi import APIRouter, Depends, Request

from fireworks_relay.dependencies import get_relay
from fireworks_relay.relay.relay import BroadcastRelay

router = APIRouter()


@router.post("/launch", status_code=202)
async def launch(request: Request, relay: BroadcastRelay = Depends(get_relay)):
    """Validate and broadcast one firework to every connected session."""
    try:
        payload = await request.json()
    except ValueError:
        # Empty or undecodable body; the validator rejects None
        payload = None

    result = relay.publish(payload, sender="http")
    if result is None:
        return {"accepted": False}
    return {
        "accepted": True,
        "event": result.event.to_wire(),
        "recipients": result.recipients,
    }
