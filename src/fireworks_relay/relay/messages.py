"""Wire envelopes for the WebSocket channel.

Every frame is a JSON object with a "type" key:

    {"type": "launch", "event": {...}}
    {"type": "history", "session_id": "...", "events": [{...}, ...]}
    {"type": "pong"}
"""

import json
from collections.abc import Iterable
from typing import Any, Optional

from fireworks_relay.events.types import HISTORY, LAUNCH, PONG
from fireworks_relay.schemas.event import FireworkEvent


def launch_message(event: FireworkEvent) -> dict[str, Any]:
    return {"type": LAUNCH, "event": event.to_wire()}


def history_message(events: Iterable[FireworkEvent], session_id: str) -> dict[str, Any]:
    return {
        "type": HISTORY,
        "session_id": session_id,
        "events": [event.to_wire() for event in events],
    }


def pong_message() -> dict[str, Any]:
    return {"type": PONG}


def parse_client_frame(text: str) -> Optional[tuple[str, Any]]:
    """Decode a client frame into (type, payload), or None if unusable.

    A launch may wrap its event ({"type": "launch", "event": {...}}) or carry
    the fields inline next to "type"; both are accepted.
    """
    try:
        frame = json.loads(text)
    except ValueError:
        return None
    if not isinstance(frame, dict):
        return None
    kind = frame.get("type")
    if not isinstance(kind, str):
        return None
    if "event" in frame:
        payload = frame["event"]
    else:
        payload = {k: v for k, v in frame.items() if k != "type"}
    return kind, payload
