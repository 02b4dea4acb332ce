"""Real-time relay: validation, bounded history, fan-out.

Learn: Events flow in one direction through the relay:
1. validator   raw payload → FireworkEvent (or a silent rejection)
2. history     bounded FIFO of accepted events, replayed to late joiners
3. registry    every connected Session
4. relay       append to history, then queue for every session

Nothing here knows about WebSockets; realtime.websocket adapts the transport.
"""

from fireworks_relay.relay.history import HistoryBuffer
from fireworks_relay.relay.registry import ConnectionRegistry
from fireworks_relay.relay.relay import BroadcastRelay, FanoutResult, RelayState
from fireworks_relay.relay.session import Session
from fireworks_relay.relay.validator import Rejected, Valid, validate_event

__all__ = [
    "BroadcastRelay",
    "ConnectionRegistry",
    "FanoutResult",
    "HistoryBuffer",
    "Rejected",
    "RelayState",
    "Session",
    "Valid",
    "validate_event",
]
