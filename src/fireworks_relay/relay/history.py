"""History buffer: the bounded replay that late joiners receive.

Learn: A deque with maxlen gives strict FIFO eviction in O(1). The lock makes
append and snapshot atomic with respect to each other, so a snapshot never
sees a half-applied append and concurrent appends are never lost. Arrival
order at the buffer is the order of record; sender timestamps are ignored.
"""

from collections import deque
from threading import Lock

from fireworks_relay.schemas.event import FireworkEvent


class HistoryBuffer:
    """Keep the most recent `capacity` events, oldest first."""

    def __init__(self, capacity: int = 120) -> None:
        if capacity < 1:
            raise ValueError(f"history capacity must be >= 1, got {capacity}")
        self._events: deque[FireworkEvent] = deque(maxlen=capacity)
        self._lock = Lock()

    @property
    def capacity(self) -> int:
        return self._events.maxlen

    def append(self, event: FireworkEvent) -> None:
        """Add at the tail; the oldest event is evicted once full."""
        with self._lock:
            self._events.append(event)

    def snapshot(self) -> list[FireworkEvent]:
        """Independent copy of the current contents in insertion order."""
        with self._lock:
            return list(self._events)

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
