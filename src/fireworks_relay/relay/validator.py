"""Event validator: turn an untrusted payload into a FireworkEvent.

Learn: The relay is an open broadcast endpoint, so every payload is treated
as noise until proven otherwise. Validation never raises. It returns a tagged
result instead:

- Valid(event)      the payload was coerced, clamped and defaulted
- Rejected(reason)  the payload was not a record, or a field had the wrong type

Out-of-range numbers are not errors. They are clamped to the nearest bound,
because a best-effort visual medium prefers showing something over showing
nothing.
"""

import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

import structlog
from pydantic import ValidationError

from fireworks_relay.schemas.event import (
    CHANNEL_MAX,
    CHANNEL_MIN,
    DEFAULT_COLOR,
    DEFAULT_POSITION,
    DEFAULT_SIZE,
    ORIGIN_MAX_LENGTH,
    POSITION_MAX,
    POSITION_MIN,
    SIZE_MAX,
    SIZE_MIN,
    Color,
    FireworkEvent,
    LaunchPayload,
    Shape,
)

logger = structlog.get_logger()


@dataclass(frozen=True)
class Valid:
    event: FireworkEvent


@dataclass(frozen=True)
class Rejected:
    reason: str


ValidationResult = Union[Valid, Rejected]


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _channel(value: Optional[float], default: int) -> int:
    if value is None:
        return default
    return int(_clamp(round(value), CHANNEL_MIN, CHANNEL_MAX))


def _origin(value: Any) -> Optional[str]:
    if not isinstance(value, str) or not value:
        return None
    return value[:ORIGIN_MAX_LENGTH]


def _now_ms() -> int:
    return int(time.time() * 1000)


def validate_event(raw: Any) -> ValidationResult:
    """Validate one inbound launch payload. Pure, never raises."""
    if raw is None:
        return Rejected("missing payload")
    if not isinstance(raw, Mapping):
        return Rejected(f"expected an object, got {type(raw).__name__}")

    try:
        payload = LaunchPayload.model_validate(dict(raw))
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        return Rejected(f"invalid fields: {', '.join(fields)}")

    x = DEFAULT_POSITION[0] if payload.x is None else payload.x
    y = DEFAULT_POSITION[1] if payload.y is None else payload.y
    size = DEFAULT_SIZE if payload.size is None else payload.size

    col = payload.col
    r, g, b = DEFAULT_COLOR
    if col is not None:
        r, g, b = _channel(col.r, r), _channel(col.g, g), _channel(col.b, b)

    event = FireworkEvent(
        t=_now_ms() if payload.t is None else payload.t,
        x=_clamp(x, POSITION_MIN, POSITION_MAX),
        y=_clamp(y, POSITION_MIN, POSITION_MAX),
        size=_clamp(size, SIZE_MIN, SIZE_MAX),
        shape=Shape.parse(payload.shape),
        col=Color(r=r, g=g, b=b),
        origin=_origin(payload.origin),
    )
    return Valid(event)


def accept(raw: Any) -> Optional[FireworkEvent]:
    """Return the validated event, or None (logged at debug) on rejection."""
    result = validate_event(raw)
    if isinstance(result, Rejected):
        logger.debug("relay.event_rejected", reason=result.reason)
        return None
    return result.event
