"""Pydantic schemas for firework events.

Learn: Two shapes live here:
- FireworkEvent: the immutable, already-validated record that goes into
  history and out to every participant.
- LaunchPayload: the lenient inbound shape. It only coerces types; range
  clamping and defaulting happen in relay.validator so a noisy client never
  gets an error back.

Wire names are short (t, x, y, col, from) to keep frames small.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

# ─── Ranges ───────────────────────────────────────────────

POSITION_MIN = 0.0
POSITION_MAX = 1.0
SIZE_MIN = 0.4
SIZE_MAX = 2.2
CHANNEL_MIN = 0
CHANNEL_MAX = 255

DEFAULT_POSITION = (0.5, 0.5)
DEFAULT_SIZE = 1.0
DEFAULT_COLOR = (255, 255, 255)
ORIGIN_MAX_LENGTH = 64


class Shape(str, Enum):
    BURST = "burst"
    RING = "ring"
    STAR = "star"
    SPIRAL = "spiral"

    @classmethod
    def parse(cls, value: Any) -> "Shape":
        """Unknown or non-string shapes fall back to BURST."""
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.BURST


# ─── Validated event ──────────────────────────────────────


class Color(BaseModel):
    r: int = Field(ge=CHANNEL_MIN, le=CHANNEL_MAX)
    g: int = Field(ge=CHANNEL_MIN, le=CHANNEL_MAX)
    b: int = Field(ge=CHANNEL_MIN, le=CHANNEL_MAX)

    model_config = ConfigDict(frozen=True)


class FireworkEvent(BaseModel):
    """One burst, exactly as the server recorded it."""

    t: int
    x: float = Field(ge=POSITION_MIN, le=POSITION_MAX)
    y: float = Field(ge=POSITION_MIN, le=POSITION_MAX)
    size: float = Field(ge=SIZE_MIN, le=SIZE_MAX)
    shape: Shape
    col: Color
    origin: Optional[str] = Field(None, alias="from")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)

    @property
    def color(self) -> tuple[int, int, int]:
        return (self.col.r, self.col.g, self.col.b)

    def to_wire(self) -> dict[str, Any]:
        """Serialize with wire aliases, omitting `from` when unset."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ─── Inbound payload ──────────────────────────────────────


class ColorPayload(BaseModel):
    # NaN and infinity cannot be clamped, so they fail coercion instead.
    r: Optional[float] = Field(None, allow_inf_nan=False)
    g: Optional[float] = Field(None, allow_inf_nan=False)
    b: Optional[float] = Field(None, allow_inf_nan=False)

    model_config = ConfigDict(extra="ignore")


class LaunchPayload(BaseModel):
    """What a client is allowed to send. Every field is optional."""

    t: Optional[int] = None
    x: Optional[float] = Field(None, allow_inf_nan=False)
    y: Optional[float] = Field(None, allow_inf_nan=False)
    size: Optional[float] = Field(None, allow_inf_nan=False)
    shape: Any = None
    col: Optional[ColorPayload] = None
    origin: Any = Field(None, alias="from")

    model_config = ConfigDict(extra="ignore")
