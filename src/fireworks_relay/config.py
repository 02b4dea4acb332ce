"""Application configuration via environment variables.

Uses pydantic-settings to load config from env vars with FIREWORKS_ prefix.
No config files: everything comes from the environment (12-factor style).

Learn: history_capacity is the only knob the relay itself reads. Everything
else configures the server around it (listen address, CORS, static files).
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """All app configuration. Set via FIREWORKS_* env vars."""

    # Server
    environment: str = "development"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = Field(3500, ge=1, le=65535)

    # Relay
    history_capacity: int = Field(120, ge=1)  # last N fireworks replayed to late joiners
    outbox_size: int = Field(256, ge=1)  # per-session queue of undelivered messages

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3500",
        "http://localhost:5173",
    ]

    # Optional static front-end (e.g. the p5.js sketch in public/)
    static_dir: str = ""

    model_config = {"env_prefix": "FIREWORKS_"}


# Singleton: import this everywhere
settings = Settings()
