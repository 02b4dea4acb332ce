"""FastAPI application factory.

Learn: App factory pattern: create_app() returns a configured FastAPI
instance. The relay state (history + connected sessions) is built here, once
per app, and stored on app.state so every handler shares the same instance
through the get_relay dependency. Lifespan only logs and tears down.
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from fireworks_relay import __version__
from fireworks_relay.api import api_router
from fireworks_relay.config import Settings, settings as default_settings
from fireworks_relay.relay.relay import BroadcastRelay, RelayState

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Learn: Anything before `yield` runs at startup, after `yield` runs at
    shutdown. History is never persisted, so shutdown just disconnects
    whoever is still attached.
    """
    settings: Settings = app.state.settings
    logger.info(
        "fireworks.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
        history_capacity=settings.history_capacity,
    )

    yield

    closed = app.state.relay.close_all()
    logger.info("fireworks.shutdown", sessions_closed=closed)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build and return the FastAPI application."""
    settings = settings or default_settings

    app = FastAPI(
        title="Fireworks Relay",
        description="Real-time firework broadcast with late-joiner replay",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.relay = BroadcastRelay(RelayState(settings.history_capacity))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount API routes
    app.include_router(api_router)

    # Mount WebSocket route
    from fireworks_relay.realtime.websocket import router as ws_router
    app.include_router(ws_router)

    # Static front-end last, so it never shadows /api or /ws
    if settings.static_dir:
        app.mount(
            "/",
            StaticFiles(directory=settings.static_dir, html=True),
            name="static",
        )

    return app


# Default app instance (used by uvicorn: fireworks_relay.main:app)
app = create_app()
