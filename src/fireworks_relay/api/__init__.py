"""API route aggregation.

All routers registered here get mounted in main.py under /api/v1.

Learn: There is no auth layer. The relay is an open broadcast medium, and
every route is either read-only or goes through the same validator as the
WebSocket channel.
"""

from fastapi import APIRouter

from fireworks_relay.api.health import router as health_router
from fireworks_relay.api.history import router as history_router
from fireworks_relay.api.launch import router as launch_router

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(health_router, tags=["health"])
api_router.include_router(history_router, tags=["history"])
api_router.include_router(launch_router, tags=["launch"])
