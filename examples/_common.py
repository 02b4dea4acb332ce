"""
Shared helpers for Fireworks Relay examples.

Handles the health check so each example can focus on its own show.
"""

import sys

import httpx

BASE = "http://localhost:3500/api/v1"


def check_backend() -> dict:
    """Verify the relay is reachable and return its health report."""
    try:
        resp = httpx.get(f"{BASE}/health", timeout=5)
    except httpx.ConnectError:
        print(f"ERROR: Relay not reachable at {BASE}")
        print("Start it with:  fireworks serve --port 3500")
        sys.exit(1)

    if resp.status_code != 200:
        print(f"ERROR: Health check returned {resp.status_code}")
        sys.exit(1)

    health = resp.json()
    print("Relay health:")
    print(f"  Connections: {health['connections']}")
    print(f"  History:     {health['history_size']}/{health['history_capacity']}")
    return health


def launch(**fields) -> dict:
    """POST one firework and return the relay's response."""
    resp = httpx.post(f"{BASE}/launch", json=fields, timeout=5)
    resp.raise_for_status()
    return resp.json()
