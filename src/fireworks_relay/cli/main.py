"""Fireworks CLI: run the relay, launch bursts, inspect history.

Usage:
    fireworks serve --port 3500                  # Run the relay server
    fireworks status                             # Health, connections, history fill
    fireworks history                            # Buffered events, oldest first
    fireworks launch --x 0.2 --y 0.7 --shape star --color 255,80,0
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import json
import os
import sys
from datetime import datetime, timezone
from typing import Optional

import click
import httpx

from fireworks_relay import __version__

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

DEFAULT_API_URL = "http://localhost:3500"
SHAPES = ("burst", "ring", "star", "spiral")


def _api_url() -> str:
    return os.environ.get("FIREWORKS_API_URL", DEFAULT_API_URL).rstrip("/")


def _client() -> httpx.AsyncClient:
    """Build an async HTTP client pointed at the relay."""
    return httpx.AsyncClient(base_url=_api_url(), timeout=10.0)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(coro):
    """Run an async coroutine from a synchronous Click handler.

    Handles nested event loops (e.g. when invoked via Click CliRunner
    inside an existing async context like tests) by offloading to a thread.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    else:
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()


def _parse_color(value: Optional[str]) -> Optional[dict]:
    """Parse "r,g,b" into the wire color object."""
    if value is None:
        return None
    parts = [p.strip() for p in value.split(",")]
    if len(parts) != 3:
        raise click.BadParameter("expected three comma-separated values, e.g. 255,120,0")
    try:
        r, g, b = (int(p) for p in parts)
    except ValueError:
        raise click.BadParameter("color channels must be integers") from None
    return {"r": r, "g": g, "b": b}


def _print_table(rows: list[dict], columns: list[tuple[str, str, int]]):
    """Print a simple ASCII table.

    columns: list of (header, dict_key, width)
    """
    header = "  ".join(h.ljust(w) for h, _, w in columns)
    click.secho(header, bold=True)
    click.echo("-" * len(header))
    for row in rows:
        line = "  ".join(str(row.get(k, "-"))[:w].ljust(w) for _, k, w in columns)
        click.echo(line)


def _event_row(event: dict) -> dict:
    col = event.get("col", {})
    t = event.get("t")
    when = (
        datetime.fromtimestamp(t / 1000, tz=timezone.utc).strftime("%H:%M:%S")
        if isinstance(t, int) else "-"
    )
    return {
        "time": when,
        "pos": f"{event.get('x', 0):.2f},{event.get('y', 0):.2f}",
        "size": f"{event.get('size', 0):.2f}",
        "shape": event.get("shape", "-"),
        "color": f"{col.get('r')},{col.get('g')},{col.get('b')}",
        "from": event.get("from", "-"),
    }


def _unreachable(e: httpx.HTTPError):
    click.secho(f"Error: relay not reachable at {_api_url()} ({e})", fg="red", err=True)
    sys.exit(1)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="fireworks")
def main():
    """Fireworks: real-time firework broadcast relay."""


# ---------------------------------------------------------------------------
# fireworks serve
# ---------------------------------------------------------------------------


@main.command()
@click.option("--host", default=None, help="Bind address (default: FIREWORKS_HOST)")
@click.option("--port", "-p", type=int, default=None, help="Port (default: FIREWORKS_PORT)")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the relay server with uvicorn."""
    import uvicorn

    from fireworks_relay.config import settings

    uvicorn.run(
        "fireworks_relay.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


# ---------------------------------------------------------------------------
# fireworks status
# ---------------------------------------------------------------------------


@main.command()
def status():
    """Show relay health, live connections and history fill."""
    _run(_status_impl())


async def _status_impl():
    async with _client() as c:
        try:
            r = await c.get("/api/v1/health")
            r.raise_for_status()
        except httpx.HTTPError as e:
            _unreachable(e)
        health = r.json()

    color = "green" if health.get("status") == "healthy" else "yellow"
    click.secho(f"Relay {health['version']} at {_api_url()}", bold=True)
    click.echo(f"  Status:       {click.style(health['status'], fg=color)}")
    click.echo(f"  Connections:  {health['connections']}")
    click.echo(f"  History:      {health['history_size']}/{health['history_capacity']}")


# ---------------------------------------------------------------------------
# fireworks history
# ---------------------------------------------------------------------------


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON")
def history(as_json: bool):
    """List buffered events, oldest first."""
    _run(_history_impl(as_json))


async def _history_impl(as_json: bool):
    async with _client() as c:
        try:
            r = await c.get("/api/v1/history")
            r.raise_for_status()
        except httpx.HTTPError as e:
            _unreachable(e)
        data = r.json()

    events = data["events"]
    if as_json:
        click.echo(json.dumps(events, indent=2))
        return
    if not events:
        click.echo("No fireworks yet.")
        return

    click.secho(f"History ({len(events)}/{data['capacity']}):", bold=True)
    click.echo()
    _print_table(
        [_event_row(e) for e in events],
        [
            ("TIME", "time", 8),
            ("POS", "pos", 9),
            ("SIZE", "size", 4),
            ("SHAPE", "shape", 6),
            ("COLOR", "color", 11),
            ("FROM", "from", 12),
        ],
    )


# ---------------------------------------------------------------------------
# fireworks launch
# ---------------------------------------------------------------------------


@main.command()
@click.option("--x", type=float, default=0.5, show_default=True, help="Horizontal position, 0..1")
@click.option("--y", type=float, default=0.5, show_default=True, help="Vertical position, 0..1")
@click.option("--size", "-s", type=float, default=1.0, show_default=True, help="Size, 0.4..2.2")
@click.option("--shape", type=click.Choice(SHAPES), default="burst", show_default=True)
@click.option("--color", "-c", help='Color as "r,g,b" (default: white)')
@click.option("--from", "origin", help="Attribution label shown by clients")
def launch(x: float, y: float, size: float, shape: str,
           color: Optional[str], origin: Optional[str]):
    """Launch one firework to every connected participant."""
    payload: dict = {"x": x, "y": y, "size": size, "shape": shape}
    col = _parse_color(color)
    if col:
        payload["col"] = col
    if origin:
        payload["from"] = origin
    _run(_launch_impl(payload))


async def _launch_impl(payload: dict):
    async with _client() as c:
        try:
            r = await c.post("/api/v1/launch", json=payload)
            r.raise_for_status()
        except httpx.HTTPError as e:
            _unreachable(e)
        result = r.json()

    if not result.get("accepted"):
        click.secho("Launch dropped by the relay.", fg="yellow")
        sys.exit(1)

    event = result["event"]
    row = _event_row(event)
    click.secho(
        f"Launched {row['shape']} at ({row['pos']}) size {row['size']} "
        f"color {row['color']} to {result['recipients']} participant(s)",
        fg="green",
    )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    main()
