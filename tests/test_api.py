"""HTTP API tests: health, history, launch."""

import pytest
from fastapi.testclient import TestClient

from fireworks_relay.config import Settings
from fireworks_relay.main import create_app


@pytest.mark.asyncio
async def test_health_returns_ok(client):
    """Health endpoint should return status, version and relay gauges."""
    resp = await client.get("/api/v1/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "healthy"
    assert data["server"] == "ok"
    assert "version" in data
    assert data["connections"] == 0
    assert data["history_size"] == 0
    assert data["history_capacity"] == 3


@pytest.mark.asyncio
async def test_history_starts_empty(client):
    resp = await client.get("/api/v1/history")
    assert resp.status_code == 200
    assert resp.json() == {"events": [], "capacity": 3}


@pytest.mark.asyncio
async def test_launch_is_recorded(client):
    resp = await client.post(
        "/api/v1/launch",
        json={"t": 1, "x": 0.3, "y": 0.6, "shape": "ring", "col": {"r": 1, "g": 2, "b": 3}},
    )
    assert resp.status_code == 202
    data = resp.json()
    assert data["accepted"] is True
    assert data["recipients"] == 0
    assert data["event"]["shape"] == "ring"

    history = (await client.get("/api/v1/history")).json()["events"]
    assert history == [data["event"]]


@pytest.mark.asyncio
async def test_launch_history_is_bounded(client):
    for t in range(5):
        await client.post("/api/v1/launch", json={"t": t})
    history = (await client.get("/api/v1/history")).json()["events"]
    assert [e["t"] for e in history] == [2, 3, 4]


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [42, "string", [1, 2], {"size": "huge"}])
async def test_malformed_launch_is_dropped_without_details(client, body):
    resp = await client.post("/api/v1/launch", json=body)
    assert resp.status_code == 202
    assert resp.json() == {"accepted": False}
    assert (await client.get("/api/v1/health")).json()["history_size"] == 0


@pytest.mark.asyncio
async def test_launch_without_body_is_dropped(client):
    resp = await client.post("/api/v1/launch")
    assert resp.status_code == 202
    assert resp.json() == {"accepted": False}


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [b"{not json", b"\xff\xfe", b"   "])
async def test_undecodable_launch_body_is_dropped(client, body):
    """Broken JSON gets the same silent drop, not a 422 with decoder details."""
    resp = await client.post(
        "/api/v1/launch",
        content=body,
        headers={"content-type": "application/json"},
    )
    assert resp.status_code == 202
    assert resp.json() == {"accepted": False}
    assert (await client.get("/api/v1/health")).json()["history_size"] == 0


def test_http_launch_reaches_websocket_sessions(ws_app):
    with ws_app.websocket_connect("/ws") as ws:
        ws.receive_json()
        resp = ws_app.post("/api/v1/launch", json={"t": 42, "from": "cli"})
        assert resp.json()["recipients"] == 1
        msg = ws.receive_json()
        assert msg["event"]["t"] == 42
        assert msg["event"]["from"] == "cli"


def test_health_counts_connections(ws_app):
    with ws_app.websocket_connect("/ws") as a, ws_app.websocket_connect("/ws") as b:
        a.receive_json()
        b.receive_json()
        assert ws_app.get("/api/v1/health").json()["connections"] == 2


def test_static_dir_is_served_without_shadowing_api(tmp_path):
    (tmp_path / "index.html").write_text("<html>fireworks</html>")
    app = create_app(Settings(static_dir=str(tmp_path)))
    with TestClient(app) as tc:
        assert "fireworks" in tc.get("/").text
        assert tc.get("/api/v1/health").status_code == 200
        with tc.websocket_connect("/ws") as ws:
            assert ws.receive_json()["type"] == "history"


def test_settings_reject_zero_capacity():
    with pytest.raises(ValueError):
        Settings(history_capacity=0)
