"""Tests for API endpoints over a temporary corpus."""

from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from clusterscope.corpus import load_corpus
from clusterscope.dependencies import get_corpus
from clusterscope.engine.scheduler import ManualFrameScheduler
from clusterscope.main import app
from clusterscope.sessions import SessionStore, get_session_store

DATASETS = {"SUV": "suv_points.json", "Pickup": "pu_points.json"}


def _client(data_dir, store: SessionStore):
    corpus = load_corpus(data_dir, DATASETS, "demos-mapping.json")
    app.dependency_overrides[get_corpus] = lambda: corpus
    app.dependency_overrides[get_session_store] = lambda: store
    return TestClient(app)


@pytest.fixture
def client(data_dir):
    store = SessionStore(8, scheduler_factory=ManualFrameScheduler)
    with _client(data_dir, store) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def live_client(data_dir):
    """Sessions animate on the test client's event loop."""
    with _client(data_dir, SessionStore(8)) as c:
        yield c
    app.dependency_overrides.clear()


def _sse_frames(text: str) -> list[dict]:
    frames = []
    for block in text.strip().split("\n\n"):
        lines = block.splitlines()
        if lines and lines[0] == "event: frame":
            frames.append(json.loads(lines[1][len("data: "):]))
    return frames


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["derivations_registered"] == 17


def test_datasets(client):
    response = client.get("/api/datasets")
    assert response.status_code == 200
    data = response.json()
    suv = data["datasets"][0]
    assert suv["name"] == "SUV"
    assert suv["record_count"] == 5
    assert suv["dropped_count"] == 3
    assert suv["models"] == ["Explorer", "Highlander", "Tahoe"]
    assert data["datasets"][1]["clusters"] == [0, 3]
    assert data["code_table_fields"] == ["GENDER", "ATT_TECH", "RES_STATE"]


def test_view_defaults(client):
    response = client.post("/api/view", json={})
    assert response.status_code == 200
    data = response.json()
    snap = data["snapshot"]
    assert snap["dataset"] == "SUV"
    assert snap["scope_count"] == 5
    assert snap["scope_title"] == "Selected Models (All)"
    assert len(snap["legend"]) == 3
    assert data["derivations_failed"] == 0
    assert data["processing_time_ms"] >= 0


def test_view_with_zoom(client):
    response = client.post("/api/view", json={"dataset": "Pickup", "cluster_zoom": 3})
    snap = response.json()["snapshot"]
    assert snap["scope_count"] == 2
    assert snap["scope_title"] == "Cluster C3"
    assert snap["hotspots"] == []


def test_view_with_state_focus(client):
    response = client.post("/api/view", json={"secondary_filter": {"kind": "state", "value": "Texas"}})
    snap = response.json()["snapshot"]
    assert snap["scope_count"] == 2
    assert snap["scope_title"] == "Selected Models (All) • Texas"


def test_view_attitudes_by_model(client):
    response = client.post(
        "/api/view",
        json={"grouping_mode": "model", "attitude_x": "STATE_SAFETY", "attitude_y": "LOYALTY"},
    )
    points = response.json()["snapshot"]["attitudes"]["points"]
    assert [p["label"] for p in points] == ["Explorer", "Highlander", "Tahoe"]


def test_view_unknown_dataset(client):
    response = client.post("/api/view", json={"dataset": "Sedan"})
    assert response.status_code == 404
    assert "Sedan" in response.json()["detail"]


def test_view_rejects_bad_params(client):
    assert client.post("/api/view", json={"collapse_t": 2}).status_code == 422
    assert client.post("/api/view", json={"grouping_mode": "state"}).status_code == 422
    assert client.post("/api/view", json={"secondary_filter": {"kind": "zip", "value": "1"}}).status_code == 422


def test_session_lifecycle(client):
    response = client.post("/api/sessions")
    assert response.status_code == 200
    session_id = response.json()["session_id"]

    response = client.get(f"/api/sessions/{session_id}")
    assert response.json()["snapshot"]["dataset"] == "SUV"

    assert client.delete(f"/api/sessions/{session_id}").status_code == 204
    assert client.get(f"/api/sessions/{session_id}").status_code == 404
    assert client.delete(f"/api/sessions/{session_id}").status_code == 404


def test_session_with_initial_params(client):
    response = client.post("/api/sessions", json={"params": {"dataset": "Pickup", "collapse_t": 0.5}})
    snap = response.json()["snapshot"]
    assert snap["dataset"] == "Pickup"
    assert snap["collapse_t"] == 0.5


def test_session_param_updates(client):
    session_id = client.post("/api/sessions").json()["session_id"]

    snap = client.post(f"/api/sessions/{session_id}/params", json={"cluster_zoom": 0}).json()["snapshot"]
    assert snap["scope_title"] == "Cluster C0"
    assert snap["domain"]["animating"] is True
    assert snap["domain"]["target_x"] == pytest.approx([-0.1, 2.1])

    # Omitted fields keep their value, explicit null clears
    snap = client.post(f"/api/sessions/{session_id}/params", json={"collapse_t": 1}).json()["snapshot"]
    assert snap["cluster_zoom"] == 0
    snap = client.post(f"/api/sessions/{session_id}/params", json={"cluster_zoom": None}).json()["snapshot"]
    assert snap["cluster_zoom"] is None
    assert snap["scope_count"] == 5


def test_session_model_intents(client):
    session_id = client.post("/api/sessions").json()["session_id"]
    base = f"/api/sessions/{session_id}/models"

    snap = client.post(f"{base}/toggle", json={"model": "Tahoe"}).json()["snapshot"]
    assert snap["selected_models"] == ["Tahoe"]
    snap = client.post(f"{base}/all").json()["snapshot"]
    assert snap["selected_models"] == ["Explorer", "Highlander", "Tahoe"]
    snap = client.post(f"{base}/clear").json()["snapshot"]
    assert snap["selected_models"] == []


def test_unknown_session(client):
    assert client.get("/api/sessions/nope").status_code == 404
    assert client.post("/api/sessions/nope/params", json={}).status_code == 404
    assert client.get("/api/sessions/nope/domain/stream").status_code == 404


def test_session_eviction(data_dir):
    store = SessionStore(2, scheduler_factory=ManualFrameScheduler)
    with _client(data_dir, store) as c:
        ids = [c.post("/api/sessions").json()["session_id"] for _ in range(3)]
        assert len(store) == 2
        assert c.get(f"/api/sessions/{ids[0]}").status_code == 404
        assert c.get(f"/api/sessions/{ids[2]}").status_code == 200
    app.dependency_overrides.clear()


def test_stream_idle_session(client):
    session_id = client.post("/api/sessions").json()["session_id"]
    response = client.get(f"/api/sessions/{session_id}/domain/stream")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/event-stream")

    frames = _sse_frames(response.text)
    assert len(frames) == 1
    assert frames[0]["done"] is True
    assert "event: done" in response.text


def test_stream_follows_animation(live_client):
    session_id = live_client.post("/api/sessions").json()["session_id"]
    snap = live_client.post(f"/api/sessions/{session_id}/params", json={"cluster_zoom": 1}).json()["snapshot"]

    response = live_client.get(f"/api/sessions/{session_id}/domain/stream")
    frames = _sse_frames(response.text)
    assert frames
    assert frames[-1]["done"] is True
    assert frames[-1]["x"] == pytest.approx(snap["domain"]["target_x"])
    assert frames[-1]["y"] == pytest.approx(snap["domain"]["target_y"])
