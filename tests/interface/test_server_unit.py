import inspect
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from woerter.consts import VERSION
from woerter.infrastructure.adapters.review_state.json_store import JsonFileReviewStateStore
from woerter.server import (
    _memory_store,
    app,
    get_due,
    get_state,
    get_stats,
    post_migrate,
    post_review,
)

client = TestClient(app)


@pytest.fixture
def state_file(mock_home, tmp_path, monkeypatch):
    path = tmp_path / "state.json"
    monkeypatch.setenv("WOERTER_STATE_FILE", str(path))
    return path


@pytest.fixture
def seeded(state_file, make_state):
    now = datetime.now(timezone.utc)
    store = JsonFileReviewStateStore(state_file)
    store.put("Haus", make_state("Haus", next_review_at=now - timedelta(days=1)))
    store.put("Auto", make_state("Auto", next_review_at=now - timedelta(days=3)))
    store.put(
        "Baum",
        make_state("Baum", repetitions=4, interval=30, next_review_at=now + timedelta(days=20)),
    )
    return store


def test_health_check():
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"] == VERSION


def test_get_version():
    response = client.get("/version")
    assert response.status_code == 200
    assert response.json() == {"version": VERSION}


def test_review_then_fetch_state(state_file):
    response = client.post("/review", json={"item_key": "Haus", "quality": 4})

    assert response.status_code == 200
    data = response.json()
    assert data["item_key"] == "Haus"
    assert data["interval"] == 1
    assert data["repetitions"] == 1
    assert data["last_quality"] == 4

    fetched = client.get("/states/Haus")
    assert fetched.status_code == 200
    assert fetched.json()["interval"] == 1


def test_review_wrong_answer(state_file):
    response = client.post(
        "/review", json={"item_key": "Haus", "quality": 5, "answered_correctly": False}
    )
    assert response.status_code == 200
    assert response.json()["last_quality"] == 2


def test_unknown_state_is_404(state_file):
    response = client.get("/states/Nichts")
    assert response.status_code == 404
    assert "Nichts" in response.json()["detail"]


def test_due_endpoint(seeded):
    response = client.get("/due")
    assert response.status_code == 200
    assert [d["item_key"] for d in response.json()] == ["Auto", "Haus"]

    limited = client.get("/due", params={"limit": 1})
    assert [d["item_key"] for d in limited.json()] == ["Auto"]


@pytest.mark.parametrize("limit", [0, -1])
def test_due_rejects_non_positive_limit(seeded, limit):
    response = client.get("/due", params={"limit": limit})
    assert response.status_code == 422


def test_stats_endpoint(seeded):
    response = client.get("/stats")
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 3
    assert data["due_today"] == 2
    assert data["mature"] == 1
    assert data["learning"] == 2


def test_corrupt_state_file_is_500(state_file):
    state_file.write_text("{broken")
    response = client.get("/stats")
    assert response.status_code == 500
    assert "invalid JSON" in response.json()["detail"]


def test_migrate_endpoint(state_file):
    JsonFileReviewStateStore(state_file).import_learned_items(["Haus", "Auto"])

    first = client.post("/migrate")
    second = client.post("/migrate")

    assert first.json() == {"migrated": 2}
    assert second.json() == {"migrated": 0}


@pytest.fixture
def memory_backend(mock_home, monkeypatch):
    monkeypatch.setenv("WOERTER_BACKEND", "memory")
    _memory_store.cache_clear()
    yield
    _memory_store.cache_clear()


def test_memory_backend_keeps_writes_between_requests(memory_backend):
    response = client.post("/review", json={"item_key": "Haus", "quality": 4})
    assert response.status_code == 200

    fetched = client.get("/states/Haus")
    assert fetched.status_code == 200
    assert fetched.json()["repetitions"] == 1

    assert client.get("/stats").json()["total"] == 1


@pytest.mark.parametrize("handler", [get_due, get_stats, get_state, post_review, post_migrate])
def test_store_handlers_run_in_threadpool(handler):
    assert not inspect.iscoroutinefunction(handler)
