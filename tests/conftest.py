from datetime import datetime, timezone

import pytest

from woerter.domain.review.models import ReviewState
from woerter.infrastructure.adapters.review_state.memory_store import InMemoryReviewStateStore
from woerter.infrastructure.clock import FixedClock

T0 = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return T0


@pytest.fixture
def clock():
    return FixedClock(T0)


@pytest.fixture
def memory_store():
    return InMemoryReviewStateStore()


@pytest.fixture
def make_state():
    """Factory for ReviewState with sensible defaults."""

    def _make(item_key="Haus", **overrides):
        fields = dict(
            item_key=item_key,
            easiness=2.5,
            interval=0,
            repetitions=0,
            next_review_at=T0,
            last_review_at=T0,
            last_quality=None,
        )
        fields.update(overrides)
        return ReviewState(**fields)

    return _make


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config/state files
    monkeypatch.setenv("HOME", str(home))
    for var in ("WOERTER_STATE_FILE", "WOERTER_BACKEND", "WOERTER_UPCOMING_DAYS"):
        monkeypatch.delenv(var, raising=False)
    return home
