"""
Store Factory
Centralizes the logic for selecting the review-state store and clock.
"""

from datetime import datetime

from woerter.application.config import AppConfig
from woerter.domain.clock import Clock
from woerter.infrastructure.adapters.review_state.json_store import JsonFileReviewStateStore
from woerter.infrastructure.adapters.review_state.memory_store import (
    InMemoryReviewStateStore,
)
from woerter.infrastructure.clock import FixedClock, SystemClock


def get_review_store(
    config: AppConfig,
) -> JsonFileReviewStateStore | InMemoryReviewStateStore:
    """
    Returns the store implementation selected by config.

    Both adapters also implement LegacyProgressSource.
    """
    if config.backend == "memory":
        return InMemoryReviewStateStore()
    return JsonFileReviewStateStore(config.state_file)


def get_clock(at: datetime | None = None) -> Clock:
    """A frozen clock when a timestamp is given, the system clock otherwise."""
    if at is not None:
        return FixedClock(at)
    return SystemClock()
