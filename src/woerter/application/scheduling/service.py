"""
Review Service — Application layer orchestrator.

Coordinates the review-state store, the clock and the pure scheduling
functions: load state, advance it, write it back.
"""

import logging

from woerter.domain.clock import Clock
from woerter.domain.constants import SKIP_QUALITY
from woerter.domain.exceptions import MissingReviewStateError
from woerter.domain.review.models import ReviewState, ReviewStats
from woerter.domain.review.ports import LegacyProgressSource, ReviewStateStore
from woerter.infrastructure.clock import SystemClock

from .due_set import bucket_stats, due_now, due_within
from .migration import run_migration
from .sm2 import adjust_quality, advance, initialize_review_state

logger = logging.getLogger(__name__)


class ReviewService:
    """
    Application service for recording reviews and querying the due set.

    Depends on the ReviewStateStore and Clock abstractions, not on
    concrete adapters. Not safe for concurrent reviews of the same item;
    callers serialize per item key.
    """

    def __init__(self, store: ReviewStateStore, clock: Clock | None = None):
        """
        Args:
            store: The repository (port) holding review state.
            clock: Source of "now"; defaults to the system UTC clock.
        """
        self._store = store
        self._clock = clock or SystemClock()

    @property
    def clock(self) -> Clock:
        return self._clock

    def get_state(self, item_key: str) -> ReviewState | None:
        return self._store.get(item_key)

    def require_state(self, item_key: str) -> ReviewState:
        state = self._store.get(item_key)
        if state is None:
            raise MissingReviewStateError(item_key)
        return state

    def record_review(
        self,
        item_key: str,
        quality: int,
        answered_correctly: bool | None = None,
    ) -> ReviewState:
        """
        Apply one review to an item and persist the result.

        An item seen for the first time starts from the initial state.

        Args:
            item_key: The reviewed item.
            quality: Learner's self-rating (0-5, clamped).
            answered_correctly: Outcome of answer grading, if any. A wrong
                answer caps the rating at 2.

        Returns:
            The newly stored ReviewState.
        """
        now = self._clock.now()
        state = self._store.get(item_key)
        if state is None:
            logger.debug(f"First review of '{item_key}'")
            state = initialize_review_state(item_key, now)

        effective = adjust_quality(quality, answered_correctly)
        updated = advance(state, effective, now)
        self._store.put(item_key, updated)

        logger.info(
            f"Reviewed '{item_key}' q={updated.last_quality} "
            f"interval={updated.interval}d reps={updated.repetitions}"
        )
        return updated

    def skip(self, item_key: str) -> ReviewState:
        """Skipping a scheduled item counts as a poor recall."""
        self.require_state(item_key)
        return self.record_review(item_key, SKIP_QUALITY)

    def due_items(self, limit: int | None = None) -> list[ReviewState]:
        if limit is not None and limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")
        due = due_now(self._store.get_all(), self._clock.now())
        if limit is not None:
            return due[:limit]
        return due

    def upcoming_count(self, days: int) -> int:
        return due_within(self._store.get_all(), self._clock.now(), days)

    def stats(self) -> ReviewStats:
        return bucket_stats(self._store.get_all(), self._clock.now())

    def bootstrap(self, legacy: LegacyProgressSource) -> int:
        """Run the one-time legacy migration if it is still pending."""
        return run_migration(self._store, legacy, self._clock)
