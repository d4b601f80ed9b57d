"""
One-time migration of the pre-scheduler "learned" list.

Each learned item is treated as if it had just been reviewed once
successfully, so it comes due tomorrow instead of flooding today's queue.
"""

import logging
from collections.abc import Iterable
from datetime import datetime, timedelta

from woerter.domain.clock import Clock
from woerter.domain.constants import (
    INITIAL_EASINESS,
    MIGRATED_INTERVAL,
    MIGRATED_REPETITIONS,
)
from woerter.domain.review.models import ReviewState
from woerter.domain.review.ports import LegacyProgressSource, ReviewStateStore

logger = logging.getLogger(__name__)


def migrate(learned_item_keys: Iterable[str], now: datetime) -> dict[str, ReviewState]:
    """
    Synthesize review states for already-learned items.

    Pure: the same inputs always give the same output. Gating is the
    caller's job (see needs_migration).
    """
    next_review_at = now + timedelta(days=MIGRATED_INTERVAL)
    return {
        key: ReviewState(
            item_key=key,
            easiness=INITIAL_EASINESS,
            interval=MIGRATED_INTERVAL,
            repetitions=MIGRATED_REPETITIONS,
            next_review_at=next_review_at,
            last_review_at=now,
            last_quality=None,
        )
        for key in learned_item_keys
    }


def needs_migration(store: ReviewStateStore, legacy: LegacyProgressSource) -> bool:
    """
    Migration runs at most once: never after the completion flag is set,
    never over existing scheduler state, and only with something to migrate.
    """
    if legacy.is_migrated():
        return False
    if store.exists_any():
        return False
    return bool(legacy.get_learned_keys())


def run_migration(
    store: ReviewStateStore,
    legacy: LegacyProgressSource,
    clock: Clock,
) -> int:
    """
    Apply the gated migration and set the completion flag.

    Returns:
        Number of items migrated (0 when the gate is closed).
    """
    if not needs_migration(store, legacy):
        logger.debug("Legacy migration not needed")
        return 0

    learned = legacy.get_learned_keys()
    logger.info(f"Migrating {len(learned)} learned items to review state...")

    states = migrate(learned, clock.now())
    # All states land in one write; a failure leaves the store empty and the gate open.
    store.put_many(states)
    legacy.mark_migrated()

    logger.info(f"Legacy migration completed: {len(states)} items")
    return len(states)
