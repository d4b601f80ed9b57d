"""
Due-set selection and bucket statistics.

Pure functions over a snapshot of the whole collection. Callers pass either
the mapping returned by ReviewStateStore.get_all() or any iterable of states.
"""

from collections.abc import Iterable, Mapping
from datetime import datetime, timedelta

from woerter.domain.constants import (
    DUE_THIS_WEEK_DAYS,
    LEARNING_REPETITIONS,
    MATURE_INTERVAL,
)
from woerter.domain.review.models import ReviewState, ReviewStats

StateCollection = Mapping[str, ReviewState] | Iterable[ReviewState]


def _iter_states(all_states: StateCollection) -> list[ReviewState]:
    if isinstance(all_states, Mapping):
        return list(all_states.values())
    return list(all_states)


def is_due(state: ReviewState, now: datetime) -> bool:
    return now >= state.next_review_at


def due_now(all_states: StateCollection, now: datetime) -> list[ReviewState]:
    """
    All due states, most overdue first.

    sorted() is stable, so ties keep enumeration order.
    """
    due = [s for s in _iter_states(all_states) if is_due(s, now)]
    return sorted(due, key=lambda s: s.next_review_at)


def due_within(all_states: StateCollection, now: datetime, days: int) -> int:
    """Count states scheduled in [now, now + days], both ends inclusive."""
    horizon = now + timedelta(days=days)
    return sum(1 for s in _iter_states(all_states) if now <= s.next_review_at <= horizon)


def bucket_of(state: ReviewState) -> str:
    """Classify a state as "learning", "young" or "mature"."""
    if state.repetitions < LEARNING_REPETITIONS:
        return "learning"
    if state.interval >= MATURE_INTERVAL:
        return "mature"
    return "young"


def bucket_stats(all_states: StateCollection, now: datetime) -> ReviewStats:
    states = _iter_states(all_states)
    counts = {"learning": 0, "young": 0, "mature": 0}
    for state in states:
        counts[bucket_of(state)] += 1

    return ReviewStats(
        total=len(states),
        due_today=len(due_now(states, now)),
        due_this_week=due_within(states, now, DUE_THIS_WEEK_DAYS),
        mature=counts["mature"],
        young=counts["young"],
        learning=counts["learning"],
    )
