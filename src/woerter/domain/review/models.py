"""
Domain models for review scheduling.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum


class Quality(IntEnum):
    """How well the learner recalled an item (SM-2 scale)."""

    BLACKOUT = 0  # Complete blackout
    WRONG = 1  # Incorrect, remembered once the answer was shown
    WRONG_FAMILIAR = 2  # Incorrect, but the answer felt familiar
    HARD = 3  # Correct with serious difficulty
    GOOD = 4  # Correct after some hesitation
    EASY = 5  # Perfect recall


@dataclass(frozen=True)
class ReviewState:
    """
    Scheduling state for a single vocabulary item.

    Attributes:
        item_key: Canonical word form; never changes.
        easiness: Interval growth multiplier, never below 1.3.
        interval: Current gap in days (0 only before the first review).
        repetitions: Consecutive successful reviews since the last lapse.
        next_review_at: When the item becomes due.
        last_review_at: When the item was last reviewed (or created).
        last_quality: Most recent rating, None until the first review.
    """

    item_key: str
    easiness: float
    interval: int
    repetitions: int
    next_review_at: datetime
    last_review_at: datetime
    last_quality: int | None = None


@dataclass(frozen=True)
class ReviewStats:
    """Bucket counts over the whole collection."""

    total: int
    due_today: int
    due_this_week: int
    mature: int
    young: int
    learning: int
