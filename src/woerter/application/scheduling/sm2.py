"""
SM-2 scheduling algorithm.

Based on the SuperMemo SM-2 algorithm by Piotr Wozniak.
This is a pure computation module with no I/O: callers load a state,
call advance() and persist the returned record themselves.
"""

import logging
import math
from dataclasses import replace
from datetime import datetime, timedelta

from woerter.domain.constants import (
    FIRST_INTERVAL,
    INITIAL_EASINESS,
    LAPSE_INTERVAL,
    MAX_QUALITY,
    MIN_EASINESS,
    MIN_QUALITY,
    PASSING_QUALITY,
    SECOND_INTERVAL,
    WRONG_ANSWER_MAX_QUALITY,
)
from woerter.domain.review.models import ReviewState

logger = logging.getLogger(__name__)


def initialize_review_state(item_key: str, now: datetime) -> ReviewState:
    """Review state for an item that has never been reviewed; due immediately."""
    return ReviewState(
        item_key=item_key,
        easiness=INITIAL_EASINESS,
        interval=0,
        repetitions=0,
        next_review_at=now,
        last_review_at=now,
        last_quality=None,
    )


def clamp_quality(quality: int) -> int:
    clamped = max(MIN_QUALITY, min(MAX_QUALITY, int(quality)))
    if clamped != quality:
        logger.debug(f"Quality {quality} clamped to {clamped}")
    return clamped


def adjust_quality(quality: int, answered_correctly: bool | None) -> int:
    """
    Reconcile a self-rating with the graded answer.

    A wrong answer rated Hard or better is capped at WRONG_FAMILIAR so it
    still counts as a lapse. None means the answer was not graded.
    """
    if answered_correctly is False and quality >= PASSING_QUALITY:
        return min(quality, WRONG_ANSWER_MAX_QUALITY)
    return quality


def next_easiness(easiness: float, quality: int) -> float:
    """
    EF' = EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02)), floored at 1.3.

    There is no ceiling.
    """
    miss = MAX_QUALITY - quality
    return max(MIN_EASINESS, easiness + (0.1 - miss * (0.08 + miss * 0.02)))


def _round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; intervals round .5 upwards
    return math.floor(value + 0.5)


def advance(state: ReviewState, quality: int, now: datetime) -> ReviewState:
    """
    Compute the state that follows one review.

    Args:
        state: Current state. New items must come from initialize_review_state().
        quality: Recall rating; values outside 0-5 are clamped.
        now: Review timestamp.

    Returns:
        A new ReviewState; the input is not modified.
    """
    q = clamp_quality(quality)
    easiness = next_easiness(state.easiness, q)

    if q < PASSING_QUALITY:
        repetitions = 0
        interval = LAPSE_INTERVAL
    else:
        if state.repetitions == 0:
            interval = FIRST_INTERVAL
        elif state.repetitions == 1:
            interval = SECOND_INTERVAL
        else:
            interval = _round_half_up(state.interval * easiness)
        repetitions = state.repetitions + 1

    return replace(
        state,
        easiness=easiness,
        interval=interval,
        repetitions=repetitions,
        next_review_at=now + timedelta(days=interval),
        last_review_at=now,
        last_quality=q,
    )
