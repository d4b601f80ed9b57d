# Application Scheduling Package
from .due_set import bucket_stats, due_now, due_within, is_due
from .formatting import format_next_review
from .migration import migrate, needs_migration, run_migration
from .service import ReviewService
from .sm2 import adjust_quality, advance, clamp_quality, initialize_review_state

__all__ = [
    "advance",
    "adjust_quality",
    "clamp_quality",
    "initialize_review_state",
    "is_due",
    "due_now",
    "due_within",
    "bucket_stats",
    "migrate",
    "needs_migration",
    "run_migration",
    "format_next_review",
    "ReviewService",
]
