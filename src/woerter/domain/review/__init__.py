# Domain Review Package
from .models import Quality, ReviewState, ReviewStats
from .ports import LegacyProgressSource, ReviewStateStore

__all__ = [
    "Quality",
    "ReviewState",
    "ReviewStats",
    "ReviewStateStore",
    "LegacyProgressSource",
]
