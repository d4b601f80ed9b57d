import math
from datetime import datetime

_SECONDS_PER_DAY = 86400


def _plural(count: int, unit: str) -> str:
    return f"in {count} {unit}" + ("" if count == 1 else "s")


def format_next_review(next_review_at: datetime, now: datetime) -> str:
    """
    Human-readable distance to the next review, e.g. "tomorrow" or "in 2 weeks".

    Partial days round up: a review three hours away reads "tomorrow", one that
    became due less than a day ago reads "today".
    """
    diff_days = math.ceil((next_review_at - now).total_seconds() / _SECONDS_PER_DAY)

    if diff_days < 0:
        return "due now"
    if diff_days == 0:
        return "today"
    if diff_days == 1:
        return "tomorrow"
    if diff_days < 7:
        return _plural(diff_days, "day")
    if diff_days < 30:
        return _plural(diff_days // 7, "week")
    if diff_days < 365:
        return _plural(diff_days // 30, "month")
    return _plural(diff_days // 365, "year")
