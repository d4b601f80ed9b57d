from datetime import datetime, timedelta, timezone

from woerter.domain.clock import Clock


def ensure_aware(value: datetime) -> datetime:
    """Naive timestamps are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SystemClock(Clock):
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """
    A clock frozen at a given instant.

    Used by tests and by the CLI --at option to ask "what is due at X".
    """

    def __init__(self, at: datetime):
        self._at = ensure_aware(at)

    def now(self) -> datetime:
        return self._at

    def advance(self, days: float = 0, hours: float = 0) -> datetime:
        self._at = self._at + timedelta(days=days, hours=hours)
        return self._at
