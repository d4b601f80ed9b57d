from abc import ABC, abstractmethod
from datetime import datetime


class Clock(ABC):
    """Port supplying the current instant to the scheduler."""

    @abstractmethod
    def now(self) -> datetime:
        """Return a timezone-aware timestamp."""
        pass
