"""
Ports (interfaces) for review-state persistence.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping

from .models import ReviewState


class ReviewStateStore(ABC):
    """
    Port for durable review-state storage, keyed by item.

    Implementations:
        - JsonFileReviewStateStore: A single JSON document on disk.
        - InMemoryReviewStateStore: A dict, for tests and throwaway sessions.
    """

    @abstractmethod
    def get_all(self) -> Mapping[str, ReviewState]:
        """
        Snapshot of every stored state.

        Returns:
            Mapping of item key to ReviewState, in insertion order.
        """
        pass

    @abstractmethod
    def get(self, item_key: str) -> ReviewState | None:
        pass

    @abstractmethod
    def put(self, item_key: str, state: ReviewState) -> None:
        """
        Insert or replace the state for an item.

        Raises:
            ValueError: If state.item_key does not match item_key.
        """
        pass

    @abstractmethod
    def put_many(self, states: Mapping[str, ReviewState]) -> None:
        """
        Insert or replace several states in one write.

        Either every state is stored or none is.

        Raises:
            ValueError: If any state's item_key does not match its key.
        """
        pass

    @abstractmethod
    def exists_any(self) -> bool:
        """Whether at least one state is stored."""
        pass


class LegacyProgressSource(ABC):
    """
    Port for the pre-scheduler "learned" bookkeeping.

    Read by the migration path only; the scheduler never writes the
    learned list itself.
    """

    @abstractmethod
    def get_learned_keys(self) -> list[str]:
        pass

    @abstractmethod
    def is_migrated(self) -> bool:
        pass

    @abstractmethod
    def mark_migrated(self) -> None:
        pass
