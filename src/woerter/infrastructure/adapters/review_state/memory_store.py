"""
In-Memory Review-State Store — dict-backed adapter.

Nothing survives the process; used by tests and the "memory" backend.
"""

from collections.abc import Iterable, Mapping

from woerter.domain.review.models import ReviewState
from woerter.domain.review.ports import LegacyProgressSource, ReviewStateStore


class InMemoryReviewStateStore(ReviewStateStore, LegacyProgressSource):
    def __init__(
        self,
        states: Mapping[str, ReviewState] | None = None,
        learned_items: Iterable[str] = (),
        migrated: bool = False,
    ):
        self._states: dict[str, ReviewState] = dict(states or {})
        self._learned = list(learned_items)
        self._migrated = migrated

    def get_all(self) -> Mapping[str, ReviewState]:
        return dict(self._states)

    def get(self, item_key: str) -> ReviewState | None:
        return self._states.get(item_key)

    def put(self, item_key: str, state: ReviewState) -> None:
        if state.item_key != item_key:
            raise ValueError(
                f"State for '{state.item_key}' cannot be stored under '{item_key}'"
            )
        self._states[item_key] = state

    def put_many(self, states: Mapping[str, ReviewState]) -> None:
        for item_key, state in states.items():
            if state.item_key != item_key:
                raise ValueError(
                    f"State for '{state.item_key}' cannot be stored under '{item_key}'"
                )
        self._states.update(states)

    def exists_any(self) -> bool:
        return bool(self._states)

    def get_learned_keys(self) -> list[str]:
        return list(self._learned)

    def is_migrated(self) -> bool:
        return self._migrated

    def mark_migrated(self) -> None:
        self._migrated = True

    def import_learned_items(self, keys: Iterable[str]) -> int:
        added = 0
        for key in keys:
            if key and key not in self._learned:
                self._learned.append(key)
                added += 1
        return added
