"""
JSON Review-State Store — Infrastructure adapter for a local state file.

Implements ReviewStateStore and LegacyProgressSource on top of a single
JSON document:

    {
      "version": 1,
      "review_states": {"<item_key>": {...seven fields...}},
      "learned_items": ["<item_key>", ...],
      "migrated": false
    }

Every call re-reads the file, and every write replaces it atomically, so
concurrent writers degrade to last-write-wins rather than a torn file.
"""

import json
import logging
import os
import tempfile
from collections.abc import Iterable, Mapping
from pathlib import Path

from pydantic import ValidationError

from woerter.domain.exceptions import InvalidReviewStateError, StateFileError
from woerter.domain.review.models import ReviewState
from woerter.domain.review.ports import LegacyProgressSource, ReviewStateStore

from .schemas import ReviewStateRecord, StateDocument

logger = logging.getLogger(__name__)


class JsonFileReviewStateStore(ReviewStateStore, LegacyProgressSource):
    """
    File-backed store. A missing file reads as an empty store; the file and
    its parent directories are created on first write.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    # ------------------------------------------------------------------
    # Document I/O
    # ------------------------------------------------------------------

    def _load(self) -> StateDocument:
        if not self.path.exists():
            return StateDocument()

        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise StateFileError(self.path, f"cannot read state file ({e})") from e

        if not raw.strip():
            return StateDocument()

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StateFileError(self.path, f"invalid JSON ({e})") from e

        try:
            return StateDocument.model_validate(data)
        except ValidationError as e:
            raise InvalidReviewStateError(f"{self.path}: {e}") from e

    def _save(self, doc: StateDocument) -> None:
        payload = doc.model_dump_json(indent=2)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StateFileError(self.path, f"cannot write state file ({e})") from e

    # ------------------------------------------------------------------
    # ReviewStateStore
    # ------------------------------------------------------------------

    def get_all(self) -> Mapping[str, ReviewState]:
        doc = self._load()
        return {key: record.to_domain() for key, record in doc.review_states.items()}

    def get(self, item_key: str) -> ReviewState | None:
        record = self._load().review_states.get(item_key)
        return record.to_domain() if record else None

    def put(self, item_key: str, state: ReviewState) -> None:
        if state.item_key != item_key:
            raise ValueError(
                f"State for '{state.item_key}' cannot be stored under '{item_key}'"
            )
        doc = self._load()
        doc.review_states[item_key] = ReviewStateRecord.from_domain(state)
        self._save(doc)

    def put_many(self, states: Mapping[str, ReviewState]) -> None:
        records = {}
        for item_key, state in states.items():
            if state.item_key != item_key:
                raise ValueError(
                    f"State for '{state.item_key}' cannot be stored under '{item_key}'"
                )
            records[item_key] = ReviewStateRecord.from_domain(state)
        if not records:
            return
        doc = self._load()
        doc.review_states.update(records)
        self._save(doc)

    def exists_any(self) -> bool:
        return bool(self._load().review_states)

    # ------------------------------------------------------------------
    # LegacyProgressSource
    # ------------------------------------------------------------------

    def get_learned_keys(self) -> list[str]:
        return list(self._load().learned_items)

    def is_migrated(self) -> bool:
        return self._load().migrated

    def mark_migrated(self) -> None:
        doc = self._load()
        doc.migrated = True
        self._save(doc)

    def import_learned_items(self, keys: Iterable[str]) -> int:
        """
        Append keys to the legacy learned list, skipping ones already present.

        Returns:
            Number of keys added.
        """
        doc = self._load()
        known = set(doc.learned_items)
        added = 0
        for key in keys:
            if key and key not in known:
                doc.learned_items.append(key)
                known.add(key)
                added += 1
        if added:
            self._save(doc)
            logger.info(f"Imported {added} learned items into {self.path}")
        return added
