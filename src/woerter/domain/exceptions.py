"""Exception hierarchy for woerter."""

from pathlib import Path


class WoerterError(Exception):
    """Base class for all woerter errors."""


class StateFileError(WoerterError):
    """The persisted state file could not be read, parsed or written."""

    def __init__(self, path: Path, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


class InvalidReviewStateError(WoerterError):
    """A persisted review-state record failed shape validation."""


class MissingReviewStateError(WoerterError, KeyError):
    """An operation required review state for an item that has none."""

    def __init__(self, item_key: str):
        self.item_key = item_key
        super().__init__(item_key)

    def __str__(self) -> str:
        return f"No review state for '{self.item_key}'"
