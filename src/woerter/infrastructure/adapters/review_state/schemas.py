"""
Persisted shapes of the JSON state file.

Records are validated here, at the store boundary, before the scheduler
ever sees them.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from woerter.domain.constants import (
    MAX_QUALITY,
    MIN_EASINESS,
    MIN_QUALITY,
    STATE_FILE_VERSION,
)
from woerter.domain.review.models import ReviewState
from woerter.infrastructure.clock import ensure_aware


class ReviewStateRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    item_key: str = Field(min_length=1)
    easiness: float = Field(ge=MIN_EASINESS)
    interval: int = Field(ge=0)
    repetitions: int = Field(ge=0)
    next_review_at: datetime
    last_review_at: datetime
    last_quality: int | None = Field(default=None, ge=MIN_QUALITY, le=MAX_QUALITY)

    @field_validator("next_review_at", "last_review_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        return ensure_aware(v)

    @classmethod
    def from_domain(cls, state: ReviewState) -> "ReviewStateRecord":
        return cls(
            item_key=state.item_key,
            easiness=state.easiness,
            interval=state.interval,
            repetitions=state.repetitions,
            next_review_at=state.next_review_at,
            last_review_at=state.last_review_at,
            last_quality=state.last_quality,
        )

    def to_domain(self) -> ReviewState:
        return ReviewState(
            item_key=self.item_key,
            easiness=self.easiness,
            interval=self.interval,
            repetitions=self.repetitions,
            next_review_at=self.next_review_at,
            last_review_at=self.last_review_at,
            last_quality=self.last_quality,
        )


class StateDocument(BaseModel):
    """Top-level layout of the state file."""

    model_config = ConfigDict(extra="ignore")

    version: int = STATE_FILE_VERSION
    review_states: dict[str, ReviewStateRecord] = Field(default_factory=dict)
    learned_items: list[str] = Field(default_factory=list)
    migrated: bool = False

    @model_validator(mode="after")
    def check_keys(self) -> "StateDocument":
        for key, record in self.review_states.items():
            if key != record.item_key:
                raise ValueError(
                    f"record stored under '{key}' belongs to '{record.item_key}'"
                )
        return self

    @field_validator("learned_items", mode="before")
    @classmethod
    def drop_blank(cls, v: Any) -> Any:
        if isinstance(v, list):
            return [item for item in v if item]
        return v
