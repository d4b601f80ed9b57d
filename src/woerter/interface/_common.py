"""Helpers shared by CLI commands."""

from datetime import datetime
from typing import Any

import typer

from woerter.application.config import AppConfig, resolve_config
from woerter.application.factory import get_clock, get_review_store
from woerter.application.scheduling.service import ReviewService
from woerter.domain.review.models import ReviewState


def _resolve_with_overrides(ctx: typer.Context, **overrides: Any) -> AppConfig:
    """Merge global callback options with command-level overrides."""
    obj = ctx.obj or {}
    merged = {
        "state_file": obj.get("state_file"),
        "backend": obj.get("backend"),
        "verbose": obj.get("verbose"),
    }
    merged.update(overrides)
    return resolve_config(merged)


def _open_service(ctx: typer.Context, **overrides: Any):
    """
    Build the store and service for a command.

    Returns:
        (config, store, service)
    """
    config = _resolve_with_overrides(ctx, **overrides)
    store = get_review_store(config)
    at: datetime | None = (ctx.obj or {}).get("at")
    service = ReviewService(store, clock=get_clock(at))
    return config, store, service


def state_to_dict(state: ReviewState) -> dict[str, Any]:
    return {
        "item_key": state.item_key,
        "easiness": round(state.easiness, 4),
        "interval": state.interval,
        "repetitions": state.repetitions,
        "next_review_at": state.next_review_at.isoformat(),
        "last_review_at": state.last_review_at.isoformat(),
        "last_quality": state.last_quality,
    }
