import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime
from functools import lru_cache

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel

from woerter.consts import VERSION
from woerter.domain.exceptions import MissingReviewStateError, WoerterError
from woerter.domain.review.models import ReviewState

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("woerter.server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"woerter server v{VERSION} starting up...")
    yield
    # Shutdown
    logger.info("woerter server shutting down...")


app = FastAPI(
    title="woerter server",
    description="Review scheduling daemon for the woerter vocabulary trainer.",
    version=VERSION,
    lifespan=lifespan,
)


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float


class ReviewStateResponse(BaseModel):
    item_key: str
    easiness: float
    interval: int
    repetitions: int
    next_review_at: datetime
    last_review_at: datetime
    last_quality: int | None = None

    @classmethod
    def from_state(cls, state: ReviewState) -> "ReviewStateResponse":
        return cls(
            item_key=state.item_key,
            easiness=state.easiness,
            interval=state.interval,
            repetitions=state.repetitions,
            next_review_at=state.next_review_at,
            last_review_at=state.last_review_at,
            last_quality=state.last_quality,
        )


class StatsResponse(BaseModel):
    total: int
    due_today: int
    due_this_week: int
    mature: int
    young: int
    learning: int


class ReviewRequest(BaseModel):
    item_key: str
    quality: int  # clamped to 0-5 by the scheduler
    answered_correctly: bool | None = None


class MigrateResponse(BaseModel):
    migrated: int


start_time = time.time()


@lru_cache(maxsize=1)
def _memory_store():
    """The memory backend's store, shared by every request for the life of the process."""
    from woerter.infrastructure.adapters.review_state.memory_store import InMemoryReviewStateStore

    return InMemoryReviewStateStore()


def _service():
    """
    Store and service for one request.

    The JSON backend is reopened each time so edits to the state file are seen.
    """
    from woerter.application.config import resolve_config
    from woerter.application.factory import get_review_store
    from woerter.application.scheduling.service import ReviewService

    config = resolve_config()
    if config.backend == "memory":
        store = _memory_store()
    else:
        store = get_review_store(config)
    return store, ReviewService(store)


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Simple health check to verify server is reachable.
    """
    return HealthResponse(status="ok", version=VERSION, uptime_seconds=time.time() - start_time)


@app.get("/version")
async def get_version():
    return {"version": VERSION}


@app.get("/due", response_model=list[ReviewStateResponse])
def get_due(limit: int | None = Query(default=None, ge=1)):
    """Items due now, most overdue first."""
    try:
        _, service = _service()
        return [ReviewStateResponse.from_state(s) for s in service.due_items(limit=limit)]
    except WoerterError as e:
        logger.error(f"Due query failed: {e}")
        raise HTTPException(status_code=500, detail=str(e)) from e


@app.get("/stats", response_model=StatsResponse)
def get_stats():
    try:
        _, service = _service()
        result = service.stats()
    except WoerterError as e:
        logger.error(f"Stats query failed: {e}")
        raise HTTPException(status_code=500, detail=str(e)) from e

    return StatsResponse(
        total=result.total,
        due_today=result.due_today,
        due_this_week=result.due_this_week,
        mature=result.mature,
        young=result.young,
        learning=result.learning,
    )


@app.get("/states/{item_key}", response_model=ReviewStateResponse)
def get_state(item_key: str):
    try:
        _, service = _service()
        return ReviewStateResponse.from_state(service.require_state(item_key))
    except MissingReviewStateError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except WoerterError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e


@app.post("/review", response_model=ReviewStateResponse)
def post_review(req: ReviewRequest):
    """
    Record a review and return the rescheduled state.
    """
    logger.info(f"Review requested via API: {req}")
    try:
        _, service = _service()
        state = service.record_review(
            req.item_key, req.quality, answered_correctly=req.answered_correctly
        )
    except WoerterError as e:
        logger.error(f"Review failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e

    return ReviewStateResponse.from_state(state)


@app.post("/migrate", response_model=MigrateResponse)
def post_migrate():
    """Run the one-time legacy migration if it is still pending."""
    try:
        store, service = _service()
        return MigrateResponse(migrated=service.bootstrap(store))
    except WoerterError as e:
        logger.error(f"Migration failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e
