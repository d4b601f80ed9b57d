# Infrastructure Review-State Adapters Package
from .json_store import JsonFileReviewStateStore
from .memory_store import InMemoryReviewStateStore

__all__ = ["JsonFileReviewStateStore", "InMemoryReviewStateStore"]
