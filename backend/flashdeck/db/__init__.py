"""Durable storage for learner study data."""

from flashdeck.db.redis import (
    LearnerDataStore,
    close_redis_pool,
    get_redis,
    get_redis_pool,
)

__all__ = [
    "LearnerDataStore",
    "close_redis_pool",
    "get_redis",
    "get_redis_pool",
]
