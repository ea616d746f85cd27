"""
Redis Connection and Learner Data Storage

Provides Redis connection pooling and the durable mirror for a learner's
decks, cards and study history.

Usage:
    from flashdeck.db.redis import LearnerDataStore

    storage = LearnerDataStore()
    await storage.save("learner-123", {"decks": [], "cards": [], "study_history": []})
    data = await storage.load("learner-123")
"""

import json
import logging
from typing import Any, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from flashdeck.config import settings, yaml_config
from flashdeck.errors import StorageError

logger = logging.getLogger(__name__)


# Get storage configuration from yaml config
store_config: dict[str, Any] = yaml_config.get("store", {})
DEFAULT_KEY_PREFIX: str = store_config.get("key_prefix", "flashdeck")
MAX_CONNECTIONS: int = store_config.get("max_connections", 10)


# Connection pool (lazily initialized)
_redis_pool: Optional[redis.ConnectionPool] = None


async def get_redis_pool() -> redis.ConnectionPool:
    """Get or create the Redis connection pool."""
    global _redis_pool
    if _redis_pool is None:
        _redis_pool = redis.ConnectionPool.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            max_connections=MAX_CONNECTIONS,
        )
    return _redis_pool


async def get_redis() -> redis.Redis:
    """
    Get a Redis connection from the pool.

    Usage:
        r = await get_redis()
        await r.set("key", "value")
    """
    pool = await get_redis_pool()
    return redis.Redis(connection_pool=pool)


async def close_redis_pool() -> None:
    """Close the Redis connection pool."""
    global _redis_pool
    if _redis_pool is not None:
        await _redis_pool.disconnect()
        _redis_pool = None


class LearnerDataStore:
    """
    Redis-backed storage for one opaque study-data blob per learner.

    The blob is the JSON form of {decks, cards, study_history}; its layout is
    owned by flashdeck.models.StudyData, not by this class. Keys never expire.

    Keys are stored as "{prefix}:{learner_id}".
    """

    def __init__(self, prefix: str = DEFAULT_KEY_PREFIX) -> None:
        """
        Initialize the learner data store.

        Args:
            prefix: Redis key prefix for namespacing (default from
                    config/default.yaml, "flashdeck").
        """
        self.prefix = prefix

    def _make_key(self, learner_id: str) -> str:
        """Generate a namespaced Redis key for a learner."""
        return f"{self.prefix}:{learner_id}"

    async def load(self, learner_id: str) -> Optional[dict[str, Any]]:
        """
        Read a learner's study data.

        Args:
            learner_id: Identity the blob is keyed by.

        Returns:
            Decoded blob, or None if the learner has no saved data.

        Raises:
            StorageError: If Redis is unreachable or the blob is not valid JSON.
        """
        key = self._make_key(learner_id)
        try:
            r = await get_redis()
            raw = await r.get(key)
        except RedisError as e:
            raise StorageError(
                f"Failed to read study data for learner {learner_id}: {e}",
                details={"key": key},
            ) from e

        if raw is None:
            return None

        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(
                f"Corrupt study data for learner {learner_id}: {e}",
                details={"key": key},
            ) from e

    async def save(self, learner_id: str, data: dict[str, Any]) -> None:
        """
        Replace a learner's study data.

        Args:
            learner_id: Identity the blob is keyed by.
            data: JSON-serializable blob.

        Raises:
            StorageError: If the write fails.
        """
        key = self._make_key(learner_id)
        try:
            r = await get_redis()
            await r.set(key, json.dumps(data))
        except RedisError as e:
            raise StorageError(
                f"Failed to write study data for learner {learner_id}: {e}",
                details={"key": key},
            ) from e
        logger.debug(f"Saved study data for learner {learner_id} ({key})")

    async def delete(self, learner_id: str) -> None:
        """Remove a learner's study data entirely."""
        key = self._make_key(learner_id)
        try:
            r = await get_redis()
            await r.delete(key)
        except RedisError as e:
            raise StorageError(
                f"Failed to delete study data for learner {learner_id}: {e}",
                details={"key": key},
            ) from e
