"""Redis implementation of CacheStore.

Stores each upstream document as a JSON string under
``{prefix}:{key}``. Entries carry no TTL, matching the file backend.
"""

import json
import logging
from typing import Any

import redis.asyncio as redis
from redis.exceptions import RedisError

from osm_gateway.config import get_redis_client, settings
from osm_gateway.errors import CacheIOError

logger = logging.getLogger(__name__)


class RedisCacheRepository:
    """Redis-backed cache store.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.
    """

    backend_name = "redis"

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        key_prefix: str | None = None,
    ) -> None:
        """Initialize the Redis cache repository.

        Args:
            redis_client: Async Redis client. If None, creates default.
            key_prefix: Namespace prepended to every key.
        """
        self._client = redis_client or get_redis_client()
        self._prefix = key_prefix or settings.cache_key_prefix

    @classmethod
    def create(cls, key_prefix: str | None = None) -> "RedisCacheRepository":
        """Factory method to create RedisCacheRepository with defaults.

        Args:
            key_prefix: Key namespace. If None, uses settings.

        Returns:
            Configured RedisCacheRepository
        """
        return cls(key_prefix=key_prefix)

    def _key(self, key: str) -> str:
        return f"{self._prefix}:{key}"

    async def get(self, key: str) -> Any | None:
        """Read an entry from Redis.

        Args:
            key: The cache key

        Returns:
            The decoded document, or None on miss, error or corrupt content
        """
        try:
            value = await self._client.get(self._key(key))
        except RedisError as e:
            logger.warning("Cache read failed for %s: %s", key, e)
            return None
        except UnicodeDecodeError as e:
            logger.warning("Corrupt cache entry %s, treating as miss: %s", key, e)
            return None

        if value is None:
            return None
        try:
            return json.loads(value)
        except json.JSONDecodeError as e:
            logger.warning("Corrupt cache entry %s, treating as miss: %s", key, e)
            return None

    async def set(self, key: str, value: Any) -> None:
        """Store an entry in Redis without expiry.

        Args:
            key: The cache key
            value: JSON-serializable document

        Raises:
            CacheIOError: If serialization or the write fails
        """
        try:
            serialized = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise CacheIOError(key, f"value is not JSON serializable: {e}") from e

        try:
            await self._client.set(self._key(key), serialized)
        except RedisError as e:
            raise CacheIOError(key, f"write failed: {e}") from e

    async def delete(self, key: str) -> None:
        """Delete an entry from Redis.

        Args:
            key: The cache key

        Raises:
            CacheIOError: If the entry does not exist or removal fails
        """
        try:
            removed = await self._client.delete(self._key(key))
        except RedisError as e:
            raise CacheIOError(key, f"delete failed: {e}") from e
        if not removed:
            raise CacheIOError(key, "no such entry", missing=True)

    async def count_all(self) -> int:
        """Count total entries in the cache.

        Returns:
            Total number of cached entries
        """
        count = 0
        async for _ in self._client.scan_iter(match=f"{self._prefix}:*"):
            count += 1
        return count

    async def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except RedisError:
            return False

    async def close(self) -> None:
        """Close the Redis connection."""
        await self._client.aclose()

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
