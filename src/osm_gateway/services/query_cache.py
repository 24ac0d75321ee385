"""Query cache coordinator.

Serves an upstream request from the cache store when a previous answer
exists, otherwise calls the upstream and persists the answer in the
background.

Business logic:
1. Key the request by (endpoint, body)
2. Return the stored document on a hit, without calling upstream
3. On a miss, call upstream; failures propagate and are never cached
4. Schedule the write as a detached task and return immediately

Concurrent misses on the same key are not merged: each one fetches and
writes, and the last write wins.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from osm_gateway.errors import CacheIOError
from osm_gateway.protocols import CacheStore

from .keys import cache_key

logger = logging.getLogger(__name__)

Fetch = Callable[[], Awaitable[Any]]


class QueryCacheCoordinator:
    """Cache-aside wrapper around upstream fetches.

    Example:
        ```python
        coordinator = QueryCacheCoordinator(store=FileCacheRepository.create())

        doc = await coordinator.fetch_with_cache(
            endpoint,
            body,
            lambda: client.post(endpoint, body, FORM_HEADERS),
        )
        ```
    """

    def __init__(self, store: CacheStore) -> None:
        """Initialize the coordinator.

        Args:
            store: Cache storage backend (required).
        """
        self._store = store
        self._pending: set[asyncio.Task[None]] = set()
        self._hits = 0
        self._misses = 0
        self._write_failures = 0

    async def fetch_with_cache(self, endpoint: str, body: str, fetch: Fetch) -> Any:
        """Return the cached answer for a request, fetching it on a miss.

        Args:
            endpoint: Target URL of the request
            body: Serialized request body
            fetch: Zero-argument coroutine function performing the upstream call

        Returns:
            The upstream JSON document (cached or fresh)

        Raises:
            UpstreamError: If the cache missed and the fetch failed
        """
        key = cache_key(endpoint, body)

        cached = await self._store.get(key)
        if cached is not None:
            self._hits += 1
            logger.debug("Cache hit %s for %s", key, endpoint)
            return cached

        self._misses += 1
        logger.debug("Cache miss %s for %s", key, endpoint)

        result = await fetch()
        self._store_in_background(key, result)
        return result

    def _store_in_background(self, key: str, value: Any) -> None:
        task = asyncio.create_task(self._store.set(key, value), name=f"cache-set-{key}")
        self._pending.add(task)
        task.add_done_callback(lambda t, k=key: self._on_stored(k, t))

    def _on_stored(self, key: str, task: "asyncio.Task[None]") -> None:
        self._pending.discard(task)
        if task.cancelled():
            logger.warning("Cache write for %s was cancelled", key)
            return
        exc = task.exception()
        if exc is None:
            logger.debug("Cached %s", key)
            return
        self._write_failures += 1
        if isinstance(exc, CacheIOError):
            logger.error("Cache write failed: %s", exc)
        else:
            logger.error("Unexpected error writing cache entry %s", key, exc_info=exc)

    async def drain(self) -> None:
        """Wait for every scheduled cache write to finish.

        Write failures are already logged by the task callbacks, so
        they are not raised here.
        """
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def delete(self, key: str) -> None:
        """Delete a cache entry by key.

        Raises:
            CacheIOError: If the entry does not exist or removal fails
        """
        await self._store.delete(key)

    async def get_stats(self) -> dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dictionary with cache statistics
        """
        return {
            "backend": self._store.backend_name,
            "total_entries": await self._store.count_all(),
            "hits": self._hits,
            "misses": self._misses,
            "pending_writes": len(self._pending),
            "write_failures": self._write_failures,
        }

    @property
    def pending_writes(self) -> int:
        """Number of cache writes still in flight."""
        return len(self._pending)

    @property
    def store(self) -> CacheStore:
        """Get the underlying cache store (for testing)."""
        return self._store
