"""Cache storage protocol.

Defines the interface for any key-value backend that can persist raw
upstream JSON documents under an opaque digest key.

Implementations can include:
- One JSON file per key on local disk (default)
- Redis
- Any embedded key-value store

Entries never expire. A stored value lives until it is explicitly deleted.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for cache storage backends.

    Any type that implements these methods satisfies the protocol,
    no explicit inheritance needed.

    Example:
        ```python
        from osm_gateway.protocols import CacheStore

        store: CacheStore = FileCacheRepository(cache_dir="./cache")
        await store.set(key, {"elements": []})
        doc = await store.get(key)
        ```
    """

    @property
    def backend_name(self) -> str:
        """Short identifier of the backend (e.g. ``"file"``)."""
        ...

    async def get(self, key: str) -> Any | None:
        """Read the value stored under a key.

        Missing, unreadable and corrupt entries are all reported as a miss.

        Args:
            key: The cache key

        Returns:
            The stored JSON value, or None
        """
        ...

    async def set(self, key: str, value: Any) -> None:
        """Write a value under a key, replacing any previous value.

        Args:
            key: The cache key
            value: Any JSON-serializable document

        Raises:
            CacheIOError: If the value cannot be serialized or written
        """
        ...

    async def delete(self, key: str) -> None:
        """Remove the entry stored under a key.

        Args:
            key: The cache key

        Raises:
            CacheIOError: If there is no such entry or removal fails
        """
        ...

    async def count_all(self) -> int:
        """Count total entries in the cache.

        Returns:
            Total number of cached entries
        """
        ...

    async def health_check(self) -> bool:
        """Check if the backend is accessible.

        Returns:
            True if healthy, False otherwise
        """
        ...

    async def close(self) -> None:
        """Release connections held by the backend."""
        ...
