"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Swapping the cache backend (local files -> Redis) without touching services
- Unit testing with in-memory fakes
- Clear separation of concerns

Usage:
    ```python
    from osm_gateway.protocols import CacheStore, UpstreamFetcher

    store: CacheStore = FileCacheRepository.create()   # works
    store: CacheStore = RedisCacheRepository.create()  # also works
    ```
"""

from .cache_store import CacheStore
from .upstream_fetcher import UpstreamFetcher

__all__ = [
    "CacheStore",
    "UpstreamFetcher",
]
