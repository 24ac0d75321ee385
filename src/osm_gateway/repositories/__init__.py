"""Repository layer for data access.

This layer hides external dependencies (local disk, Redis, the
Overpass and OSM HTTP APIs) behind protocol-based interfaces. This enables:
- Swapping the cache backend without touching services
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from osm_gateway.protocols import CacheStore, UpstreamFetcher

from .file_repository import FileCacheRepository
from .overpass_client import FORM_HEADERS, OverpassHttpClient
from .redis_repository import RedisCacheRepository

__all__ = [
    "CacheStore",
    "UpstreamFetcher",
    "FileCacheRepository",
    "RedisCacheRepository",
    "OverpassHttpClient",
    "FORM_HEADERS",
]
