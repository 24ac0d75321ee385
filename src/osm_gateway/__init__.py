"""OSM Gateway - points of interest around a coordinate from OpenStreetMap.

This package queries an Overpass interpreter for elements near a
coordinate, keeps the ones tagged as tourism or historic sites, and
caches raw upstream answers so repeated queries skip the network.

Layers:
    - protocols: Interface contracts (CacheStore, UpstreamFetcher)
    - repositories: Data access implementations (disk, Redis, httpx)
    - services: Business logic (cache coordination, sanitize, normalize)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Typed views over raw elements (internal)

Usage:
    ```python
    from osm_gateway.repositories import FileCacheRepository, OverpassHttpClient
    from osm_gateway.services import QueryCacheCoordinator, SearchService

    service = SearchService.create(
        coordinator=QueryCacheCoordinator(FileCacheRepository.create()),
        fetcher=OverpassHttpClient.create(),
    )
    pois = await service.search(25.2, 55.3)
    ```

For HTTP API:
    ```python
    from osm_gateway.api.app import app
    ```
"""

from osm_gateway.config import get_settings, settings
from osm_gateway.dto import SearchRequest, SearchResponse
from osm_gateway.entities import Bounds, ElementKind, ElementTags, Position
from osm_gateway.errors import CacheIOError, GatewayError, MalformedResponse, UpstreamError
from osm_gateway.handlers import SearchHandler
from osm_gateway.protocols import CacheStore, UpstreamFetcher
from osm_gateway.repositories import FileCacheRepository, OverpassHttpClient, RedisCacheRepository
from osm_gateway.services import QueryCacheCoordinator, SearchService, cache_key

__all__ = [
    # Configuration
    "settings",
    "get_settings",
    # Errors
    "GatewayError",
    "UpstreamError",
    "CacheIOError",
    "MalformedResponse",
    # Protocols (interfaces)
    "CacheStore",
    "UpstreamFetcher",
    # Services (business logic)
    "QueryCacheCoordinator",
    "SearchService",
    "cache_key",
    # Handlers (HTTP)
    "SearchHandler",
    # Repositories (data access)
    "FileCacheRepository",
    "RedisCacheRepository",
    "OverpassHttpClient",
    # Entities (domain models)
    "Bounds",
    "ElementKind",
    "ElementTags",
    "Position",
    # DTOs (API contracts)
    "SearchRequest",
    "SearchResponse",
]
