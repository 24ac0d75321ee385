"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from osm_gateway.services import QueryCacheCoordinator, SearchService

    coordinator = QueryCacheCoordinator(store=store)
    service = SearchService.create(coordinator=coordinator, fetcher=client)
    ```
"""

from .keys import cache_key
from .normalizer import normalize, normalize_all
from .query_builder import build_search_query, encode_form, search_box
from .query_cache import QueryCacheCoordinator
from .sanitizer import extract_elements, sanitize
from .search_service import SearchService

__all__ = [
    "cache_key",
    "normalize",
    "normalize_all",
    "build_search_query",
    "encode_form",
    "search_box",
    "QueryCacheCoordinator",
    "extract_elements",
    "sanitize",
    "SearchService",
]
