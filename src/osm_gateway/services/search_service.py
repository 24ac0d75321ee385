"""Search service for core business logic.

This service orchestrates a coordinate search by coordinating the
query builder, the cache coordinator (cache store + upstream fetcher)
and the sanitize/normalize pipeline.
"""

import logging
from collections.abc import Collection
from typing import Any

from osm_gateway.config import settings
from osm_gateway.entities import ElementKind
from osm_gateway.protocols import UpstreamFetcher
from osm_gateway.repositories import FORM_HEADERS

from .normalizer import normalize_all
from .query_builder import build_search_query, encode_form
from .query_cache import QueryCacheCoordinator
from .sanitizer import extract_elements, sanitize

logger = logging.getLogger(__name__)


class SearchService:
    """Core search orchestration service.

    This service depends on PROTOCOLS, not concrete implementations:
    - CacheStore (through the coordinator): local files, Redis, etc.
    - UpstreamFetcher: the httpx client, or a fake in tests

    Example:
        ```python
        from osm_gateway.repositories import FileCacheRepository, OverpassHttpClient
        from osm_gateway.services import QueryCacheCoordinator, SearchService

        service = SearchService.create(
            coordinator=QueryCacheCoordinator(FileCacheRepository.create()),
            fetcher=OverpassHttpClient.create(),
        )
        pois = await service.search(25.2, 55.3)
        ```
    """

    def __init__(
        self,
        coordinator: QueryCacheCoordinator,
        fetcher: UpstreamFetcher,
        interpreter_url: str | None = None,
        api_url: str | None = None,
        tourism_values: Collection[str] | None = None,
        historic_values: Collection[str] | None = None,
    ) -> None:
        """Initialize the search service.

        Args:
            coordinator: Cache coordinator wrapping the cache store (required).
            fetcher: Upstream HTTP client (required).
            interpreter_url: Overpass interpreter endpoint. Defaults to settings.
            api_url: OSM main API base URL. Defaults to settings.
            tourism_values: Accepted ``tourism`` tag values. Defaults to settings.
            historic_values: Accepted ``historic`` tag values. Defaults to settings.
        """
        self._coordinator = coordinator
        self._fetcher = fetcher
        self._interpreter_url = interpreter_url or settings.osm_interpreter
        self._api_url = (api_url or settings.osm_api).rstrip("/")
        self._tourism_values = frozenset(
            settings.tourism_values if tourism_values is None else tourism_values
        )
        self._historic_values = frozenset(
            settings.historic_values if historic_values is None else historic_values
        )

    @classmethod
    def create(
        cls,
        coordinator: QueryCacheCoordinator,
        fetcher: UpstreamFetcher,
        **kwargs: Any,
    ) -> "SearchService":
        """Factory method to create SearchService with defaults from settings.

        Args:
            coordinator: Cache coordinator (required).
            fetcher: Upstream HTTP client (required).
            **kwargs: Optional overrides accepted by ``__init__``.

        Returns:
            Configured SearchService instance
        """
        return cls(coordinator=coordinator, fetcher=fetcher, **kwargs)

    async def search_elements(self, lat: float, lon: float) -> list[dict[str, Any]]:
        """Fetch and sanitize every element around a coordinate.

        Raises:
            UpstreamError: If the cache missed and the interpreter call failed
        """
        body = encode_form(build_search_query(lat, lon))
        payload = await self._coordinator.fetch_with_cache(
            self._interpreter_url,
            body,
            lambda: self._fetcher.post(self._interpreter_url, body, FORM_HEADERS),
        )
        return sanitize(extract_elements(payload))

    async def search(
        self,
        lat: float,
        lon: float,
        kind: ElementKind = ElementKind.ANY,
    ) -> list[dict[str, Any]]:
        """Search points of interest around a coordinate.

        Business logic:
        1. Build the Overpass query for the coordinate
        2. Serve it from cache or fetch it upstream
        3. Sanitize the element list
        4. Keep POIs and derive their display fields
        5. Filter by element kind

        Args:
            lat: Latitude of the search center
            lon: Longitude of the search center
            kind: Element type to keep

        Returns:
            Normalized elements, in upstream order

        Raises:
            UpstreamError: If the upstream call was needed and failed
        """
        elements = await self.search_elements(lat, lon)
        pois = normalize_all(elements, self._tourism_values, self._historic_values)
        result = [poi for poi in pois if kind.matches(poi)]
        logger.info(
            "Search (%s, %s) kind=%s: %d elements, %d POIs",
            lat,
            lon,
            kind.value,
            len(elements),
            len(result),
        )
        return result

    async def get_element(self, kind: ElementKind, element_id: int) -> dict[str, Any] | None:
        """Look up a single element on the OSM main API.

        Args:
            kind: node, way or relation
            element_id: OSM id

        Returns:
            The sanitized element, or None if the API returned none

        Raises:
            ValueError: If ``kind`` is ANY
            UpstreamError: If the cache missed and the API call failed
        """
        if kind is ElementKind.ANY:
            raise ValueError("element lookup needs a concrete kind")

        url = f"{self._api_url}/{kind.value}/{element_id}.json"
        payload = await self._coordinator.fetch_with_cache(url, "", lambda: self._fetcher.get(url))
        elements = sanitize(extract_elements(payload))
        for element in elements:
            if element.get("type") == kind.value and element.get("id") == element_id:
                return element
        return elements[0] if elements else None

    async def is_healthy(self) -> bool:
        """Check if the cache backend is healthy."""
        return await self._coordinator.store.health_check()

    @property
    def coordinator(self) -> QueryCacheCoordinator:
        """Get the underlying cache coordinator (for testing)."""
        return self._coordinator
