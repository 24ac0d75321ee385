"""HTTP handlers for search and cache operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, validation, and error handling.
"""

import logging

from fastapi import HTTPException, status

from osm_gateway.dto import (
    CacheDeleteResponse,
    CacheStatsResponse,
    ElementItem,
    HealthCheckResponse,
    SearchRequest,
    SearchResponse,
)
from osm_gateway.entities import ElementKind
from osm_gateway.errors import CacheIOError, UpstreamError
from osm_gateway.services import SearchService

logger = logging.getLogger(__name__)


def _upstream_failure(e: UpstreamError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=f"Upstream request failed: {e}",
    )


class SearchHandler:
    """HTTP handlers for search operations.

    This handler delegates business logic to SearchService
    and handles HTTP-specific concerns like:
    - Converting service results to DTOs
    - Setting appropriate status codes
    - Error handling and responses

    Example:
        ```python
        handler = SearchHandler(search_service=service)

        @app.post("/search", response_model=SearchResponse)
        async def search(request: SearchRequest):
            return await handler.search(request)
        ```
    """

    def __init__(self, search_service: SearchService) -> None:
        """Initialize the search handler.

        Args:
            search_service: The search service for business logic (required).
        """
        self._service = search_service

    async def search(self, request: SearchRequest) -> SearchResponse:
        """Handle search requests.

        Args:
            request: The search request DTO

        Returns:
            SearchResponse with the normalized elements

        Raises:
            HTTPException: 502 if the upstream could not be queried
        """
        try:
            elements = await self._service.search(request.lat, request.lon, request.kind)
        except UpstreamError as e:
            raise _upstream_failure(e) from e

        items = [ElementItem.model_validate(el) for el in elements]
        return SearchResponse(
            lat=request.lat,
            lon=request.lon,
            kind=request.kind,
            count=len(items),
            elements=items,
        )

    async def get_element(self, kind: ElementKind, element_id: int) -> dict:
        """Handle GET /elements/{kind}/{id} requests.

        Returns:
            The sanitized upstream element

        Raises:
            HTTPException: 422 for kind "any", 404 if not found, 502 on upstream failure
        """
        if kind is ElementKind.ANY:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="Element lookup needs a concrete kind: node, way or relation",
            )

        try:
            element = await self._service.get_element(kind, element_id)
        except UpstreamError as e:
            if e.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_410_GONE):
                element = None
            else:
                raise _upstream_failure(e) from e

        if element is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"{kind.value} {element_id} not found",
            )
        return element

    async def get_stats(self) -> CacheStatsResponse:
        """Handle GET /cache/stats requests.

        Raises:
            HTTPException: If an error occurs while fetching stats
        """
        try:
            stats = await self._service.coordinator.get_stats()
        except Exception as e:
            logger.exception("Failed to collect cache stats")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to get stats: {e}",
            ) from e
        return CacheStatsResponse(**stats)

    async def delete_cache_entry(self, key: str) -> CacheDeleteResponse:
        """Handle DELETE /cache/{key} requests.

        Raises:
            HTTPException: 404 if the entry does not exist, 500 if removal fails
        """
        try:
            await self._service.coordinator.delete(key)
        except CacheIOError as e:
            if e.missing:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
            logger.error("Cache delete failed: %s", e)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to delete entry: {e}",
            ) from e

        return CacheDeleteResponse(
            success=True,
            key=key,
            message="Entry deleted successfully",
        )

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        is_healthy = await self._service.is_healthy()

        return HealthCheckResponse(
            status="healthy" if is_healthy else "unhealthy",
            cache_healthy=is_healthy,
        )
