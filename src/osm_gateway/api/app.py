import logging
from typing import Annotated, Any

from fastapi import FastAPI, Path, Query
from fastapi.middleware.cors import CORSMiddleware

from osm_gateway.api.dependencies import HandlerDep, make_lifespan
from osm_gateway.config import settings
from osm_gateway.dto import (
    CacheDeleteResponse,
    CacheStatsResponse,
    HealthCheckResponse,
    SearchRequest,
    SearchResponse,
)
from osm_gateway.entities import ElementKind
from osm_gateway.protocols import CacheStore, UpstreamFetcher

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    datefmt="%H:%M:%S",
)

NAME = "OSM Gateway API"
VERSION = "0.1.0"
DESCRIPTION = "Points of interest around a coordinate from OpenStreetMap, with a disk cache"

Lat = Annotated[float, Query(ge=-90.0, le=90.0, description="Latitude of the search center")]
Lon = Annotated[float, Query(ge=-180.0, le=180.0, description="Longitude of the search center")]


def create_app(
    store: CacheStore | None = None,
    fetcher: UpstreamFetcher | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        store: Cache backend override (defaults to CACHE_BACKEND).
        fetcher: Upstream client override (defaults to the httpx client).
    """
    app = FastAPI(
        title=NAME,
        description=DESCRIPTION,
        version=VERSION,
        lifespan=make_lifespan(store=store, fetcher=fetcher),
    )

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": NAME,
            "version": VERSION,
            "description": DESCRIPTION,
            "endpoints": {
                "search": "/search",
                "elements": "/elements/{kind}/{id}",
                "cache": "/cache/stats",
                "health": "/health",
                "docs": "/docs",
            },
        }

    @app.get("/health", response_model=HealthCheckResponse)
    async def health(handler: HandlerDep) -> HealthCheckResponse:
        """Health check endpoint."""
        return await handler.health_check()

    @app.post("/search", response_model=SearchResponse)
    async def search(request: SearchRequest, handler: HandlerDep) -> SearchResponse:
        """Search points of interest around a coordinate."""
        return await handler.search(request)

    @app.get("/search", response_model=SearchResponse)
    async def search_get(
        handler: HandlerDep,
        lat: Lat,
        lon: Lon,
        kind: ElementKind = ElementKind.ANY,
    ) -> SearchResponse:
        """Search points of interest around a coordinate (query-string form)."""
        return await handler.search(SearchRequest(lat=lat, lon=lon, kind=kind))

    @app.get("/search/nodes", response_model=SearchResponse)
    async def search_nodes(handler: HandlerDep, lat: Lat, lon: Lon) -> SearchResponse:
        """Search POI nodes around a coordinate."""
        return await handler.search(SearchRequest(lat=lat, lon=lon, kind=ElementKind.NODE))

    @app.get("/search/ways", response_model=SearchResponse)
    async def search_ways(handler: HandlerDep, lat: Lat, lon: Lon) -> SearchResponse:
        """Search POI ways around a coordinate."""
        return await handler.search(SearchRequest(lat=lat, lon=lon, kind=ElementKind.WAY))

    @app.get("/search/relations", response_model=SearchResponse)
    async def search_relations(handler: HandlerDep, lat: Lat, lon: Lon) -> SearchResponse:
        """Search POI relations around a coordinate."""
        return await handler.search(SearchRequest(lat=lat, lon=lon, kind=ElementKind.RELATION))

    @app.get("/elements/{kind}/{element_id}")
    async def get_element(kind: ElementKind, element_id: int, handler: HandlerDep) -> dict[str, Any]:
        """Fetch a single node, way or relation from the OSM API."""
        return await handler.get_element(kind, element_id)

    @app.get("/cache/stats", response_model=CacheStatsResponse)
    async def cache_stats(handler: HandlerDep) -> CacheStatsResponse:
        """Get cache statistics."""
        return await handler.get_stats()

    @app.delete("/cache/{key}", response_model=CacheDeleteResponse)
    async def delete_cache_entry(
        key: Annotated[str, Path(pattern="^[0-9a-f]{32}$", description="Cache key (MD5 hex digest)")],
        handler: HandlerDep,
    ) -> CacheDeleteResponse:
        """Delete a single cache entry."""
        return await handler.delete_cache_entry(key)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "osm_gateway.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
