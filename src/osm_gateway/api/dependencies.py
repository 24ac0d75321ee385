"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services built once per process in the lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from osm_gateway.config import settings
from osm_gateway.handlers import SearchHandler
from osm_gateway.protocols import CacheStore, UpstreamFetcher
from osm_gateway.repositories import FileCacheRepository, OverpassHttpClient, RedisCacheRepository
from osm_gateway.services import QueryCacheCoordinator, SearchService

logger = logging.getLogger(__name__)


def get_search_service(request: Request) -> SearchService:
    """Dependency injection for SearchService from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The SearchService instance from app.state

    Raises:
        RuntimeError: If service is not initialized
    """
    service = getattr(request.app.state, "search_service", None)
    if service is None:
        raise RuntimeError("SearchService not initialized. Check lifespan setup.")
    return service


def get_handler(request: Request) -> SearchHandler:
    """Dependency injection for SearchHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The SearchHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "search_handler", None)
    if handler is None:
        raise RuntimeError("SearchHandler not initialized. Check lifespan setup.")
    return handler


def build_cache_store() -> CacheStore:
    """Create the cache backend selected by CACHE_BACKEND."""
    if settings.uses_redis:
        return RedisCacheRepository.create()
    return FileCacheRepository.create()


def make_lifespan(
    store: CacheStore | None = None,
    fetcher: UpstreamFetcher | None = None,
) -> Callable[[FastAPI], AbstractAsyncContextManager[None]]:
    """Build the lifespan context manager for the FastAPI app.

    Args:
        store: Cache backend to use instead of the configured one.
        fetcher: Upstream client to use instead of the httpx client.

    Returns:
        A lifespan function for ``FastAPI(lifespan=...)``
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Initialize all layers and store them in app.state.

        1. Cache store and upstream client (data access)
        2. Coordinator and search service (business logic)
        3. Handler (HTTP endpoints)

        Cleanup:
            Waits for pending cache writes, closes the cache store and the
            upstream client, and removes all services from app.state on shutdown
        """
        cache_store = store if store is not None else build_cache_store()
        upstream = fetcher if fetcher is not None else OverpassHttpClient.create()

        coordinator = QueryCacheCoordinator(store=cache_store)
        search_service = SearchService.create(coordinator=coordinator, fetcher=upstream)
        search_handler = SearchHandler(search_service=search_service)

        app.state.cache_store = cache_store
        app.state.coordinator = coordinator
        app.state.search_service = search_service
        app.state.search_handler = search_handler

        logger.info("Cache backend: %s", cache_store.backend_name)
        logger.info("Overpass interpreter: %s", settings.osm_interpreter)

        yield

        await coordinator.drain()
        await cache_store.close()
        await upstream.close()

        del app.state.search_handler
        del app.state.search_service
        del app.state.coordinator
        del app.state.cache_store
        logger.info("Search service shut down")

    return lifespan


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[SearchHandler, Depends(get_handler)]
ServiceDep = Annotated[SearchService, Depends(get_search_service)]
