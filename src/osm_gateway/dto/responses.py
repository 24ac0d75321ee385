"""Response DTOs for API endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from osm_gateway.entities import ElementKind


class PositionItem(BaseModel):
    """Representative coordinate of an element."""

    lat: float
    lon: float


class ElementItem(BaseModel):
    """Single normalized element.

    All upstream fields (``tags``, ``bounds``, ``geometry``, ``members``,
    ``lat``/``lon`` for nodes, ...) are passed through as extra fields.
    """

    model_config = ConfigDict(extra="allow")

    type: str = Field(..., description="node, way or relation")
    id: int = Field(..., description="OSM element id")
    name: str | None = Field(None, description="English name if tagged, else the local name")
    cat: str = Field("", description="Category label, e.g. 'tourism:museum'")
    wiki: str | None = Field(None, description="Wikipedia reference")
    website: str | None = Field(None, description="Website URL")
    position: PositionItem | None = Field(
        None,
        description="South-west corner of the element's bounds",
    )


class SearchResponse(BaseModel):
    """Response DTO for a coordinate search."""

    lat: float = Field(..., description="Latitude of the search center")
    lon: float = Field(..., description="Longitude of the search center")
    kind: ElementKind = Field(..., description="Element type filter that was applied")
    count: int = Field(..., description="Number of returned elements", ge=0)
    elements: list[ElementItem] = Field(default_factory=list)


class CacheDeleteResponse(BaseModel):
    """Response DTO for cache entry deletion."""

    success: bool = Field(..., description="Whether the operation succeeded")
    key: str = Field(..., description="The deleted cache key")
    message: str = Field(..., description="Human-readable status message")


class CacheStatsResponse(BaseModel):
    """Response DTO for cache statistics."""

    backend: str = Field(..., description="Cache backend name: 'file' or 'redis'")
    total_entries: int = Field(..., description="Total number of cached entries", ge=0)
    hits: int = Field(..., description="Cache hits since startup", ge=0)
    misses: int = Field(..., description="Cache misses since startup", ge=0)
    pending_writes: int = Field(..., description="Background cache writes in flight", ge=0)
    write_failures: int = Field(..., description="Failed background cache writes", ge=0)


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    cache_healthy: bool = Field(..., description="Whether the cache backend is reachable")
