"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field

from osm_gateway.entities import ElementKind


class SearchRequest(BaseModel):
    """Request DTO for a coordinate search.

    The handler will convert this to internal calls to the service layer.
    """

    lat: float = Field(..., description="Latitude of the search center", ge=-90.0, le=90.0)
    lon: float = Field(..., description="Longitude of the search center", ge=-180.0, le=180.0)
    kind: ElementKind = Field(
        ElementKind.ANY,
        description="Element type to return: any, node, way or relation",
    )
