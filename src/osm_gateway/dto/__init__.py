"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic works on plain element mappings and the
entities package.
"""

from .requests import SearchRequest
from .responses import (
    CacheDeleteResponse,
    CacheStatsResponse,
    ElementItem,
    HealthCheckResponse,
    PositionItem,
    SearchResponse,
)

__all__ = [
    "SearchRequest",
    "ElementItem",
    "PositionItem",
    "SearchResponse",
    "CacheDeleteResponse",
    "CacheStatsResponse",
    "HealthCheckResponse",
]
