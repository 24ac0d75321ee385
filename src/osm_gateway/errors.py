"""Error taxonomy for the gateway.

- UpstreamError: the Overpass/OSM endpoint could not be reached or
  answered with a non-2xx status. Always aborts the request.
- CacheIOError: the cache backend failed to read, write or delete an
  entry. Swallowed on get/set, surfaced only for explicit deletes.
- MalformedResponse: an upstream document has no usable ``elements``
  list. Treated as an empty result.
"""


class GatewayError(Exception):
    """Base class for all gateway errors."""


class UpstreamError(GatewayError):
    """Network or HTTP failure while calling an upstream endpoint."""

    def __init__(self, endpoint: str, message: str, status_code: int | None = None) -> None:
        self.endpoint = endpoint
        self.status_code = status_code
        super().__init__(f"{endpoint}: {message}")


class CacheIOError(GatewayError):
    """Persistence failure in a cache backend."""

    def __init__(self, key: str, message: str, missing: bool = False) -> None:
        self.key = key
        self.missing = missing
        super().__init__(f"cache entry {key}: {message}")


class MalformedResponse(GatewayError):
    """Upstream JSON document without a usable ``elements`` field."""
