"""Upstream fetcher protocol.

Defines the interface the gateway needs from an HTTP client talking to
the Overpass interpreter and the OSM main API. Transport details
(connection pooling, timeouts, JSON decoding) stay behind it.
"""

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class UpstreamFetcher(Protocol):
    """Protocol for upstream HTTP clients.

    Every failure (transport error, timeout, non-2xx status, undecodable
    body) must surface as ``UpstreamError``.
    """

    async def post(
        self,
        url: str,
        body: str,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """POST a raw body and return the parsed JSON response.

        Args:
            url: Target endpoint
            body: Request body, already encoded
            headers: Extra request headers

        Returns:
            The decoded JSON document

        Raises:
            UpstreamError: On any network or HTTP failure
        """
        ...

    async def get(self, url: str) -> Any:
        """GET a URL and return the parsed JSON response.

        Raises:
            UpstreamError: On any network or HTTP failure
        """
        ...

    async def close(self) -> None:
        """Release pooled connections."""
        ...
