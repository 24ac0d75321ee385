"""httpx-based client for the Overpass interpreter and the OSM main API.

Key features:
- One pooled ``httpx.AsyncClient`` for the process lifetime
- Uniform ``UpstreamError`` for transport failures, timeouts,
  non-2xx statuses and undecodable bodies
- No retries; a failed call fails the request that made it

@see https://wiki.openstreetmap.org/wiki/Overpass_API
"""

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from osm_gateway.config import settings
from osm_gateway.errors import UpstreamError

logger = logging.getLogger(__name__)

FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}


class OverpassHttpClient:
    """httpx implementation of the UpstreamFetcher protocol.

    This class satisfies the UpstreamFetcher protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        client = OverpassHttpClient.create()
        doc = await client.post(settings.osm_interpreter, "data=...", FORM_HEADERS)
        await client.close()
        ```
    """

    HEADERS = {"User-Agent": "osm-gateway/0.1"}

    def __init__(
        self,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the upstream client.

        Args:
            timeout: Request timeout in seconds. Defaults to settings.upstream_timeout.
            transport: Optional httpx transport (used to plug in a mock in tests).
        """
        self._timeout = timeout or settings.upstream_timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def create(cls, timeout: float | None = None) -> "OverpassHttpClient":
        """Factory method to create OverpassHttpClient with defaults.

        Args:
            timeout: Request timeout. If None, uses settings.

        Returns:
            Configured OverpassHttpClient
        """
        return cls(timeout=timeout)

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers=self.HEADERS,
                transport=self._transport,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    async def post(
        self,
        url: str,
        body: str,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """POST a raw body and decode the JSON answer.

        Args:
            url: Target endpoint
            body: Encoded request body
            headers: Extra request headers

        Returns:
            The decoded JSON document

        Raises:
            UpstreamError: On any network or HTTP failure
        """
        return await self._send("POST", url, content=body, headers=dict(headers or {}))

    async def get(self, url: str) -> Any:
        """GET a URL and decode the JSON answer.

        Raises:
            UpstreamError: On any network or HTTP failure
        """
        return await self._send("GET", url)

    async def _send(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            response = await self.client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.error("Upstream timeout for %s %s: %s", method, url, e)
            raise UpstreamError(url, f"timed out after {self._timeout}s") from e
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error("Upstream %s %s returned HTTP %s", method, url, status_code)
            raise UpstreamError(url, f"HTTP {status_code}", status_code=status_code) from e
        except httpx.HTTPError as e:
            logger.error("Upstream %s %s failed: %s", method, url, e)
            raise UpstreamError(url, str(e) or type(e).__name__) from e

        try:
            return response.json()
        except ValueError as e:
            logger.error("Upstream %s %s returned invalid JSON: %s", method, url, e)
            raise UpstreamError(url, "response is not valid JSON", status_code=response.status_code) from e

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
