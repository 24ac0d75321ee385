"""Shared fixtures and fakes for the gateway tests."""

from collections.abc import Mapping
from typing import Any

import pytest

from osm_gateway.errors import CacheIOError, UpstreamError
from osm_gateway.repositories import FileCacheRepository


class FakeFetcher:
    """UpstreamFetcher returning canned documents and recording calls."""

    def __init__(self, responses: list[Any] | None = None, error: UpstreamError | None = None) -> None:
        self.responses = list(responses or [])
        self.error = error
        self.calls: list[tuple[str, str, str | None]] = []
        self.closed = False

    def _next(self, url: str) -> Any:
        if self.error is not None:
            raise self.error
        if not self.responses:
            raise UpstreamError(url, "no canned response left")
        return self.responses.pop(0)

    async def post(self, url: str, body: str, headers: Mapping[str, str] | None = None) -> Any:
        self.calls.append(("POST", url, body))
        return self._next(url)

    async def get(self, url: str) -> Any:
        self.calls.append(("GET", url, None))
        return self._next(url)

    async def close(self) -> None:
        self.closed = True


class FailingStore:
    """CacheStore whose writes always fail and reads always miss."""

    backend_name = "failing"

    def __init__(self) -> None:
        self.set_calls = 0

    async def get(self, key: str) -> Any | None:
        return None

    async def set(self, key: str, value: Any) -> None:
        self.set_calls += 1
        raise CacheIOError(key, "disk full")

    async def delete(self, key: str) -> None:
        raise CacheIOError(key, "no such entry", missing=True)

    async def count_all(self) -> int:
        return 0

    async def health_check(self) -> bool:
        return False

    async def close(self) -> None:
        pass


def overpass_document(*elements: Any) -> dict[str, Any]:
    """Build an Overpass-shaped JSON answer."""
    return {
        "version": 0.6,
        "generator": "Overpass API 0.7.55.1011 6c2efc30",
        "osm3s": {"timestamp_osm_base": "2020-02-29T11:17:02Z"},
        "elements": list(elements),
    }


@pytest.fixture
def file_store(tmp_path) -> FileCacheRepository:
    """File cache in a temporary directory."""
    return FileCacheRepository(cache_dir=tmp_path / "cache")


@pytest.fixture
def museum_node() -> dict[str, Any]:
    return {
        "type": "node",
        "id": 1,
        "lat": 25.2,
        "lon": 55.3,
        "tags": {"tourism": "museum", "name": "X"},
    }


@pytest.fixture
def cafe_node() -> dict[str, Any]:
    return {
        "type": "node",
        "id": 2,
        "lat": 25.2001,
        "lon": 55.3001,
        "tags": {"amenity": "cafe", "name": "Coffee"},
    }


class InMemoryStore:
    """Dict-backed CacheStore."""

    backend_name = "memory"

    def __init__(self) -> None:
        self.data: dict[str, Any] = {}
        self.closed = False

    async def get(self, key: str) -> Any | None:
        return self.data.get(key)

    async def set(self, key: str, value: Any) -> None:
        self.data[key] = value

    async def delete(self, key: str) -> None:
        if self.data.pop(key, None) is None:
            raise CacheIOError(key, "no such entry", missing=True)

    async def count_all(self) -> int:
        return len(self.data)

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        self.closed = True
