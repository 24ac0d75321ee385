"""Tests for the query cache coordinator."""

import asyncio
import logging

import pytest

from osm_gateway.errors import UpstreamError
from osm_gateway.services import QueryCacheCoordinator, cache_key

from conftest import FailingStore, InMemoryStore

ENDPOINT = "https://overpass-api.de/api/interpreter"
BODY = "data=%5Bout%3Ajson%5D%3B"


def counting_fetch(values):
    calls = []

    async def fetch():
        calls.append(1)
        return values[len(calls) - 1]

    return fetch, calls


@pytest.mark.asyncio
async def test_second_call_is_served_from_cache(file_store):
    coordinator = QueryCacheCoordinator(store=file_store)
    fetch, calls = counting_fetch([{"n": 1}, {"n": 2}])

    first = await coordinator.fetch_with_cache(ENDPOINT, BODY, fetch)
    await coordinator.drain()
    second = await coordinator.fetch_with_cache(ENDPOINT, BODY, fetch)

    assert first == {"n": 1}
    assert second == {"n": 1}
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_miss_persists_under_request_key(file_store):
    coordinator = QueryCacheCoordinator(store=file_store)
    fetch, _ = counting_fetch([{"elements": []}])

    await coordinator.fetch_with_cache(ENDPOINT, BODY, fetch)
    await coordinator.drain()

    assert await file_store.get(cache_key(ENDPOINT, BODY)) == {"elements": []}
    assert coordinator.pending_writes == 0


@pytest.mark.asyncio
async def test_different_bodies_are_cached_separately(file_store):
    coordinator = QueryCacheCoordinator(store=file_store)
    fetch, calls = counting_fetch([{"n": 1}, {"n": 2}])

    assert await coordinator.fetch_with_cache(ENDPOINT, "data=a", fetch) == {"n": 1}
    await coordinator.drain()
    assert await coordinator.fetch_with_cache(ENDPOINT, "data=b", fetch) == {"n": 2}
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_upstream_failure_propagates_and_is_not_cached(file_store):
    coordinator = QueryCacheCoordinator(store=file_store)

    async def failing():
        raise UpstreamError(ENDPOINT, "HTTP 504", status_code=504)

    with pytest.raises(UpstreamError) as exc_info:
        await coordinator.fetch_with_cache(ENDPOINT, BODY, failing)
    await coordinator.drain()

    assert exc_info.value.endpoint == ENDPOINT
    assert await file_store.count_all() == 0


@pytest.mark.asyncio
async def test_cache_write_failure_does_not_reach_caller(caplog):
    store = FailingStore()
    coordinator = QueryCacheCoordinator(store=store)
    fetch, _ = counting_fetch([{"n": 1}])

    with caplog.at_level(logging.ERROR):
        result = await coordinator.fetch_with_cache(ENDPOINT, BODY, fetch)
        await coordinator.drain()

    assert result == {"n": 1}
    assert store.set_calls == 1
    assert "Cache write failed" in caplog.text
    stats = await coordinator.get_stats()
    assert stats["write_failures"] == 1


@pytest.mark.asyncio
async def test_write_does_not_block_the_caller(file_store):
    release = asyncio.Event()

    class SlowStore:
        backend_name = "slow"

        async def get(self, key):
            return None

        async def set(self, key, value):
            await release.wait()
            await file_store.set(key, value)

    coordinator = QueryCacheCoordinator(store=SlowStore())
    fetch, _ = counting_fetch([{"n": 1}])

    result = await coordinator.fetch_with_cache(ENDPOINT, BODY, fetch)
    assert result == {"n": 1}
    assert coordinator.pending_writes == 1

    release.set()
    await coordinator.drain()
    assert coordinator.pending_writes == 0
    assert await file_store.get(cache_key(ENDPOINT, BODY)) == {"n": 1}


@pytest.mark.asyncio
async def test_corrupt_entry_falls_back_to_fetch(file_store):
    key = cache_key(ENDPOINT, BODY)
    (file_store.cache_dir / f"{key}.json").write_text("garbage", encoding="utf-8")
    coordinator = QueryCacheCoordinator(store=file_store)
    fetch, calls = counting_fetch([{"n": 1}])

    assert await coordinator.fetch_with_cache(ENDPOINT, BODY, fetch) == {"n": 1}
    await coordinator.drain()
    assert len(calls) == 1
    assert await file_store.get(key) == {"n": 1}


@pytest.mark.asyncio
async def test_undecodable_entry_falls_back_to_fetch(file_store):
    key = cache_key(ENDPOINT, BODY)
    (file_store.cache_dir / f"{key}.json").write_bytes(b"\xff\xfe{garbage")
    coordinator = QueryCacheCoordinator(store=file_store)
    fetch, calls = counting_fetch([{"n": 1}])

    assert await coordinator.fetch_with_cache(ENDPOINT, BODY, fetch) == {"n": 1}
    await coordinator.drain()
    assert len(calls) == 1
    assert await file_store.get(key) == {"n": 1}


@pytest.mark.asyncio
async def test_concurrent_misses_each_fetch():
    store = InMemoryStore()
    coordinator = QueryCacheCoordinator(store=store)
    calls = []

    async def fetch():
        calls.append(1)
        await asyncio.sleep(0)
        return {"n": len(calls)}

    await asyncio.gather(
        coordinator.fetch_with_cache(ENDPOINT, BODY, fetch),
        coordinator.fetch_with_cache(ENDPOINT, BODY, fetch),
    )
    await coordinator.drain()

    assert len(calls) == 2
    assert await store.get(cache_key(ENDPOINT, BODY)) == {"n": 2}


@pytest.mark.asyncio
async def test_stats_count_hits_and_misses(file_store):
    coordinator = QueryCacheCoordinator(store=file_store)
    fetch, _ = counting_fetch([{"n": 1}])

    await coordinator.fetch_with_cache(ENDPOINT, BODY, fetch)
    await coordinator.drain()
    await coordinator.fetch_with_cache(ENDPOINT, BODY, fetch)

    stats = await coordinator.get_stats()
    assert stats["backend"] == "file"
    assert stats["hits"] == 1
    assert stats["misses"] == 1
    assert stats["total_entries"] == 1
