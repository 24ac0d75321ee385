"""Tests for the on-disk cache store."""

import json

import pytest

from osm_gateway.errors import CacheIOError
from osm_gateway.protocols import CacheStore
from osm_gateway.repositories import FileCacheRepository

KEY = "0123456789abcdef0123456789abcdef"


def test_satisfies_protocol(file_store):
    assert isinstance(file_store, CacheStore)


def test_creates_cache_dir(tmp_path):
    target = tmp_path / "nested" / "cache"
    FileCacheRepository(cache_dir=target)
    assert target.is_dir()


@pytest.mark.asyncio
async def test_get_before_set_is_a_miss(file_store):
    assert await file_store.get(KEY) is None


@pytest.mark.asyncio
async def test_set_then_get(file_store):
    value = {"elements": [{"type": "node", "id": 1}]}
    await file_store.set(KEY, value)
    assert await file_store.get(KEY) == value
    assert (file_store.cache_dir / f"{KEY}.json").is_file()


@pytest.mark.asyncio
async def test_set_overwrites(file_store):
    await file_store.set(KEY, {"v": 1})
    await file_store.set(KEY, {"v": 2})
    assert await file_store.get(KEY) == {"v": 2}


@pytest.mark.asyncio
async def test_corrupt_entry_is_a_miss(file_store):
    (file_store.cache_dir / f"{KEY}.json").write_text("{not json", encoding="utf-8")
    assert await file_store.get(KEY) is None


@pytest.mark.asyncio
async def test_undecodable_entry_is_a_miss(file_store):
    (file_store.cache_dir / f"{KEY}.json").write_bytes(b"\xff\xfe{garbage")
    assert await file_store.get(KEY) is None


@pytest.mark.asyncio
async def test_set_leaves_no_temp_files(file_store):
    await file_store.set(KEY, {"v": 1})
    names = [p.name for p in file_store.cache_dir.iterdir()]
    assert names == [f"{KEY}.json"]


@pytest.mark.asyncio
async def test_set_rejects_unserializable_value(file_store):
    with pytest.raises(CacheIOError):
        await file_store.set(KEY, {"v": object()})
    assert await file_store.get(KEY) is None


@pytest.mark.asyncio
async def test_delete_removes_entry(file_store):
    await file_store.set(KEY, [1, 2, 3])
    await file_store.delete(KEY)
    assert await file_store.get(KEY) is None


@pytest.mark.asyncio
async def test_delete_missing_entry_raises(file_store):
    with pytest.raises(CacheIOError) as exc_info:
        await file_store.delete(KEY)
    assert exc_info.value.missing


@pytest.mark.asyncio
async def test_count_and_health(file_store):
    assert await file_store.count_all() == 0
    await file_store.set(KEY, {})
    await file_store.set("f" * 32, {})
    assert await file_store.count_all() == 2
    assert await file_store.health_check()


@pytest.mark.asyncio
async def test_stored_content_is_plain_json(file_store):
    await file_store.set(KEY, {"elements": []})
    raw = (file_store.cache_dir / f"{KEY}.json").read_text(encoding="utf-8")
    assert json.loads(raw) == {"elements": []}
