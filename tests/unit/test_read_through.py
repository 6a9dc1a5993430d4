"""Unit tests for ReadThroughCache (hit/miss, degradation on backend failure)."""

from unittest.mock import AsyncMock

import pytest

from app.infrastructure.cache import (
    CacheBackendError,
    MemoryCacheBackend,
    ReadThroughCache,
)


@pytest.fixture
def cache(memory_cache: MemoryCacheBackend) -> ReadThroughCache:
    return ReadThroughCache(memory_cache)


async def test_miss_then_hit(cache: ReadThroughCache) -> None:
    loader = AsyncMock(return_value=[{"id": "1", "grade": "5"}])
    key = cache.key_for("/api/students")

    first = await cache.fetch(key, loader, ttl=60)
    second = await cache.fetch(key, loader, ttl=60)

    assert first.hit is False
    assert second.hit is True
    assert first.payload == second.payload == [{"id": "1", "grade": "5"}]
    loader.assert_awaited_once()


async def test_miss_stores_json_with_ttl() -> None:
    backend = AsyncMock()
    backend.get.return_value = None
    cache = ReadThroughCache(backend)
    await cache.fetch("students:/api/students", AsyncMock(return_value={"a": 1}), ttl=30)
    backend.set.assert_awaited_once_with("students:/api/students", '{"a": 1}', ttl=30)


async def test_cached_null_payload_is_a_hit(cache: ReadThroughCache) -> None:
    loader = AsyncMock(return_value=None)
    await cache.fetch("k", loader, ttl=60)
    result = await cache.fetch("k", loader, ttl=60)
    assert result.hit is True
    assert result.payload is None
    loader.assert_awaited_once()


async def test_loader_error_propagates_and_is_not_cached(
    cache: ReadThroughCache, memory_cache: MemoryCacheBackend
) -> None:
    loader = AsyncMock(side_effect=LookupError("not found"))
    with pytest.raises(LookupError):
        await cache.fetch("k", loader, ttl=60)
    assert await memory_cache.get("k") is None


async def test_lookup_failure_is_treated_as_miss() -> None:
    backend = AsyncMock()
    backend.get.side_effect = CacheBackendError("down")
    cache = ReadThroughCache(backend)
    loader = AsyncMock(return_value={"ok": True})

    result = await cache.fetch("k", loader, ttl=60)

    assert result.hit is False
    assert result.payload == {"ok": True}
    loader.assert_awaited_once()


async def test_write_back_failure_still_returns_payload() -> None:
    backend = AsyncMock()
    backend.get.return_value = None
    backend.set.side_effect = CacheBackendError("down")
    cache = ReadThroughCache(backend)

    result = await cache.fetch("k", AsyncMock(return_value=[1, 2]), ttl=60)

    assert result.payload == [1, 2]


async def test_undecodable_entry_is_a_miss(
    cache: ReadThroughCache, memory_cache: MemoryCacheBackend
) -> None:
    await memory_cache.set("k", "{not json")
    loader = AsyncMock(return_value={"fresh": True})
    result = await cache.fetch("k", loader, ttl=60)
    assert result.hit is False
    assert result.payload == {"fresh": True}
    assert await memory_cache.get("k") == '{"fresh": true}'


def test_key_for_uses_namespace(memory_cache: MemoryCacheBackend) -> None:
    cache = ReadThroughCache(memory_cache, namespace="other")
    assert cache.key_for("/api/students/1", "a=b") == "other:/api/students/1?a=b"
