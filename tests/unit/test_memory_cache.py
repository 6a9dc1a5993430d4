"""Unit tests for MemoryCacheBackend (in-process fallback store)."""

import asyncio

from app.domain.enums import CacheBackendState
from app.infrastructure.cache import MemoryCacheBackend


async def test_state_is_fallback(memory_cache: MemoryCacheBackend) -> None:
    assert memory_cache.state is CacheBackendState.FALLBACK


async def test_read_your_writes(memory_cache: MemoryCacheBackend) -> None:
    assert await memory_cache.get("k") is None
    assert await memory_cache.set("k", "v") is True
    assert await memory_cache.get("k") == "v"
    await memory_cache.set("k", "v2")
    assert await memory_cache.get("k") == "v2"


async def test_delete_returns_count(memory_cache: MemoryCacheBackend) -> None:
    await memory_cache.set("k", "v")
    assert await memory_cache.delete("k") == 1
    assert await memory_cache.delete("k") == 0
    assert await memory_cache.get("k") is None


async def test_keys_matches_namespace_only(memory_cache: MemoryCacheBackend) -> None:
    """students:/api/students* matches both student keys and not other:/foo."""
    for key in ("students:/api/students", "students:/api/students/123", "other:/foo"):
        await memory_cache.set(key, "x")
    keys = await memory_cache.keys("students:/api/students*")
    assert sorted(keys) == ["students:/api/students", "students:/api/students/123"]


async def test_keys_is_anchored(memory_cache: MemoryCacheBackend) -> None:
    """The pattern must match the whole key, not a substring."""
    await memory_cache.set("prefix-students:/api/students", "x")
    await memory_cache.set("students:/api/students", "x")
    assert await memory_cache.keys("students:/api/students") == ["students:/api/students"]
    assert await memory_cache.keys("students:*") == ["students:/api/students"]


async def test_keys_without_matches_is_empty(memory_cache: MemoryCacheBackend) -> None:
    assert await memory_cache.keys("students:*") == []


async def test_keys_does_not_escape_regex_metacharacters(memory_cache: MemoryCacheBackend) -> None:
    """Known limitation: '.' in a pattern is a regex wildcard for one character."""
    await memory_cache.set("students:/a-b", "x")
    assert await memory_cache.keys("students:/a.b") == ["students:/a-b"]


async def test_ttl_expiry(memory_cache: MemoryCacheBackend) -> None:
    """An entry written with ttl=1 is gone after one second."""
    await memory_cache.set("k", "v", ttl=1)
    assert await memory_cache.get("k") == "v"
    await asyncio.sleep(1.2)
    assert await memory_cache.get("k") is None


async def test_entry_without_ttl_does_not_expire(memory_cache: MemoryCacheBackend) -> None:
    await memory_cache.set("k", "v")
    await asyncio.sleep(0.1)
    assert await memory_cache.get("k") == "v"


async def test_overwrite_keeps_original_expiry(memory_cache: MemoryCacheBackend) -> None:
    """Known limitation: overwriting does not reschedule; the first expiry removes the new value."""
    await memory_cache.set("k", "old", ttl=1)
    await asyncio.sleep(0.5)
    await memory_cache.set("k", "new", ttl=60)
    assert await memory_cache.get("k") == "new"
    await asyncio.sleep(0.7)
    assert await memory_cache.get("k") is None


async def test_close_clears_entries_and_timers(memory_cache: MemoryCacheBackend) -> None:
    await memory_cache.set("a", "1", ttl=60)
    await memory_cache.set("b", "2")
    await memory_cache.close()
    assert len(memory_cache) == 0
    assert await memory_cache.get("a") is None
