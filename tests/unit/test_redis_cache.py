"""Unit tests for RedisCacheBackend and startup backend selection (mocked Redis client)."""

from unittest.mock import AsyncMock, MagicMock

import pytest
import redis.asyncio as redis

from app.core.config import Settings
from app.domain.enums import CacheBackendState
from app.infrastructure.cache import (
    CacheBackendError,
    MemoryCacheBackend,
    RedisCacheBackend,
    open_cache_backend,
)


async def _scan(*keys: str):
    for key in keys:
        yield key


def _client(ping_error: Exception | None = None) -> MagicMock:
    client = MagicMock()
    client.ping = AsyncMock(side_effect=ping_error)
    client.aclose = AsyncMock()
    client.get = AsyncMock(return_value=None)
    client.set = AsyncMock(return_value=True)
    client.delete = AsyncMock(return_value=1)
    return client


@pytest.fixture
async def connected(settings: Settings) -> tuple[RedisCacheBackend, MagicMock]:
    client = _client()
    backend = RedisCacheBackend(redis_client=client, settings=settings)
    assert await backend.connect() is True
    return backend, client


async def test_connect_pings_injected_client(settings: Settings) -> None:
    client = _client()
    backend = RedisCacheBackend(redis_client=client, settings=settings)
    assert await backend.connect() is True
    client.ping.assert_awaited_once()
    assert backend.is_available()
    assert backend.state is CacheBackendState.CONNECTED


async def test_connect_failure_returns_false_and_drops_client(settings: Settings) -> None:
    client = _client(ping_error=redis.ConnectionError("refused"))
    backend = RedisCacheBackend(redis_client=client, settings=settings)
    assert await backend.connect() is False
    assert not backend.is_available()
    assert backend.redis is None
    client.aclose.assert_awaited_once()


async def test_operations_before_connect_raise(settings: Settings) -> None:
    backend = RedisCacheBackend(redis_client=_client(), settings=settings)
    with pytest.raises(CacheBackendError):
        await backend.get("k")


async def test_get_returns_value(connected) -> None:
    backend, client = connected
    client.get.return_value = '{"a": 1}'
    assert await backend.get("students:/api/students") == '{"a": 1}'
    client.get.assert_awaited_once_with("students:/api/students")


async def test_get_missing_returns_none(connected) -> None:
    backend, _ = connected
    assert await backend.get("missing") is None


async def test_set_passes_ttl_as_ex(connected) -> None:
    backend, client = connected
    assert await backend.set("k", "v", ttl=60) is True
    client.set.assert_awaited_once_with("k", "v", ex=60)


async def test_set_without_ttl(connected) -> None:
    backend, client = connected
    await backend.set("k", "v")
    client.set.assert_awaited_once_with("k", "v", ex=None)


async def test_delete_returns_count(connected) -> None:
    backend, client = connected
    client.delete.return_value = 0
    assert await backend.delete("k") == 0


async def test_keys_uses_scan_match(connected) -> None:
    backend, client = connected
    client.scan_iter = MagicMock(
        return_value=_scan("students:/api/students", "students:/api/students/123")
    )
    keys = await backend.keys("students:/api/students*")
    assert keys == ["students:/api/students", "students:/api/students/123"]
    client.scan_iter.assert_called_once_with(match="students:/api/students*")


@pytest.mark.parametrize("method,args", [("get", ("k",)), ("set", ("k", "v")), ("delete", ("k",))])
async def test_runtime_errors_surface_as_cache_backend_error(connected, method, args) -> None:
    backend, client = connected
    getattr(client, method).side_effect = redis.ConnectionError("gone")
    with pytest.raises(CacheBackendError):
        await getattr(backend, method)(*args)


async def test_close_releases_client(connected) -> None:
    backend, client = connected
    await backend.close()
    client.aclose.assert_awaited_once()
    assert not backend.is_available()


async def test_open_cache_backend_uses_redis_when_reachable(settings: Settings) -> None:
    redis_backend = RedisCacheBackend(redis_client=_client(), settings=settings)
    backend = await open_cache_backend(settings, redis_backend=redis_backend)
    assert backend is redis_backend
    assert backend.state is CacheBackendState.CONNECTED


async def test_open_cache_backend_falls_back_when_unreachable(settings: Settings) -> None:
    """When Redis cannot connect, the memory store serves get/set/delete/keys."""
    redis_backend = RedisCacheBackend(
        redis_client=_client(ping_error=redis.ConnectionError("refused")),
        settings=settings,
    )
    backend = await open_cache_backend(settings, redis_backend=redis_backend)
    assert isinstance(backend, MemoryCacheBackend)
    assert backend.state is CacheBackendState.FALLBACK

    await backend.set("students:/api/students", "[]", ttl=60)
    assert await backend.get("students:/api/students") == "[]"
    assert await backend.keys("students:*") == ["students:/api/students"]
    assert await backend.delete("students:/api/students") == 1
    assert await backend.get("students:/api/students") is None
    await backend.close()


async def test_open_cache_backend_when_disabled() -> None:
    settings = Settings(database_backend="memory", redis_enabled=False)
    backend = await open_cache_backend(settings)
    assert isinstance(backend, MemoryCacheBackend)


async def test_malformed_redis_url_falls_back_to_memory() -> None:
    """A REDIS_URL without a scheme is a startup connect failure, not a crash."""
    settings = Settings(database_backend="memory", redis_url="localhost:6379")
    redis_backend = RedisCacheBackend(settings=settings)
    assert await redis_backend.connect() is False
    assert redis_backend.redis is None

    backend = await open_cache_backend(settings)
    assert isinstance(backend, MemoryCacheBackend)
    await backend.close()
