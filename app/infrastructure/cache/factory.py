"""Cache backend selection (startup only).

Redis is tried once; when it is disabled or does not answer, the in-memory
store takes over for the life of the process.
"""

from __future__ import annotations

import logging

from app.core.config import Settings
from app.infrastructure.cache.cache_protocol import CacheBackend
from app.infrastructure.cache.memory_cache import MemoryCacheBackend
from app.infrastructure.cache.redis_cache import RedisCacheBackend

logger = logging.getLogger(__name__)


async def open_cache_backend(
    settings: Settings,
    redis_backend: RedisCacheBackend | None = None,
) -> CacheBackend:
    """Return the cache backend for this process.

    Args:
        settings: Application settings (redis_enabled and connection options).
        redis_backend: Optional pre-built Redis backend (tests, DI).

    Returns:
        Connected RedisCacheBackend, or MemoryCacheBackend as fallback.
    """
    if not settings.redis_enabled:
        logger.info("Redis cache disabled; using in-memory cache")
        return MemoryCacheBackend()

    backend = redis_backend or RedisCacheBackend(settings=settings)
    if await backend.connect():
        return backend
    logger.warning(
        "Using in-memory fallback cache (not shared between instances)"
    )
    return MemoryCacheBackend()
