"""Read-through response cache.

fetch() serves a JSON payload from the backend when present; otherwise it
runs the loader, stores the payload with a TTL and returns it. Backend
failures degrade to a miss (lookup) or are dropped (write-back); they are
logged and never raised. Loader exceptions propagate and nothing is cached.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from app.core.constants import CACHE_PREFIX_STUDENTS
from app.infrastructure.cache.cache_protocol import CacheBackend, CacheBackendError
from app.infrastructure.cache.keys import response_key

logger = logging.getLogger(__name__)

_MISS = object()


@dataclass(frozen=True)
class CachedRead:
    """Outcome of ReadThroughCache.fetch: the payload and whether it came from cache."""

    key: str
    payload: Any
    hit: bool


class ReadThroughCache:
    """Read-through cache over a CacheBackend for JSON-compatible payloads."""

    def __init__(
        self, backend: CacheBackend, namespace: str = CACHE_PREFIX_STUDENTS
    ) -> None:
        self.backend = backend
        self.namespace = namespace

    def key_for(self, path: str, query: str = "") -> str:
        """Cache key for a request path and raw query string."""
        return response_key(path, query, namespace=self.namespace)

    async def _lookup(self, key: str) -> Any:
        try:
            raw = await self.backend.get(key)
        except CacheBackendError as e:
            logger.warning("Cache lookup failed for %s, treating as miss: %s", key, e)
            return _MISS
        if raw is None:
            return _MISS
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Discarding undecodable cache entry %s", key)
            return _MISS

    async def _store(self, key: str, payload: Any, ttl: int) -> None:
        try:
            await self.backend.set(key, json.dumps(payload), ttl=ttl)
        except CacheBackendError as e:
            logger.warning("Cache write-back failed for %s: %s", key, e)
            return
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)

    async def fetch(
        self,
        key: str,
        loader: Callable[[], Awaitable[Any]],
        ttl: int,
    ) -> CachedRead:
        """Return cached payload for key, or load, store and return it.

        Args:
            key: Cache key (see key_for).
            loader: Produces the JSON-compatible payload on a miss.
            ttl: Time-to-live in seconds for the stored payload.

        Returns:
            CachedRead with the payload and hit flag.
        """
        cached = await self._lookup(key)
        if cached is not _MISS:
            logger.debug("Cache HIT: %s", key)
            return CachedRead(key=key, payload=cached, hit=True)

        logger.debug("Cache MISS: %s", key)
        payload = await loader()
        await self._store(key, payload, ttl)
        return CachedRead(key=key, payload=payload, hit=False)
