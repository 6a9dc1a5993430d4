"""In-memory fallback cache backend.

Used when Redis is disabled or unreachable at startup. Same contract as
RedisCacheBackend over a plain dict; state lives in this process only.

Known limitations, kept on purpose:
- TTL expiry is a deferred removal scheduled on the event loop. A key keeps
  its first pending removal: overwriting it (with or without a new TTL)
  does not reschedule, so the earlier removal deletes the newer value.
  Deleting a key does not cancel its pending removal either.
- keys() replaces the first '*' with '.*' and matches the whole key. Other
  regex metacharacters in the pattern are not escaped, so e.g. '.' matches
  any character.
"""

from __future__ import annotations

import asyncio
import logging
import re

from app.core.constants import CACHE_KEY_WILDCARD
from app.domain.enums import CacheBackendState

logger = logging.getLogger(__name__)


def pattern_to_regex(pattern: str) -> re.Pattern[str]:
    """Translate a single-wildcard key pattern to an anchored regex."""
    return re.compile(f"^{pattern.replace(CACHE_KEY_WILDCARD, '.*', 1)}$")


class MemoryCacheBackend:
    """Process-local cache backend (no cross-instance sharing)."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}
        self._expiries: dict[str, asyncio.TimerHandle] = {}

    @property
    def state(self) -> CacheBackendState:
        return CacheBackendState.FALLBACK

    def __len__(self) -> int:
        return len(self._data)

    def _expire(self, key: str) -> None:
        self._expiries.pop(key, None)
        if self._data.pop(key, None) is not None:
            logger.debug("Memory cache EXPIRE: %s", key)

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str, ttl: int | None = None) -> bool:
        self._data[key] = value
        if ttl is not None and key not in self._expiries:
            loop = asyncio.get_running_loop()
            self._expiries[key] = loop.call_later(ttl, self._expire, key)
        return True

    async def delete(self, key: str) -> int:
        return 1 if self._data.pop(key, None) is not None else 0

    async def keys(self, pattern: str) -> list[str]:
        regex = pattern_to_regex(pattern)
        return [key for key in list(self._data) if regex.match(key)]

    async def close(self) -> None:
        """Cancel pending expiries and drop all entries."""
        for handle in self._expiries.values():
            handle.cancel()
        self._expiries.clear()
        self._data.clear()
