"""Redis-backed cache backend for cached GET responses.

Thin async adapter over redis.asyncio: GET, SET EX, DEL and SCAN MATCH.
Connectivity is checked once with connect(); there is no reconnection and
no retry. Runtime failures are raised as CacheBackendError so the caller
decides how to degrade.
"""

from __future__ import annotations

import logging

import redis.asyncio as redis

from app.core.config import Settings, get_settings
from app.domain.enums import CacheBackendState
from app.infrastructure.cache.cache_protocol import CacheBackendError

logger = logging.getLogger(__name__)


class RedisCacheBackend:
    """Async Redis cache backend (networked, shared between instances).

    Call connect() once at startup; if it returns False the caller should
    switch to MemoryCacheBackend. Call close() at shutdown.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize backend.

        Args:
            redis_client: Optional Redis client for testing or DI.
            settings: Optional settings; defaults to get_settings().
        """
        self.redis = redis_client
        self.settings = settings or get_settings()
        self._connected = False

    @property
    def state(self) -> CacheBackendState:
        return CacheBackendState.CONNECTED

    def _build_client(self) -> redis.Redis:
        s = self.settings
        if s.redis_url:
            return redis.Redis.from_url(
                s.redis_url,
                decode_responses=True,
                socket_connect_timeout=s.redis_connect_timeout,
                socket_keepalive=True,
            )
        return redis.Redis(
            host=s.redis_host,
            port=s.redis_port,
            db=s.redis_db,
            password=s.redis_password.get_secret_value() if s.redis_password else None,
            decode_responses=True,
            socket_connect_timeout=s.redis_connect_timeout,
            socket_keepalive=True,
        )

    def _describe_target(self) -> str:
        s = self.settings
        return s.redis_url or f"{s.redis_host}:{s.redis_port}/{s.redis_db}"

    async def connect(self) -> bool:
        """Open the client and PING it once.

        Returns:
            True if Redis answered; False otherwise, including a malformed
            REDIS_URL (client is closed and dropped).
        """
        try:
            if self.redis is None:
                self.redis = self._build_client()
            await self.redis.ping()
        except (redis.ConnectionError, redis.TimeoutError, OSError, ValueError) as e:
            logger.warning(
                "Redis connection to %s failed: %s",
                self._describe_target(),
                e,
            )
            await self._discard_client()
            return False
        self._connected = True
        logger.info("Redis cache connected: %s", self._describe_target())
        return True

    async def _discard_client(self) -> None:
        client, self.redis = self.redis, None
        self._connected = False
        if client is None:
            return
        try:
            await client.aclose()
        except redis.RedisError:
            logger.debug("Ignoring error while closing unusable Redis client", exc_info=True)

    async def close(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis is not None:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    def is_available(self) -> bool:
        """Return True if connect() succeeded and close() has not been called."""
        return self._connected and self.redis is not None

    def _client(self) -> redis.Redis:
        if not self.is_available() or self.redis is None:
            raise CacheBackendError("Redis cache backend is not connected")
        return self.redis

    async def get(self, key: str) -> str | None:
        """Return raw cached value or None if missing.

        Raises:
            CacheBackendError: If Redis fails.
        """
        client = self._client()
        try:
            return await client.get(key)
        except redis.RedisError as e:
            raise CacheBackendError(f"Redis GET failed for {key}: {e}") from e

    async def set(self, key: str, value: str, ttl: int | None = None) -> bool:
        """Store value, with EX ttl when given. Returns Redis acknowledgement.

        Raises:
            CacheBackendError: If Redis fails.
        """
        client = self._client()
        try:
            ok = await client.set(key, value, ex=ttl)
        except redis.RedisError as e:
            raise CacheBackendError(f"Redis SET failed for {key}: {e}") from e
        return bool(ok)

    async def delete(self, key: str) -> int:
        """Delete key. Returns 1 if it existed, else 0.

        Raises:
            CacheBackendError: If Redis fails.
        """
        client = self._client()
        try:
            return int(await client.delete(key) or 0)
        except redis.RedisError as e:
            raise CacheBackendError(f"Redis DEL failed for {key}: {e}") from e

    async def keys(self, pattern: str) -> list[str]:
        """Return keys matching pattern using SCAN (non-blocking, unlike KEYS).

        Raises:
            CacheBackendError: If Redis fails.
        """
        client = self._client()
        found: list[str] = []
        try:
            async for key in client.scan_iter(match=pattern):
                found.append(key)
        except redis.RedisError as e:
            raise CacheBackendError(f"Redis SCAN failed for {pattern}: {e}") from e
        return found
