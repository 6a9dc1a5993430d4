"""Cache backend protocol (DIP). Implemented by Redis and the in-memory fallback."""

from typing import Protocol

from app.domain.enums import CacheBackendState


class CacheBackendError(Exception):
    """Raised by a backend when a runtime operation fails (connection lost, timeout).

    Callers log it and treat the operation as a miss or no-op; it must never
    reach the HTTP client.
    """


class CacheBackend(Protocol):
    """Key/value store with TTL and single-wildcard key enumeration.

    Values are opaque strings (serialized response payloads).
    """

    @property
    def state(self) -> CacheBackendState:
        """CONNECTED for the networked store, FALLBACK for the in-process one."""
        ...

    async def get(self, key: str) -> str | None:
        """Return stored value or None. A missing key is not an error."""
        ...

    async def set(self, key: str, value: str, ttl: int | None = None) -> bool:
        """Store value; with ttl the key becomes unreadable after ttl seconds."""
        ...

    async def delete(self, key: str) -> int:
        """Remove key. Returns number of keys removed (0 or 1)."""
        ...

    async def keys(self, pattern: str) -> list[str]:
        """Return keys matching pattern (one '*' wildcard, anchored match)."""
        ...

    async def close(self) -> None:
        """Release resources. Called once at shutdown."""
        ...
