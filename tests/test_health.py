"""Smoke tests for health and app wiring."""

from httpx import AsyncClient


async def test_health_returns_ok_with_fallback_cache(client: AsyncClient) -> None:
    """GET /api/health returns 200, status ok, and the in-memory cache state."""
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "cache": "fallback"}


async def test_request_id_is_generated(client: AsyncClient) -> None:
    """Responses carry a generated X-Request-ID when the client sends none."""
    response = await client.get("/api/health")
    assert response.headers.get("X-Request-ID")


async def test_request_id_is_forwarded(client: AsyncClient) -> None:
    """A safe client X-Request-ID is echoed back unchanged."""
    response = await client.get("/api/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


async def test_unsafe_request_id_is_replaced(client: AsyncClient) -> None:
    """A request ID with unsafe characters is replaced (log injection guard)."""
    response = await client.get("/api/health", headers={"X-Request-ID": "bad id!"})
    assert response.headers["X-Request-ID"] != "bad id!"
