"""Pytest configuration and fixtures for the Students API.

Tests run against the in-memory document store and the in-memory cache
backend (Redis disabled), so no external services are needed. The env is
set before app.main is imported because create_app() reads settings.
"""

import os
from collections.abc import AsyncIterator

os.environ["DATABASE_BACKEND"] = "memory"
os.environ["REDIS_ENABLED"] = "false"

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.core.config import Settings, get_settings  # noqa: E402

get_settings.cache_clear()

from app.core.lifespan import create_lifespan  # noqa: E402
from app.infrastructure.cache import MemoryCacheBackend  # noqa: E402
from app.main import app as fastapi_app  # noqa: E402


@pytest.fixture
async def app() -> AsyncIterator[FastAPI]:
    """FastAPI app with lifespan started (fresh cache and student store per test)."""
    async with create_lifespan(fastapi_app):
        yield fastapi_app


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def settings() -> Settings:
    """Settings for unit tests that build backends directly."""
    return Settings(database_backend="memory", redis_enabled=True)


@pytest.fixture
async def memory_cache() -> AsyncIterator[MemoryCacheBackend]:
    """Empty in-memory cache backend; closed (timers cancelled) after the test."""
    backend = MemoryCacheBackend()
    yield backend
    await backend.close()


@pytest.fixture
def student_payload() -> dict:
    """Valid POST /api/students body."""
    return {"name": "A", "email": "a@x.com", "grade": "5", "age": 10}
