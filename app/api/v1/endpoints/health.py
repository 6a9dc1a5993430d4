"""Health check endpoint. Used for liveness probes; reports the cache backend state."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import get_cache_backend
from app.infrastructure.cache import CacheBackend
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check(
    cache: Annotated[CacheBackend, Depends(get_cache_backend)],
) -> HealthResponse:
    """Return ok status and whether the cache is Redis or the in-memory fallback."""
    return HealthResponse(cache=cache.state)
