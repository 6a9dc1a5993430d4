"""Health check API schemas."""

from pydantic import BaseModel, Field

from app.domain.enums import CacheBackendState


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")
    cache: CacheBackendState = Field(
        ..., description="Response cache backend: connected (Redis) or fallback (in-memory)"
    )
