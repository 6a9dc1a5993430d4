"""API request/response schemas (Pydantic)."""

from app.schemas.health import HealthResponse
from app.schemas.student import (
    StudentCreateRequest,
    StudentDeletedResponse,
    StudentResponse,
    StudentUpdate,
)

__all__ = [
    "HealthResponse",
    "StudentCreateRequest",
    "StudentDeletedResponse",
    "StudentResponse",
    "StudentUpdate",
]
