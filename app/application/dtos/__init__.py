"""Application DTOs (no storage dependency)."""

from app.application.dtos.student import StudentResult

__all__ = ["StudentResult"]
