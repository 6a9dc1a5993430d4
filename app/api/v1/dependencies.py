"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the cache handles and the student service.
The cache backend and student repository are created once in the lifespan
and stored on app.state; routes receive them only through these dependencies.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from app.application.interfaces.repositories import IStudentRepository
from app.application.use_cases.students import StudentService
from app.core.config import Settings, get_settings
from app.infrastructure.cache import CacheBackend, CacheInvalidator, ReadThroughCache


def get_cache_backend(request: Request) -> CacheBackend:
    """Process-wide cache backend (Redis or in-memory fallback) chosen at startup."""
    return request.app.state.cache


def get_student_repo(request: Request) -> IStudentRepository:
    """Process-wide student repository (Firestore or in-memory) built at startup."""
    return request.app.state.student_repo


def get_read_through_cache(
    backend: Annotated[CacheBackend, Depends(get_cache_backend)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ReadThroughCache:
    """Read-through cache used by @cache_response routes."""
    return ReadThroughCache(backend, namespace=settings.cache_namespace)


def get_cache_invalidator(
    backend: Annotated[CacheBackend, Depends(get_cache_backend)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> CacheInvalidator:
    """Invalidation coordinator for student mutations."""
    return CacheInvalidator(backend, namespace=settings.cache_namespace)


def get_student_service(
    student_repo: Annotated[IStudentRepository, Depends(get_student_repo)],
    invalidator: Annotated[CacheInvalidator, Depends(get_cache_invalidator)],
) -> StudentService:
    """Student service: repository plus cache invalidation on writes."""
    return StudentService(student_repo, invalidator)
