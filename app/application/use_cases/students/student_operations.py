"""Student operations: create, get, list, update, delete (delegate to IStudentRepository).

Every successful mutation invalidates the cached reads it makes stale before
returning, so a read issued after the mutation completes cannot be served
from a pre-mutation cache entry.
"""

from __future__ import annotations

from typing import Any

from app.application.dtos.student import StudentResult
from app.application.interfaces.repositories import IStudentRepository
from app.application.interfaces.services import ICacheInvalidator
from app.domain.exceptions import (
    DuplicateEmailException,
    ResourceNotFoundException,
    ValidationException,
)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


class StudentService:
    """Create, query, update and delete students; enforces unique email."""

    def __init__(
        self,
        student_repo: IStudentRepository,
        invalidator: ICacheInvalidator,
    ) -> None:
        self.student_repo = student_repo
        self.invalidator = invalidator

    async def _ensure_email_free(self, email: str, student_id: str | None = None) -> None:
        existing = await self.student_repo.get_by_email(email)
        if existing and existing.id != student_id:
            raise DuplicateEmailException(email)

    async def create_student(
        self,
        name: str,
        email: str,
        grade: str,
        age: int,
        subjects: list[str] | None = None,
    ) -> StudentResult:
        """Create a student; raise DuplicateEmailException if email is taken."""
        email = _normalize_email(email)
        await self._ensure_email_free(email)
        created = await self.student_repo.create_student(
            name=name,
            email=email,
            grade=grade,
            age=age,
            subjects=list(subjects or []),
        )
        await self.invalidator.invalidate_collection()
        return created

    async def get_student(self, student_id: str) -> StudentResult:
        """Return student by id; else raise ResourceNotFoundException."""
        student = await self.student_repo.get_by_id(student_id)
        if not student:
            raise ResourceNotFoundException("student", student_id)
        return student

    async def list_students(self) -> list[StudentResult]:
        """Return all students."""
        return await self.student_repo.list_students()

    async def list_by_grade(self, grade: str) -> list[StudentResult]:
        """Return students in the given grade."""
        return await self.student_repo.list_by_grade(grade.strip())

    async def search_students(self, query: str) -> list[StudentResult]:
        """Return students whose name or email contains query (case-insensitive)."""
        query = query.strip()
        if not query:
            raise ValidationException("Search query must not be empty", field="query")
        return await self.student_repo.search(query)

    async def update_student(
        self,
        student_id: str,
        name: str | None = None,
        email: str | None = None,
        grade: str | None = None,
        age: int | None = None,
        subjects: list[str] | None = None,
    ) -> StudentResult:
        """Update supplied fields; raise ResourceNotFoundException if not found.

        None means "leave unchanged". Email uniqueness is checked against
        other students only.
        """
        updates: dict[str, Any] = {}
        if name is not None:
            updates["name"] = name
        if email is not None:
            updates["email"] = _normalize_email(email)
            await self._ensure_email_free(updates["email"], student_id=student_id)
        if grade is not None:
            updates["grade"] = grade
        if age is not None:
            updates["age"] = age
        if subjects is not None:
            updates["subjects"] = list(subjects)

        updated = await self.student_repo.update_student(student_id, updates)
        if not updated:
            raise ResourceNotFoundException("student", student_id)
        await self.invalidator.invalidate_student(student_id)
        return updated

    async def delete_student(self, student_id: str) -> None:
        """Delete student; raise ResourceNotFoundException if not found."""
        if not await self.student_repo.delete_student(student_id):
            raise ResourceNotFoundException("student", student_id)
        await self.invalidator.invalidate_student(student_id)
