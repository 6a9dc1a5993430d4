"""Repository interfaces (ports) for the application layer.

Protocols define contracts for document-store implementations (DIP).
"""

from __future__ import annotations

from typing import Any, Protocol

from app.application.dtos.student import StudentResult


class IStudentRepository(Protocol):
    """Protocol for student repository (DIP). Firestore and in-memory implement it."""

    async def create_student(
        self,
        name: str,
        email: str,
        grade: str,
        age: int,
        subjects: list[str],
    ) -> StudentResult:
        """Persist a new student and return it with its generated id."""

    async def get_by_id(self, student_id: str) -> StudentResult | None:
        """Return student by ID."""

    async def get_by_email(self, email: str) -> StudentResult | None:
        """Return student by (normalized) email."""

    async def list_students(self) -> list[StudentResult]:
        """Return all students."""

    async def list_by_grade(self, grade: str) -> list[StudentResult]:
        """Return students whose grade equals grade."""

    async def search(self, query: str) -> list[StudentResult]:
        """Return students whose name or email contains query (case-insensitive)."""

    async def update_student(
        self, student_id: str, updates: dict[str, Any]
    ) -> StudentResult | None:
        """Apply field updates; return updated student or None if not found."""

    async def delete_student(self, student_id: str) -> bool:
        """Delete student; return False if it did not exist."""
