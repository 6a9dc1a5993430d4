"""In-memory student repository (DATABASE_BACKEND=memory).

For local development and tests. Records are kept in insertion order and
lost on restart. Same contract as FirestoreStudentRepository.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from app.application.dtos.student import StudentResult
from app.shared.utils.datetime import utc_now
from app.shared.utils.generators import generate_cuid


class InMemoryStudentRepository:
    """Student repository backed by a dict keyed by student id."""

    def __init__(self) -> None:
        self._students: dict[str, StudentResult] = {}

    async def create_student(
        self,
        name: str,
        email: str,
        grade: str,
        age: int,
        subjects: list[str],
    ) -> StudentResult:
        student = StudentResult(
            id=generate_cuid(),
            name=name,
            email=email,
            grade=grade,
            age=age,
            subjects=list(subjects),
            created_at=utc_now(),
        )
        self._students[student.id] = student
        return student

    async def get_by_id(self, student_id: str) -> StudentResult | None:
        return self._students.get(student_id)

    async def get_by_email(self, email: str) -> StudentResult | None:
        return next((s for s in self._students.values() if s.email == email), None)

    async def list_students(self) -> list[StudentResult]:
        return list(self._students.values())

    async def list_by_grade(self, grade: str) -> list[StudentResult]:
        return [s for s in self._students.values() if s.grade == grade]

    async def search(self, query: str) -> list[StudentResult]:
        needle = query.casefold()
        return [
            s
            for s in self._students.values()
            if needle in s.name.casefold() or needle in s.email.casefold()
        ]

    async def update_student(
        self, student_id: str, updates: dict[str, Any]
    ) -> StudentResult | None:
        current = self._students.get(student_id)
        if current is None:
            return None
        updated = replace(current, **updates)
        self._students[student_id] = updated
        return updated

    async def delete_student(self, student_id: str) -> bool:
        return self._students.pop(student_id, None) is not None
