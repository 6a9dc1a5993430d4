"""Firestore-backed student repository (implements IStudentRepository)."""

from __future__ import annotations

from typing import Any

from app.application.dtos.student import StudentResult
from app.infrastructure.firebase._rest_client import (
    DocumentSnapshot,
    FirestoreRESTClient,
)
from app.infrastructure.firebase.collections import COLLECTION_STUDENTS
from app.shared.utils.datetime import ensure_utc, utc_now
from app.shared.utils.generators import generate_cuid


def _to_result(snapshot: DocumentSnapshot) -> StudentResult:
    data = snapshot.to_dict()
    return StudentResult(
        id=snapshot.id,
        name=data.get("name", ""),
        email=data.get("email", ""),
        grade=data.get("grade", ""),
        age=int(data.get("age", 0)),
        subjects=list(data.get("subjects") or []),
        created_at=ensure_utc(data.get("created_at")),
    )


class FirestoreStudentRepository:
    """Student repository using Firestore. Email uniqueness is enforced by StudentService."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_STUDENTS)

    async def create_student(
        self,
        name: str,
        email: str,
        grade: str,
        age: int,
        subjects: list[str],
    ) -> StudentResult:
        """Create student document with a generated CUID."""
        student_id = generate_cuid()
        now = utc_now()
        await self._coll.create(student_id, {
            "name": name,
            "email": email,
            "grade": grade,
            "age": age,
            "subjects": subjects,
            "created_at": now,
        })
        return StudentResult(
            id=student_id,
            name=name,
            email=email,
            grade=grade,
            age=age,
            subjects=list(subjects),
            created_at=now,
        )

    async def get_by_id(self, student_id: str) -> StudentResult | None:
        """Return student by ID."""
        doc = await self._coll.document(student_id).get()
        return _to_result(doc) if doc else None

    async def get_by_email(self, email: str) -> StudentResult | None:
        """Return student by email (server-side where query, at most one doc)."""
        async for snapshot in self._coll.where("email", "==", email).limit(1).stream():
            return _to_result(snapshot)
        return None

    async def list_students(self) -> list[StudentResult]:
        """Return all students (paged listing)."""
        return [_to_result(s) async for s in self._coll.stream()]

    async def list_by_grade(self, grade: str) -> list[StudentResult]:
        """Return students in grade (server-side equality filter)."""
        return [_to_result(s) async for s in self._coll.where("grade", "==", grade).stream()]

    async def search(self, query: str) -> list[StudentResult]:
        """Case-insensitive substring match on name or email.

        Firestore has no substring query, so documents are filtered client-side.
        """
        needle = query.casefold()
        results: list[StudentResult] = []
        async for snapshot in self._coll.stream():
            student = _to_result(snapshot)
            if needle in student.name.casefold() or needle in student.email.casefold():
                results.append(student)
        return results

    async def update_student(
        self, student_id: str, updates: dict[str, Any]
    ) -> StudentResult | None:
        """Patch the given fields; return updated student or None if not found."""
        doc_ref = self._coll.document(student_id)
        if not updates:
            doc = await doc_ref.get()
        else:
            doc = await doc_ref.update(updates)
        return _to_result(doc) if doc else None

    async def delete_student(self, student_id: str) -> bool:
        """Delete student document; False if it did not exist."""
        return await self._coll.document(student_id).delete()
