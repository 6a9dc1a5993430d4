"""Firestore-backed repository implementations."""

from app.infrastructure.firebase.repositories.student_repo_firestore import (
    FirestoreStudentRepository,
)

__all__ = ["FirestoreStudentRepository"]
