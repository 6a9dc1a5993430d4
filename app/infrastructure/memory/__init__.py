"""In-process implementations of application ports (dev and tests)."""

from app.infrastructure.memory.student_repo_memory import InMemoryStudentRepository

__all__ = ["InMemoryStudentRepository"]
