"""Application use cases: one entry point per workflow."""

from app.application.use_cases.students import StudentService

__all__ = ["StudentService"]
