"""Student use cases."""

from app.application.use_cases.students.student_operations import StudentService

__all__ = ["StudentService"]
