"""DTOs for student use cases (no dependency on storage models)."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class StudentResult:
    """Student read-model (result of get_by_id, create_student, update_student, etc.)."""

    id: str
    name: str
    email: str
    grade: str
    age: int
    subjects: list[str] = field(default_factory=list)
    created_at: datetime | None = None
