"""Student API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

MIN_STUDENT_AGE = 5


def _normalize_email(v: Any) -> Any:
    return v.strip().lower() if isinstance(v, str) else v


class StudentCreateRequest(BaseModel):
    """Request body for creating a student. Strings are trimmed; email is lowercased."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    grade: str = Field(..., min_length=1, max_length=32)
    age: int = Field(..., ge=MIN_STUDENT_AGE)
    subjects: list[str] = Field(default_factory=list)

    @field_validator("email", mode="before")
    @classmethod
    def _email_lower(cls, v: Any) -> Any:
        return _normalize_email(v)


class StudentUpdate(BaseModel):
    """Request body for updating a student (partial; omitted or null fields are unchanged)."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(default=None, min_length=1, max_length=200)
    email: EmailStr | None = None
    grade: str | None = Field(default=None, min_length=1, max_length=32)
    age: int | None = Field(default=None, ge=MIN_STUDENT_AGE)
    subjects: list[str] | None = None

    @field_validator("email", mode="before")
    @classmethod
    def _email_lower(cls, v: Any) -> Any:
        return _normalize_email(v)


class StudentResponse(BaseModel):
    """Student response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    grade: str
    age: int
    subjects: list[str] = Field(default_factory=list)
    created_at: datetime | None = None


class StudentDeletedResponse(BaseModel):
    """Response for DELETE /students/{id}."""

    message: str = "Student deleted successfully"
