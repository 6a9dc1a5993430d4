"""Student API: thin routes delegating to StudentService.

GET routes are served through the read-through cache; writes go straight
to the service, which invalidates affected cache entries before returning.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.caching import STUDENT_SEARCH_TTL, STUDENTS_TTL, cache_response
from app.api.v1.dependencies import get_read_through_cache, get_student_service
from app.application.use_cases.students import StudentService
from app.infrastructure.cache import ReadThroughCache
from app.schemas.student import (
    StudentCreateRequest,
    StudentDeletedResponse,
    StudentResponse,
    StudentUpdate,
)

router = APIRouter()

CacheDep = Annotated[ReadThroughCache, Depends(get_read_through_cache)]
ServiceDep = Annotated[StudentService, Depends(get_student_service)]


@router.post("", response_model=StudentResponse, status_code=201)
async def create_student(body: StudentCreateRequest, student_svc: ServiceDep):
    """Create a student (email must be unique)."""
    created = await student_svc.create_student(
        name=body.name,
        email=body.email,
        grade=body.grade,
        age=body.age,
        subjects=body.subjects,
    )
    return StudentResponse.model_validate(created)


@router.get("", response_model=list[StudentResponse])
@cache_response(ttl=STUDENTS_TTL)
async def list_students(request: Request, cache: CacheDep, student_svc: ServiceDep):
    """List all students."""
    students = await student_svc.list_students()
    return [StudentResponse.model_validate(s) for s in students]


@router.get("/search/{query}", response_model=list[StudentResponse])
@cache_response(ttl=STUDENT_SEARCH_TTL)
async def search_students(
    query: str, request: Request, cache: CacheDep, student_svc: ServiceDep
):
    """Students whose name or email contains query (case-insensitive)."""
    students = await student_svc.search_students(query)
    return [StudentResponse.model_validate(s) for s in students]


@router.get("/grade/{grade}", response_model=list[StudentResponse])
@cache_response(ttl=STUDENTS_TTL)
async def list_students_by_grade(
    grade: str, request: Request, cache: CacheDep, student_svc: ServiceDep
):
    """Students in a grade."""
    students = await student_svc.list_by_grade(grade)
    return [StudentResponse.model_validate(s) for s in students]


@router.get("/{student_id}", response_model=StudentResponse)
@cache_response(ttl=STUDENTS_TTL)
async def get_student(
    student_id: str, request: Request, cache: CacheDep, student_svc: ServiceDep
):
    """Get a student by id (404 if not found)."""
    student = await student_svc.get_student(student_id)
    return StudentResponse.model_validate(student)


@router.put("/{student_id}", response_model=StudentResponse)
async def update_student(
    student_id: str, body: StudentUpdate, student_svc: ServiceDep
):
    """Update a student (partial). Cached reads of the student and the collection are dropped."""
    updated = await student_svc.update_student(
        student_id,
        name=body.name,
        email=body.email,
        grade=body.grade,
        age=body.age,
        subjects=body.subjects,
    )
    return StudentResponse.model_validate(updated)


@router.delete("/{student_id}", response_model=StudentDeletedResponse)
async def delete_student(student_id: str, student_svc: ServiceDep):
    """Delete a student. Cached reads of the student and the collection are dropped."""
    await student_svc.delete_student(student_id)
    return StudentDeletedResponse()
