"""Application layer: interfaces, DTOs, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories, cache invalidation).
"""

from app.application.interfaces import ICacheInvalidator, IStudentRepository
from app.application.use_cases import StudentService

__all__ = [
    "ICacheInvalidator",
    "IStudentRepository",
    "StudentService",
]
