"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import CacheBackendState
from app.domain.exceptions import (
    DuplicateEmailException,
    ResourceNotFoundException,
    StudentsApiException,
    ValidationException,
)

__all__ = [
    "CacheBackendState",
    "DuplicateEmailException",
    "ResourceNotFoundException",
    "StudentsApiException",
    "ValidationException",
]
