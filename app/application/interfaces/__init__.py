"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure.
"""

from app.application.interfaces.repositories import IStudentRepository
from app.application.interfaces.services import ICacheInvalidator

__all__ = [
    "ICacheInvalidator",
    "IStudentRepository",
]
