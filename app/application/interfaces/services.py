"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from typing import Protocol


class ICacheInvalidator(Protocol):
    """Protocol for dropping cached reads after a student mutation.

    Implementations never raise for cache failures; they return the number
    of entries removed.
    """

    async def invalidate_collection(self) -> int:
        """Drop every cached student collection read (list, search, grade)."""
        ...

    async def invalidate_student(self, student_id: str) -> int:
        """Drop cached reads of one student and of the collection."""
        ...
