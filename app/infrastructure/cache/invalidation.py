"""Cache invalidation after student mutations.

Enumerates keys per pattern and deletes them concurrently. Failures are
logged and swallowed: a stale entry then lives at most until its TTL.
"""

from __future__ import annotations

import asyncio
import logging

from app.core.constants import CACHE_PREFIX_STUDENTS
from app.infrastructure.cache.cache_protocol import CacheBackend, CacheBackendError
from app.infrastructure.cache.keys import (
    student_resource_pattern,
    students_collection_pattern,
)

logger = logging.getLogger(__name__)


class CacheInvalidator:
    """Removes cached student reads made stale by a write."""

    def __init__(
        self, backend: CacheBackend, namespace: str = CACHE_PREFIX_STUDENTS
    ) -> None:
        self.backend = backend
        self.namespace = namespace

    async def _delete(self, key: str) -> int:
        try:
            return await self.backend.delete(key)
        except CacheBackendError as e:
            logger.warning("Cache delete failed for %s: %s", key, e)
            return 0

    async def invalidate_pattern(self, pattern: str) -> int:
        """Delete every key matching pattern. Zero matches is a no-op.

        Returns:
            Number of keys removed.
        """
        try:
            keys = await self.backend.keys(pattern)
        except CacheBackendError as e:
            logger.warning("Cache key listing failed for %s: %s", pattern, e)
            return 0
        if not keys:
            return 0
        removed = sum(await asyncio.gather(*(self._delete(key) for key in keys)))
        logger.info("Cache INVALIDATE: %s (%s keys)", pattern, removed)
        return removed

    async def _invalidate_all(self, patterns: list[str]) -> int:
        counts = await asyncio.gather(*(self.invalidate_pattern(p) for p in patterns))
        return sum(counts)

    async def invalidate_collection(self) -> int:
        """Invalidate all cached student list/search/grade/id reads (after create)."""
        return await self._invalidate_all(
            [students_collection_pattern(self.namespace)]
        )

    async def invalidate_student(self, student_id: str) -> int:
        """Invalidate one student's reads plus the collection reads (after update/delete)."""
        return await self._invalidate_all(
            [
                student_resource_pattern(student_id, self.namespace),
                students_collection_pattern(self.namespace),
            ]
        )
