"""Cache: response cache backends, read-through and invalidation.

Backends (Redis or in-memory fallback) are chosen once at startup by
open_cache_backend and shared through app.state. Key format is in keys.py (DRY).
"""

from app.infrastructure.cache.cache_protocol import CacheBackend, CacheBackendError
from app.infrastructure.cache.factory import open_cache_backend
from app.infrastructure.cache.invalidation import CacheInvalidator
from app.infrastructure.cache.keys import (
    prefix_pattern,
    response_key,
    student_resource_pattern,
    students_collection_pattern,
)
from app.infrastructure.cache.memory_cache import MemoryCacheBackend
from app.infrastructure.cache.read_through import CachedRead, ReadThroughCache
from app.infrastructure.cache.redis_cache import RedisCacheBackend

__all__ = [
    "CacheBackend",
    "CacheBackendError",
    "CacheInvalidator",
    "CachedRead",
    "MemoryCacheBackend",
    "ReadThroughCache",
    "RedisCacheBackend",
    "open_cache_backend",
    "prefix_pattern",
    "response_key",
    "student_resource_pattern",
    "students_collection_pattern",
]
