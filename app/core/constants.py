"""Core constants: cache key structure and shared literal values.

Single source of truth for cache key structure (DRY). Used by the
read-through cache and the invalidation coordinator.
"""

# Default namespace for student response cache keys (settings.cache_namespace overrides).
CACHE_PREFIX_STUDENTS = "students"

# Delimiter between namespace and request path
CACHE_KEY_SEP = ":"

# The only wildcard understood by key patterns (Redis SCAN MATCH and the memory store)
CACHE_KEY_WILDCARD = "*"

# Route prefix for the public API; cache keys embed the full request path.
API_PREFIX = "/api"
STUDENTS_PATH = f"{API_PREFIX}/students"
