"""Cache key and key-pattern builders. Single place for key format (DRY).

Response keys are ``<namespace>:<request path>[?<query>]``. Patterns append
the single wildcard to a literal key prefix, so a pattern built here always
starts with its namespace and cannot match keys of another namespace.
"""

from app.core.constants import (
    CACHE_KEY_SEP,
    CACHE_KEY_WILDCARD,
    CACHE_PREFIX_STUDENTS,
    STUDENTS_PATH,
)


def _validate_namespace(namespace: str) -> None:
    """Raise ValueError if namespace is empty or contains separator/wildcard.

    Args:
        namespace: Key namespace (e.g. 'students').

    Raises:
        ValueError: If namespace would make keys ambiguous.
    """
    if not namespace:
        raise ValueError("Cache namespace must not be empty")
    for forbidden in (CACHE_KEY_SEP, CACHE_KEY_WILDCARD):
        if forbidden in namespace:
            raise ValueError(
                f"Cache namespace {namespace!r} must not contain {forbidden!r}"
            )


def response_key(path: str, query: str = "", namespace: str = CACHE_PREFIX_STUDENTS) -> str:
    """Cache key for a GET response: namespace + path + optional query string.

    Args:
        path: Request path as received (e.g. /api/students/abc).
        query: Raw query string without the leading '?'.
        namespace: Key namespace.

    Returns:
        Key unique to the retrieval request.
    """
    _validate_namespace(namespace)
    url = f"{path}?{query}" if query else path
    return f"{namespace}{CACHE_KEY_SEP}{url}"


def prefix_pattern(prefix: str, namespace: str = CACHE_PREFIX_STUDENTS) -> str:
    """Pattern matching every key whose request URL starts with prefix.

    Args:
        prefix: Literal URL prefix (must not contain the wildcard).
        namespace: Key namespace.

    Raises:
        ValueError: If prefix contains the wildcard (patterns carry exactly one).
    """
    if CACHE_KEY_WILDCARD in prefix:
        raise ValueError(f"Pattern prefix {prefix!r} must not contain {CACHE_KEY_WILDCARD!r}")
    return f"{response_key(prefix, namespace=namespace)}{CACHE_KEY_WILDCARD}"


def students_collection_pattern(namespace: str = CACHE_PREFIX_STUDENTS) -> str:
    """Pattern for every cached student read (list, search, grade, by id)."""
    return prefix_pattern(STUDENTS_PATH, namespace=namespace)


def student_resource_pattern(student_id: str, namespace: str = CACHE_PREFIX_STUDENTS) -> str:
    """Pattern for the cached reads of one student (with or without query string)."""
    return prefix_pattern(f"{STUDENTS_PATH}/{student_id}", namespace=namespace)
