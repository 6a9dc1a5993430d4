"""Route decorator for read-through response caching.

Usage:
    @router.get("/{student_id}", response_model=StudentResponse)
    @cache_response(ttl=STUDENTS_TTL)
    async def get_student(request: Request, cache: ..., ...):
        ...

The decorated route must declare ``request`` and ``cache`` parameters; the
latter resolves to a ReadThroughCache (see get_read_through_cache). Keys are
built from the raw request target, so percent-encoded characters in path
parameters never collapse two requests onto one key.
The handler result is converted with jsonable_encoder before it is cached
and returned, so hits and misses go through the same response model with
the same JSON-compatible payload.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from functools import wraps
from operator import attrgetter
from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder

from app.core.config import Settings, get_settings
from app.infrastructure.cache import ReadThroughCache

TTLSource = Callable[[Settings], int]

STUDENTS_TTL: TTLSource = attrgetter("cache_ttl_students")
STUDENT_SEARCH_TTL: TTLSource = attrgetter("cache_ttl_student_search")

_REQUIRED_PARAMS = ("request", "cache")


def request_target(request: Request) -> tuple[str, str]:
    """Return the undecoded path and query string of the request.

    Some ASGI servers include the query in raw_path; it is dropped there and
    taken from query_string instead.
    """
    raw_path: bytes | None = request.scope.get("raw_path")
    if raw_path:
        path = raw_path.split(b"?", 1)[0].decode("latin-1")
    else:
        path = request.url.path
    query = request.scope.get("query_string", b"").decode("latin-1")
    return path, query


def cache_response(ttl: int | TTLSource) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator to serve a GET route through the read-through cache.

    Args:
        ttl: Seconds, or a callable reading the TTL from Settings at request time.

    Returns:
        Decorator; non-GET requests run uncached.

    Raises:
        TypeError: At decoration time if the route does not declare
            ``request`` and ``cache``; at request time if ``cache`` is not
            a ReadThroughCache.
    """

    def resolve_ttl() -> int:
        return ttl if isinstance(ttl, int) else ttl(get_settings())

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        params = inspect.signature(func).parameters
        missing = [name for name in _REQUIRED_PARAMS if name not in params]
        if missing:
            raise TypeError(
                f"@cache_response route {func.__name__} must declare: {', '.join(missing)}"
            )

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            request: Request = kwargs["request"]
            cache = kwargs["cache"]
            if not isinstance(cache, ReadThroughCache):
                raise TypeError(
                    f"{func.__name__}: cache must be a ReadThroughCache, got {type(cache).__name__}"
                )
            if request.method != "GET":
                return await func(*args, **kwargs)

            async def load() -> Any:
                return jsonable_encoder(await func(*args, **kwargs))

            key = cache.key_for(*request_target(request))
            result = await cache.fetch(key, load, ttl=resolve_ttl())
            return result.payload

        return wrapper

    return decorator
