"""Unit tests for the @cache_response route decorator and request keying."""

import pytest
from fastapi import Request

from app.api.v1.caching import cache_response, request_target


def _request(raw_path: bytes, query: bytes = b"", path: str = "/") -> Request:
    return Request(
        {
            "type": "http",
            "method": "GET",
            "path": path,
            "raw_path": raw_path,
            "query_string": query,
            "headers": [],
        }
    )


def test_request_target_keeps_percent_encoding() -> None:
    request = _request(b"/api/students/search/al%23zzz", path="/api/students/search/al#zzz")
    assert request_target(request) == ("/api/students/search/al%23zzz", "")


def test_request_target_drops_query_included_in_raw_path() -> None:
    request = _request(b"/api/students?page=2", b"page=2", path="/api/students")
    assert request_target(request) == ("/api/students", "page=2")


def test_request_target_without_raw_path_uses_decoded_path() -> None:
    request = _request(b"", b"x=1", path="/api/students")
    assert request_target(request) == ("/api/students", "x=1")


def test_route_without_cache_param_is_rejected() -> None:
    async def handler(request: Request) -> list:
        return []

    with pytest.raises(TypeError, match="must declare: cache"):
        cache_response(ttl=60)(handler)


def test_route_without_request_param_is_rejected() -> None:
    async def handler(cache: object) -> list:
        return []

    with pytest.raises(TypeError, match="must declare: request"):
        cache_response(ttl=60)(handler)


async def test_non_read_through_cache_is_rejected() -> None:
    @cache_response(ttl=60)
    async def handler(request: Request, cache: object) -> list:
        return []

    with pytest.raises(TypeError, match="ReadThroughCache"):
        await handler(request=_request(b"/api/students"), cache=object())
