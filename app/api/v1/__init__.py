"""API v1: routers, dependencies and response caching."""

from app.api.v1.router import api_router

__all__ = ["api_router"]
