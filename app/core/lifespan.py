"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of infrastructure (cache backend,
document store).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings
from app.infrastructure.cache import open_cache_backend

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: cache backend (Redis, or in-memory fallback decided
    here once), student repository. Shutdown order: cache close,
    Firestore HTTP client close.
    """
    settings = get_settings()

    # ---- Startup ----
    app.state.cache = await open_cache_backend(settings)
    logger.info("Response cache backend: %s", app.state.cache.state.value)

    app.state.firestore_client = None
    if settings.database_backend == "firestore":
        from app.infrastructure.firebase import create_firestore_client
        from app.infrastructure.firebase.repositories import FirestoreStudentRepository

        client = create_firestore_client(settings)
        if client is None:
            await app.state.cache.close()
            raise RuntimeError(
                "Firestore could not be initialized; check FIREBASE_SERVICE_ACCOUNT_KEY/PATH"
            )
        app.state.firestore_client = client
        app.state.student_repo = FirestoreStudentRepository(client)
    else:
        from app.infrastructure.memory import InMemoryStudentRepository

        app.state.student_repo = InMemoryStudentRepository()
        logger.warning("Using in-memory student storage (data is lost on restart)")

    yield

    # ---- Shutdown ----
    await app.state.cache.close()
    logger.info("Cache closed")

    if app.state.firestore_client is not None:
        await app.state.firestore_client.aclose()
        app.state.firestore_client = None
        logger.info("Firestore HTTP client closed")
