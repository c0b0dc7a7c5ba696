"""Application factory for the FastAPI app.

Centralizes app construction (metadata, middleware, handlers, routers and the
rate limiter lifecycle) so tests can build isolated instances.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from clock_api.adapters.rate_limit.factory import create_counter_store
from clock_api.adapters.rate_limit.limiter import FixedWindowRateLimiter
from clock_api.api.routes import health_router, timezone_router
from clock_api.core.config import settings
from clock_api.core.exception_handlers import setup_exception_handlers
from clock_api.core.logging import configure_logging
from clock_api.core.middleware import request_id_middleware

logger = logging.getLogger(__name__)


def _build_rate_limiter() -> FixedWindowRateLimiter:
    store = create_counter_store(settings.redis)
    return FixedWindowRateLimiter(store, namespace=settings.app.rate_limit_namespace)


def create_app(rate_limiter: FixedWindowRateLimiter | None = None) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        rate_limiter: Limiter to use instead of building one from settings.
            The caller keeps ownership; its store is not closed on shutdown.

    Returns:
        Configured FastAPI app with middleware, handlers and routers.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    owns_limiter = rate_limiter is None
    limiter = rate_limiter or _build_rate_limiter()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        if owns_limiter:
            await limiter.store.close()
            logger.info("rate_limit.store_closed", extra={"store": type(limiter.store).__name__})

    app = FastAPI(
        title="Pakistan Time API",
        description=(
            "Current time in Pakistan Standard Time (Asia/Karachi), rate limited "
            "per client IP with a fixed-window counter."
        ),
        version="2.0.0",
        lifespan=lifespan,
    )
    # Set here, not in lifespan, so it is available even without startup events
    app.state.rate_limiter = limiter

    app.middleware("http")(request_id_middleware)

    setup_exception_handlers(app)

    app.include_router(timezone_router, prefix="/api")
    app.include_router(health_router)

    return app
