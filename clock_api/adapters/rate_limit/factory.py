"""Factory for choosing the counter store at startup."""

from __future__ import annotations

import logging

from clock_api.adapters.rate_limit.base import AbstractCounterStore
from clock_api.adapters.rate_limit.in_memory import InMemoryCounterStore
from clock_api.adapters.rate_limit.redis_store import RedisCounterStore
from clock_api.core.config import RedisSettings

logger = logging.getLogger(__name__)


def create_counter_store(redis_settings: RedisSettings) -> AbstractCounterStore:
    """Return the Redis store when credentials are present, else in-memory.

    Called once per process. There is no switching between stores at runtime,
    even if Redis later becomes unreachable; the limiter fails open instead.

    Args:
        redis_settings: Resolved Redis credentials.

    Returns:
        AbstractCounterStore: The store every rate limit check will use.
    """
    if redis_settings.is_configured:
        logger.info("rate_limit.store_selected", extra={"store": "redis"})
        return RedisCounterStore.from_url(
            redis_settings.url,
            token=redis_settings.token,
            timeout_seconds=redis_settings.timeout_seconds,
        )

    logger.warning(
        "rate_limit.store_selected",
        extra={
            "store": "memory",
            "hint": "Set REDIS_URL and REDIS_TOKEN to share counts across processes",
        },
    )
    return InMemoryCounterStore()
