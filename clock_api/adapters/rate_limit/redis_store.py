"""Redis-backed counter store.

Counts are shared by every process pointing at the same Redis, so limits hold
across horizontally scaled deployments. Atomicity of concurrent increments
comes from Redis ``INCR``.
"""

from __future__ import annotations

import logging

from redis.asyncio import Redis
from redis.exceptions import RedisError

from clock_api.adapters.rate_limit.base import AbstractCounterStore
from clock_api.core.errors import RateLimitBackendError

logger = logging.getLogger(__name__)


class RedisCounterStore(AbstractCounterStore):
    """Counter store talking to Redis through ``redis.asyncio``."""

    def __init__(self, client: Redis) -> None:
        self._client = client

    @classmethod
    def from_url(
        cls,
        url: str,
        *,
        token: str | None = None,
        timeout_seconds: float | None = None,
    ) -> "RedisCounterStore":
        """Build a store from an endpoint URL and access token.

        The token is passed as the connection password. No connection is
        opened until the first command.
        """
        client = Redis.from_url(
            url,
            password=token,
            decode_responses=True,
            socket_timeout=timeout_seconds,
            socket_connect_timeout=timeout_seconds,
        )
        return cls(client)

    async def incr(self, key: str) -> int:
        try:
            value = await self._client.incr(key)
        except RedisError as exc:
            raise RateLimitBackendError(
                code="rate_limit_backend_unavailable",
                message=f"Redis INCR failed: {exc}",
                details={"backend": "redis"},
            ) from exc
        return int(value)

    async def expire(self, key: str, ttl_seconds: float) -> None:
        try:
            # PEXPIRE keeps sub-second precision; a non-positive TTL deletes the key.
            await self._client.pexpire(key, round(ttl_seconds * 1000))
        except RedisError as exc:
            raise RateLimitBackendError(
                code="rate_limit_backend_unavailable",
                message=f"Redis PEXPIRE failed: {exc}",
                details={"backend": "redis"},
            ) from exc

    async def get(self, key: str) -> int | None:
        try:
            raw = await self._client.get(key)
        except RedisError as exc:
            raise RateLimitBackendError(
                code="rate_limit_backend_unavailable",
                message=f"Redis GET failed: {exc}",
                details={"backend": "redis"},
            ) from exc

        if raw is None:
            return None
        try:
            return int(raw)
        except (TypeError, ValueError):
            logger.warning("rate_limit.malformed_counter", extra={"counter_key": key})
            return None

    async def close(self) -> None:
        await self._client.aclose()
