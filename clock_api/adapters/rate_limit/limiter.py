"""Fixed-window rate limiter over a pluggable counter store.

Windows are aligned to the UNIX epoch: with a 10 second window every client
resets at :00, :10, :20 and so on, regardless of when its first request
arrived.

Store failures never reach the caller. The limiter logs them and admits the
request (fail-open), so an unavailable Redis degrades to no limiting rather
than to rejected traffic.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from clock_api.adapters.rate_limit.base import AbstractCounterStore, RateLimitResult
from clock_api.core.errors import ConfigurationAppError

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
DEFAULT_WINDOW_SECONDS = 10


def _require_positive_int(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigurationAppError(
            code="rate_limit_invalid_parameter",
            message=f"{name} must be a positive integer",
            details={"parameter": name, "actual_value": value},
        )
    return value


def window_reset_ms(now_ms: int, window_seconds: int) -> int:
    """Smallest multiple of the window (in ms) that is >= ``now_ms``."""
    window_ms = window_seconds * 1000
    return -(-now_ms // window_ms) * window_ms


class FixedWindowRateLimiter:
    """Counts requests per client key in epoch-aligned fixed windows."""

    def __init__(
        self,
        store: AbstractCounterStore,
        *,
        namespace: str = "rate_limit",
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the limiter.

        Args:
            store: Counter store holding per-key counts.
            namespace: Prefix for counter keys.
            clock: Time source function returning UNIX time in seconds.
        """
        self._store = store
        self._namespace = namespace
        self._clock = clock

    @property
    def store(self) -> AbstractCounterStore:
        return self._store

    def now_ms(self) -> int:
        """Current time on the limiter clock, in epoch milliseconds."""
        return int(self._clock() * 1000)

    def build_key(self, client_key: str) -> str:
        return f"{self._namespace}:{client_key}"

    async def check(
        self,
        client_key: str,
        limit: int = DEFAULT_LIMIT,
        window_seconds: int = DEFAULT_WINDOW_SECONDS,
    ) -> RateLimitResult:
        """Count one request for ``client_key`` and decide whether to admit it.

        Args:
            client_key: Client identity, usually the resolved IP address.
            limit: Maximum requests per window.
            window_seconds: Window length in seconds.

        Returns:
            RateLimitResult with the decision and quota metadata.

        Raises:
            ConfigurationAppError: If ``limit`` or ``window_seconds`` is not a
                positive integer, or ``client_key`` is empty.
        """
        limit = _require_positive_int("limit", limit)
        window_seconds = _require_positive_int("window_seconds", window_seconds)
        if not client_key:
            raise ConfigurationAppError(
                code="rate_limit_invalid_parameter",
                message="client_key must be a non-empty string",
                details={"parameter": "client_key"},
            )

        key = self.build_key(client_key)
        now_ms = self.now_ms()
        reset = window_reset_ms(now_ms, window_seconds)

        try:
            count = await self._store.incr(key)
            if count == 1:
                # The counter must not outlive the window it is reported for.
                await self._store.expire(key, (reset - now_ms) / 1000)
        except Exception as exc:
            logger.error(
                "rate_limit.backend_error",
                extra={
                    "error_type": type(exc).__name__,
                    "error_msg": str(exc),
                    "store": type(self._store).__name__,
                },
            )
            return RateLimitResult(
                success=True,
                limit=limit,
                remaining=limit - 1,
                reset=reset,
            )

        return RateLimitResult(
            success=count <= limit,
            limit=limit,
            remaining=max(0, limit - count),
            reset=reset,
        )
