"""Rate limiter interfaces.

The limiter depends on ``AbstractCounterStore`` only, so the networked and
in-memory stores are interchangeable and tests can inject a fake.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitResult:
    """Outcome of a single rate limit check.

    Attributes:
        success: Whether the request is admitted.
        limit: Max requests per window.
        remaining: Requests left in the current window (never negative).
        reset: UNIX epoch milliseconds of the next window boundary.
    """

    success: bool
    limit: int
    remaining: int
    reset: int

    def retry_after_seconds(self, now_ms: int) -> int:
        """Whole seconds until ``reset``, rounded up, never negative."""
        return max(0, math.ceil((self.reset - now_ms) / 1000))


class AbstractCounterStore(ABC):
    """Key/value store holding short-lived integer counters."""

    @abstractmethod
    async def incr(self, key: str) -> int:
        """Atomically add one to ``key`` and return the new count.

        An absent or expired key counts as zero before the increment.
        """
        raise NotImplementedError

    @abstractmethod
    async def expire(self, key: str, ttl_seconds: float) -> None:
        """Make ``key`` expire ``ttl_seconds`` from now.

        Fractions of a second are honoured to the millisecond; zero expires
        the key at once.
        """
        raise NotImplementedError

    @abstractmethod
    async def get(self, key: str) -> int | None:
        """Return the current count, or None when absent or expired."""
        raise NotImplementedError

    async def close(self) -> None:
        """Release any resources held by the store."""
        return None
