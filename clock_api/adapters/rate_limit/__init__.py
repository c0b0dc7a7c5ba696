"""Rate limiting adapters.

A fixed-window limiter plus two interchangeable counter stores: Redis when
credentials are configured, an in-process map otherwise.
"""

from clock_api.adapters.rate_limit.base import AbstractCounterStore, RateLimitResult
from clock_api.adapters.rate_limit.factory import create_counter_store
from clock_api.adapters.rate_limit.in_memory import InMemoryCounterStore
from clock_api.adapters.rate_limit.limiter import FixedWindowRateLimiter
from clock_api.adapters.rate_limit.redis_store import RedisCounterStore

__all__ = [
    "AbstractCounterStore",
    "FixedWindowRateLimiter",
    "InMemoryCounterStore",
    "RateLimitResult",
    "RedisCounterStore",
    "create_counter_store",
]
