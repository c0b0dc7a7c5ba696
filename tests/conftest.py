"""Pytest configuration and fixtures shared across all test modules.

This file is automatically loaded by pytest before running any tests.
It sets TESTING so the .env file is not loaded, and clears the Redis
credentials so every test runs against the in-memory counter store unless it
injects something else.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["TESTING"] = "true"
os.environ.pop("REDIS_URL", None)
os.environ.pop("REDIS_TOKEN", None)
os.environ.setdefault("LOG_FORMAT", "plain")

import pytest

from clock_api.adapters.rate_limit.in_memory import InMemoryCounterStore
from clock_api.adapters.rate_limit.limiter import FixedWindowRateLimiter


class FakeClock:
    """Deterministic clock returning UNIX time in seconds."""

    def __init__(self, start: float = 1_000.5) -> None:
        self.current = start

    def __call__(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_store(clock: FakeClock) -> InMemoryCounterStore:
    return InMemoryCounterStore(clock=clock)


@pytest.fixture
def limiter(memory_store: InMemoryCounterStore, clock: FakeClock) -> FixedWindowRateLimiter:
    return FixedWindowRateLimiter(memory_store, clock=clock)
