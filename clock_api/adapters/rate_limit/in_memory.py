"""In-memory counter store.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- Lazy expiry: an entry is only removed when its own key is read or written
  after its reset time. Keys that are never seen again stay in the map for
  the life of the process, which is acceptable for client-IP keys but grows
  without bound under high key cardinality.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable

from clock_api.adapters.rate_limit.base import AbstractCounterStore

# TTL given to a counter created by ``incr``; the limiter replaces it with the
# time left in the caller's window right after the first increment.
DEFAULT_TTL_SECONDS = 10


@dataclass
class CounterRecord:
    count: int
    reset_time: int  # epoch milliseconds


class InMemoryCounterStore(AbstractCounterStore):
    """Dictionary-backed counters with time-to-live.

    Operations never await, so on a single event loop each call runs to
    completion without interleaving. The lock only matters when the store is
    shared with worker threads.
    """

    def __init__(self, *, clock: Callable[[], float] = time.time) -> None:
        """Initialize the store.

        Args:
            clock: Time source function returning UNIX time in seconds.
        """
        self._clock = clock
        self._lock = threading.RLock()
        self._records: dict[str, CounterRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def _live_record(self, key: str) -> CounterRecord | None:
        """Return the record for key, dropping it if expired or malformed."""
        record = self._records.get(key)
        if record is None:
            return None

        if not isinstance(record, CounterRecord) or not isinstance(record.count, int) or record.count < 0:
            del self._records[key]
            return None

        if self._now_ms() > record.reset_time:
            del self._records[key]
            return None

        return record

    async def get(self, key: str) -> int | None:
        with self._lock:
            record = self._live_record(key)
            return record.count if record else None

    async def set(self, key: str, value: int, ttl_seconds: int) -> None:
        """Store ``value`` under ``key``, expiring ``ttl_seconds`` from now."""
        with self._lock:
            self._records[key] = CounterRecord(
                count=value,
                reset_time=self._now_ms() + ttl_seconds * 1000,
            )

    async def incr(self, key: str) -> int:
        with self._lock:
            record = self._live_record(key)
            if record is None:
                await self.set(key, 1, DEFAULT_TTL_SECONDS)
                return 1

            record.count += 1
            return record.count

    async def expire(self, key: str, ttl_seconds: float) -> None:
        with self._lock:
            record = self._live_record(key)
            if record is not None:
                record.reset_time = self._now_ms() + round(ttl_seconds * 1000)

    def clear(self) -> None:
        """Drop every counter."""
        with self._lock:
            self._records.clear()
