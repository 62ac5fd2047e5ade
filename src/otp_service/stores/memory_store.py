"""In-memory expiring store — used for local development and tests."""

from __future__ import annotations

import heapq
import logging
import time
from collections.abc import Callable

from otp_service.stores.base import OTPStore

logger = logging.getLogger(__name__)


class InMemoryOTPStore(OTPStore):
    """Process-local store with expiry.

    Each entry maps ``key → (value, expires_at)``.  An expired entry is
    dropped when it is read, and every ``set`` first evicts all entries
    whose deadline has passed, so keys that are never read again do not
    accumulate.  Not shared across processes, so it only makes sense for
    a single-instance deployment.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._store: dict[str, tuple[str, float]] = {}
        # (expires_at, key); stale items for overwritten keys are skipped
        self._deadlines: list[tuple[float, str]] = []

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        now = self._clock()
        self._evict_expired(now)
        expires_at = now + ttl_seconds
        self._store[key] = (value, expires_at)
        heapq.heappush(self._deadlines, (expires_at, key))

    async def get(self, key: str) -> str | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            # Expired — remove it
            self._store.pop(key, None)
            logger.debug("Key %s expired", key)
            return None
        return value

    async def delete(self, key: str) -> None:
        self._store.pop(key, None)

    def _evict_expired(self, now: float) -> None:
        while self._deadlines and self._deadlines[0][0] <= now:
            expires_at, key = heapq.heappop(self._deadlines)
            entry = self._store.get(key)
            if entry is not None and entry[1] == expires_at:
                del self._store[key]

    def __len__(self) -> int:
        return len(self._store)
