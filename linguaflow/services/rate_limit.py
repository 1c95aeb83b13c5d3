"""Fixed-window rate limiting per client address.

The limiter counts hits per key in a window of ``window_seconds``; the
window resets on time, not on count. Counter storage is pluggable:

- InMemoryRateLimitStore: process-local, lock-guarded, lost on restart.
- RedisRateLimitStore: INCR + EXPIRE, shared between instances.

Best-effort abuse mitigation only; no cross-process guarantee is made
for the in-memory store.
"""

import asyncio
import math
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable

import structlog

from linguaflow.core.exceptions import RateLimitExceededError
from linguaflow.db.redis import RedisClient

logger = structlog.get_logger(__name__)

_KEY_PREFIX = "ratelimit"


@dataclass(frozen=True)
class WindowState:
    """Hit count in the current window and seconds until it resets."""

    count: int
    reset_in: float


class RateLimitStore(ABC):
    """Counter storage behind RateLimiter."""

    @abstractmethod
    async def hit(self, key: str, window_seconds: int) -> WindowState:
        """Atomically record one hit for ``key`` and return the window state."""
        ...

    async def purge_expired(self) -> int:
        """Drop finished windows. Returns the number removed."""
        return 0


@dataclass
class _Window:
    expires_at: float
    count: int = 0


class InMemoryRateLimitStore(RateLimitStore):
    """Per-key windows in a dict guarded by a single asyncio.Lock."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._windows: dict[str, _Window] = {}
        self._lock = asyncio.Lock()

    async def hit(self, key: str, window_seconds: int) -> WindowState:
        async with self._lock:
            now = self._clock()
            window = self._windows.get(key)
            if window is None or now >= window.expires_at:
                window = _Window(expires_at=now + window_seconds)
                self._windows[key] = window
            window.count += 1
            return WindowState(count=window.count, reset_in=window.expires_at - now)

    async def purge_expired(self) -> int:
        async with self._lock:
            now = self._clock()
            expired = [k for k, w in self._windows.items() if now >= w.expires_at]
            for key in expired:
                del self._windows[key]
        if expired:
            logger.debug("rate_limit_windows_purged", count=len(expired))
        return len(expired)

    def __len__(self) -> int:
        return len(self._windows)


class RedisRateLimitStore(RateLimitStore):
    """Windows as Redis keys: INCR, then EXPIRE on the first hit."""

    def __init__(self, redis: RedisClient) -> None:
        self._redis = redis

    async def hit(self, key: str, window_seconds: int) -> WindowState:
        redis_key = f"{_KEY_PREFIX}:{key}"
        count = await self._redis.increment(redis_key)
        if count == 1:
            await self._redis.expire(redis_key, window_seconds)
            return WindowState(count=count, reset_in=float(window_seconds))

        ttl = await self._redis.ttl(redis_key)
        if ttl == -2:
            # Key expired between INCR and TTL: this hit opens a new window.
            count = await self._redis.increment(redis_key)
            await self._redis.expire(redis_key, window_seconds)
            return WindowState(count=count, reset_in=float(window_seconds))
        if ttl < 0:
            # Expiry lost between INCR and EXPIRE; restart the window clock.
            await self._redis.expire(redis_key, window_seconds)
            ttl = window_seconds
        return WindowState(count=count, reset_in=float(ttl))


class RateLimiter:
    """Bounds requests per client within a fixed time window."""

    def __init__(
        self,
        store: RateLimitStore,
        max_requests: int = 10,
        window_seconds: int = 60,
    ) -> None:
        self._store = store
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        logger.info(
            "rate_limiter_initialized",
            store=type(store).__name__,
            max_requests=max_requests,
            window_seconds=window_seconds,
        )

    async def check(self, client_id: str) -> WindowState:
        """Record a request from ``client_id``.

        Raises:
            RateLimitExceededError: The client is over the limit for the
                current window. ``retry_after`` is the time left in it.
        """
        state = await self._store.hit(client_id, self.window_seconds)
        if state.count > self.max_requests:
            retry_after = max(1, math.ceil(state.reset_in))
            logger.warning(
                "rate_limit_exceeded",
                client=client_id,
                count=state.count,
                retry_after=retry_after,
            )
            raise RateLimitExceededError(retry_after=retry_after)
        return state
