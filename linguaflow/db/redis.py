"""Redis async client used by the shared rate-limit store.

Only created when RATE_LIMIT_BACKEND=redis. Provides helper methods wrapping
raw Redis commands so callers never need to handle redis.exceptions
directly. All connection/command errors are caught and re-raised as
RedisConnectionError.
"""

import structlog
from redis.asyncio import Redis
from redis.asyncio import from_url as redis_from_url
from redis.exceptions import RedisError

from linguaflow.core.exceptions import RedisConnectionError

logger = structlog.get_logger(__name__)


def create_redis_client(url: str) -> "RedisClient":
    """Build a RedisClient wrapper over a new connection pool."""
    client: Redis = redis_from_url(url, decode_responses=True, encoding="utf-8")
    return RedisClient(client)


class RedisClient:
    """Thin wrapper over redis.asyncio.Redis with typed helpers.

    Every public method catches RedisError and re-raises as
    RedisConnectionError so the API layer gets a structured error.
    """

    def __init__(self, client: Redis) -> None:
        self._r = client

    async def increment(self, key: str, amount: int = 1) -> int:
        """INCRBY a key. Creates the key with value 0 before incrementing if needed."""
        try:
            return await self._r.incrby(name=key, amount=amount)
        except RedisError as e:
            logger.error("redis_incr_failed", key=key, error=str(e))
            raise RedisConnectionError() from e

    async def expire(self, key: str, ttl_seconds: int) -> bool:
        """Set a TTL on an existing key. Returns True if key exists."""
        try:
            return await self._r.expire(name=key, time=ttl_seconds)
        except RedisError as e:
            logger.error("redis_expire_failed", key=key, error=str(e))
            raise RedisConnectionError() from e

    async def ttl(self, key: str) -> int:
        """Remaining TTL in seconds (-1 no expiry, -2 missing key)."""
        try:
            return await self._r.ttl(name=key)
        except RedisError as e:
            logger.error("redis_ttl_failed", key=key, error=str(e))
            raise RedisConnectionError() from e

    async def close(self) -> None:
        """Gracefully close the Redis connection pool."""
        logger.info("redis_shutdown")
        await self._r.aclose()
