"""Redis Cache — Cache implementation over redis.asyncio.

Invariants:
    - get() returns None for a missing key; it never raises for absence
    - All redis-py exceptions mapped to BackendError (core/errors.py)
    - Values decoded to str (decode_responses=True)
"""

import logging

from redis.asyncio import Redis
from redis.exceptions import RedisError

from customer_api.core.errors import BackendError

logger = logging.getLogger(__name__)


class RedisCache:
    def __init__(self, client: Redis):
        self.client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisCache":
        return cls(Redis.from_url(url, decode_responses=True))

    async def get(self, key: str) -> str | None:
        try:
            return await self.client.get(key)
        except RedisError as e:
            logger.error(f"Redis error: {e}", extra={"operation": "cache_get"})
            raise BackendError("Cache operation failed", "get") from e

    async def close(self) -> None:
        await self.client.aclose()
