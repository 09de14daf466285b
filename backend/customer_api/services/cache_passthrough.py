"""Cache Passthrough — reads one fixed key from the key-value cache.

Invariants:
    - A missing key is a successful empty string, not an error
    - Any other cache failure becomes CacheReadError chained to the BackendError
"""

import logging

from customer_api.core.errors import BackendError, CacheReadError
from customer_api.core.repository_protocols import Cache

logger = logging.getLogger(__name__)


class CachePassthrough:
    def __init__(self, cache: Cache, key: str = "test"):
        self.cache = cache
        self.key = key

    async def fetch(self) -> str:
        try:
            value = await self.cache.get(self.key)
        except BackendError as e:
            logger.error(
                f"Error getting value from cache: {e}",
                extra={"operation": "cache_get", "entity_id": self.key},
            )
            raise CacheReadError(self.key) from e
        return value if value is not None else ""
