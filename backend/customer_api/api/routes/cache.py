"""Cache Route — read-only passthrough of the configured cache key."""

from fastapi import APIRouter, Depends

from customer_api.api.dependencies import get_cache_passthrough
from customer_api.services.cache_passthrough import CachePassthrough

router = APIRouter(tags=["cache"])


@router.get("/redis")
async def read_cache_value(
    passthrough: CachePassthrough = Depends(get_cache_passthrough),
):
    """Return the cached string, or "" when the key is absent."""
    return await passthrough.fetch()
