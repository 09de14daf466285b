"""Cache Passthrough — present, absent and failing keys."""

import pytest

from customer_api.core.errors import BackendError, CacheReadError
from customer_api.services.cache_passthrough import CachePassthrough
from tests.fakes import FakeCache


async def test_fetch_returns_cached_value():
    cache = FakeCache({"test": "hello"})
    assert await CachePassthrough(cache).fetch() == "hello"
    assert cache.calls == ["test"]


async def test_fetch_absent_key_returns_empty_string():
    assert await CachePassthrough(FakeCache()).fetch() == ""


async def test_fetch_uses_configured_key():
    cache = FakeCache({"other": "x"})
    assert await CachePassthrough(cache, key="other").fetch() == "x"


async def test_fetch_failure_is_cache_read_error():
    cache = FakeCache()
    cache.error = BackendError("Cache operation failed", "get")
    with pytest.raises(CacheReadError) as exc_info:
        await CachePassthrough(cache).fetch()
    assert exc_info.value.__cause__ is cache.error
