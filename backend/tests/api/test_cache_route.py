"""Cache Route — GET /redis passthrough."""

from customer_api.core.errors import BackendError


async def test_returns_cached_value(client):
    res = await client.get("/redis")
    assert res.status_code == 200
    assert res.json() == "hello"


async def test_absent_key_returns_empty_string(client, fake_cache):
    fake_cache.values.clear()
    res = await client.get("/redis")
    assert res.status_code == 200
    assert res.json() == ""


async def test_cache_failure_is_502(client, fake_cache):
    fake_cache.error = BackendError("Cache operation failed", "get")
    res = await client.get("/redis")
    assert res.status_code == 502
    assert res.json()["error"]["code"] == "CACHE_READ_FAILED"
