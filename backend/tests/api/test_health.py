"""Health & Readiness — liveness always 200, readiness follows the store."""

from unittest.mock import AsyncMock

from httpx import ASGITransport, AsyncClient

from customer_api.core.errors import BackendError
from customer_api.main import create_app


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_with_reachable_store(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


async def test_readiness_with_unreachable_store(settings, fake_cache):
    store = AsyncMock()
    store.query_one.side_effect = BackendError("Connection or operational error", "query_one")
    app = create_app(settings, store=store, cache=fake_cache)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        res = await c.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"
