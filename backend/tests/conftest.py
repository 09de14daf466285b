"""Root conftest — shared test configuration and fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database with the customers table
    - The app under test receives its Store/Cache through create_app, never the network
"""

import os

# Ensure importing customer_api.main never points at a real database or cache
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

from customer_api.config import Settings
from customer_api.db.base import Base
from customer_api.infrastructure.database import SqlStore
from customer_api.main import create_app
import customer_api.models  # noqa: F401
from tests.fakes import FakeCache


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def store(test_engine):
    return SqlStore(test_engine)


@pytest.fixture
def fake_cache():
    return FakeCache({"test": "hello"})


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        store_timeout_seconds=5.0,
        log_format="text",
    )


@pytest.fixture
async def client(settings, store, fake_cache):
    """FastAPI test client with Store and Cache injected."""
    app = create_app(settings, store=store, cache=fake_cache)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
