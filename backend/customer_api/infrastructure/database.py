"""Database Store — async SQLAlchemy engine and the Store implementation over raw SQL.

Invariants:
    - Every statement runs in its own transaction: committed on success, rolled back on error
    - Statements are sqlalchemy.text() with bound parameters only
    - Result sets are fully fetched before the connection is released
    - All SQLAlchemy exceptions mapped to BackendError (core/errors.py)

Design Decisions:
    - Engine owned by DatabaseManager, created in the app lifespan and disposed on shutdown
    - Pool sizing only applied to server databases; SQLite uses SQLAlchemy's default pool
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Mapping

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine

from customer_api.core.errors import BackendError
from customer_api.core.repository_protocols import Row
from customer_api.db.base import Base

logger = logging.getLogger(__name__)


class SqlStore:
    """Store backed by an AsyncEngine."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncGenerator[AsyncConnection, None]:
        """Provide a connection inside a transaction, mapping driver errors."""
        try:
            async with self.engine.begin() as conn:
                yield conn
        except IntegrityError as e:
            logger.error(f"DB integrity error: {e}", extra={"operation": operation})
            raise BackendError("Integrity constraint violated", operation) from e
        except OperationalError as e:
            logger.error(f"DB operational error: {e}", extra={"operation": operation})
            raise BackendError("Connection or operational error", operation) from e
        except DBAPIError as e:
            logger.error(f"DB driver error: {e}", extra={"operation": operation})
            raise BackendError("Database driver error", operation) from e
        except SQLAlchemyError as e:
            logger.error(f"SQLAlchemy error: {e}", extra={"operation": operation})
            raise BackendError("Database operation failed", operation) from e

    async def execute(self, query: str, params: Mapping[str, Any] | None = None) -> int:
        async with self._transaction("execute") as conn:
            result = await conn.execute(text(query), dict(params or {}))
            return result.rowcount

    async def query(self, query: str, params: Mapping[str, Any] | None = None) -> list[Row]:
        async with self._transaction("query") as conn:
            result = await conn.execute(text(query), dict(params or {}))
            return list(result.mappings().all())

    async def query_one(self, query: str, params: Mapping[str, Any] | None = None) -> Row | None:
        async with self._transaction("query_one") as conn:
            result = await conn.execute(text(query), dict(params or {}))
            return result.mappings().first()


class DatabaseManager:
    """Owns the engine and the SqlStore built on it."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        kwargs: dict[str, Any] = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            kwargs.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **kwargs)
        self.store = SqlStore(self.engine)

    async def create_schema(self) -> None:
        """Create any missing tables from the ORM metadata."""
        import customer_api.models  # noqa: F401
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()
