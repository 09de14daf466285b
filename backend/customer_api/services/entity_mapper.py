"""Entity Resource Mapper — one store statement per CRUD verb, for any declared entity.

Invariants:
    - Stateless: holds only the entity declaration, the store handle and a timeout
    - Payload checks happen before any store call (invalid input never reaches the store)
    - Every BackendError/timeout is logged with operation + entity_id, then re-raised as
      StoreReadError or StoreWriteError chained to the original failure
    - list_all() aborts on the first row that fails to decode; no rows are skipped
    - update() reports NotFoundError when zero rows match; delete() does not

Design Decisions:
    - Each store call is wrapped in asyncio.wait_for: request cancellation and the
      store timeout both abort the in-flight driver call
    - No retries: one failed store call is one failed request
"""

import asyncio
import logging
from typing import Any, Awaitable, Mapping, TypeVar

from pydantic import BaseModel

from customer_api.core.entity import EntityDefinition, RowDecodeError
from customer_api.core.errors import (
    BackendError, ErrorContext, NotFoundError, StoreReadError, StoreWriteError,
)
from customer_api.core.repository_protocols import Store

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EntityResourceMapper:
    """Translates create/list/read/update/delete into parameterized store statements."""

    def __init__(
        self, entity: EntityDefinition, store: Store, timeout_seconds: float | None = None,
    ):
        self.entity = entity
        self.store = store
        self.timeout_seconds = timeout_seconds

    async def create(self, payload: Mapping[str, Any]) -> Any:
        """Insert a new row from the writable fields and return the generated key."""
        values = self.entity.validate_payload(payload)
        row = await self._write("create", None, self.store.query_one(
            self.entity.insert_sql(), values,
        ))
        if row is None:
            raise self._write_error("create", None)
        logger.info(
            f"{self.entity.label} created",
            extra={"entity": self.entity.label, "entity_id": str(row[self.entity.key_column])},
        )
        return row[self.entity.key_column]

    async def list_all(self) -> list[BaseModel]:
        """Return every row, in whatever order the store yields them."""
        rows = await self._read("list_all", None, self.store.query(
            self.entity.select_all_sql(),
        ))
        return [self._decode("list_all", None, row) for row in rows]

    async def read_one(self, raw_id: str) -> BaseModel:
        key = self.entity.parse_key(raw_id)
        row = await self._read("read_one", key, self.store.query_one(
            self.entity.select_one_sql(), {"key": key},
        ))
        if row is None:
            logger.info(
                f"{self.entity.label} not found",
                extra={"entity": self.entity.label, "entity_id": str(key), "operation": "read_one"},
            )
            raise NotFoundError(self.entity.label, str(key))
        return self._decode("read_one", key, row)

    async def update(self, raw_id: str, payload: Mapping[str, Any]) -> int:
        """Overwrite the writable fields of one row; NotFoundError if no row has that key."""
        key = self.entity.parse_key(raw_id)
        values = self.entity.validate_payload(payload)
        affected = await self._write("update", key, self.store.execute(
            self.entity.update_sql(), {**values, "key": key},
        ))
        if affected == 0:
            raise NotFoundError(self.entity.label, str(key))
        return affected

    async def delete(self, raw_id: str) -> int:
        """Delete one row. A key with no row is a successful no-op."""
        key = self.entity.parse_key(raw_id)
        return await self._write("delete", key, self.store.execute(
            self.entity.delete_sql(), {"key": key},
        ))

    # ─── Internals ──────────────────────────────────────────────

    async def _call(self, call: Awaitable[T]) -> T:
        if self.timeout_seconds is None:
            return await call
        return await asyncio.wait_for(call, timeout=self.timeout_seconds)

    async def _read(self, operation: str, key: Any, call: Awaitable[T]) -> T:
        try:
            return await self._call(call)
        except (BackendError, asyncio.TimeoutError) as e:
            self._log_failure(operation, key, e)
            raise self._read_error(operation, key) from e

    async def _write(self, operation: str, key: Any, call: Awaitable[T]) -> T:
        try:
            return await self._call(call)
        except (BackendError, asyncio.TimeoutError) as e:
            self._log_failure(operation, key, e)
            raise self._write_error(operation, key) from e

    def _decode(self, operation: str, key: Any, row: Mapping[str, Any]) -> BaseModel:
        try:
            return self.entity.decode_row(row)
        except RowDecodeError as e:
            self._log_failure(operation, key, e)
            raise self._read_error(operation, key) from e

    def _context(self, operation: str, key: Any) -> ErrorContext:
        return ErrorContext(
            entity=self.entity.label,
            entity_id=None if key is None else str(key),
            operation=operation,
        )

    def _read_error(self, operation: str, key: Any) -> StoreReadError:
        return StoreReadError(operation, self._context(operation, key))

    def _write_error(self, operation: str, key: Any) -> StoreWriteError:
        return StoreWriteError(operation, self._context(operation, key))

    def _log_failure(self, operation: str, key: Any, exc: BaseException) -> None:
        logger.error(
            f"{self.entity.label} {operation} failed: {exc!r}",
            extra={
                "entity": self.entity.label,
                "entity_id": None if key is None else str(key),
                "operation": operation,
            },
        )
