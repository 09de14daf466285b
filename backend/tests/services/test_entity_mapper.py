"""Entity Resource Mapper — store interaction and error mapping against a mocked Store.

Tests cover:
    - Invalid input never reaches the store
    - BackendError/timeout become StoreReadError or StoreWriteError chained to the cause
    - A single undecodable row aborts list_all
    - read_one/update report NotFoundError on zero rows; delete does not
"""

import asyncio

import pytest
from unittest.mock import AsyncMock

from customer_api.core.errors import (
    BackendError, InvalidInputError, NotFoundError, StoreReadError, StoreWriteError,
)
from customer_api.schemas.customer import Customer
from customer_api.services.customers import CUSTOMER_ENTITY
from customer_api.services.entity_mapper import EntityResourceMapper


def _make_mock_store():
    store = AsyncMock()
    store.execute = AsyncMock(return_value=1)
    store.query = AsyncMock(return_value=[])
    store.query_one = AsyncMock(return_value=None)
    return store


def _mapper(store, timeout_seconds=None):
    return EntityResourceMapper(CUSTOMER_ENTITY, store, timeout_seconds)


# ─── create ─────────────────────────────────────────────────────

async def test_create_returns_generated_key():
    store = _make_mock_store()
    store.query_one.return_value = {"id": 5}
    key = await _mapper(store).create({"name": "Ada"})
    assert key == 5
    store.query_one.assert_awaited_once_with(
        CUSTOMER_ENTITY.insert_sql(), {"name": "Ada"},
    )


async def test_create_with_blank_name_does_not_touch_store():
    store = _make_mock_store()
    with pytest.raises(InvalidInputError):
        await _mapper(store).create({"name": "  "})
    store.query_one.assert_not_awaited()


async def test_create_maps_backend_error_to_store_write_error():
    store = _make_mock_store()
    cause = BackendError("Integrity constraint violated", "query_one")
    store.query_one.side_effect = cause
    with pytest.raises(StoreWriteError) as exc_info:
        await _mapper(store).create({"name": "Ada"})
    assert exc_info.value.__cause__ is cause
    assert exc_info.value.context.operation == "create"


# ─── list_all ───────────────────────────────────────────────────

async def test_list_all_decodes_every_row():
    store = _make_mock_store()
    store.query.return_value = [{"id": 1, "name": "Ada"}, {"id": 2, "name": "Grace"}]
    customers = await _mapper(store).list_all()
    assert customers == [Customer(id=1, name="Ada"), Customer(id=2, name="Grace")]


async def test_list_all_aborts_on_bad_row():
    store = _make_mock_store()
    store.query.return_value = [{"id": 1, "name": "Ada"}, {"id": 2, "name": None}]
    with pytest.raises(StoreReadError):
        await _mapper(store).list_all()


async def test_list_all_maps_query_failure():
    store = _make_mock_store()
    store.query.side_effect = BackendError("Connection or operational error", "query")
    with pytest.raises(StoreReadError):
        await _mapper(store).list_all()


# ─── read_one ───────────────────────────────────────────────────

async def test_read_one_binds_parsed_key():
    store = _make_mock_store()
    store.query_one.return_value = {"id": 3, "name": "Ada"}
    customer = await _mapper(store).read_one("3")
    assert customer == Customer(id=3, name="Ada")
    store.query_one.assert_awaited_once_with(CUSTOMER_ENTITY.select_one_sql(), {"key": 3})


async def test_read_one_missing_row_is_not_found():
    store = _make_mock_store()
    with pytest.raises(NotFoundError) as exc_info:
        await _mapper(store).read_one("404")
    assert exc_info.value.context.entity_id == "404"


async def test_read_one_rejects_non_numeric_id_before_store():
    store = _make_mock_store()
    with pytest.raises(InvalidInputError):
        await _mapper(store).read_one("abc")
    store.query_one.assert_not_awaited()


async def test_read_one_timeout_is_store_read_error():
    store = _make_mock_store()

    async def _slow(*args, **kwargs):
        await asyncio.sleep(1)

    store.query_one.side_effect = _slow
    with pytest.raises(StoreReadError) as exc_info:
        await _mapper(store, timeout_seconds=0.01).read_one("1")
    assert isinstance(exc_info.value.__cause__, asyncio.TimeoutError)


# ─── update / delete ────────────────────────────────────────────

async def test_update_binds_fields_and_key():
    store = _make_mock_store()
    await _mapper(store).update("1", {"name": "Lovelace"})
    store.execute.assert_awaited_once_with(
        CUSTOMER_ENTITY.update_sql(), {"name": "Lovelace", "key": 1},
    )


async def test_update_zero_rows_is_not_found():
    store = _make_mock_store()
    store.execute.return_value = 0
    with pytest.raises(NotFoundError):
        await _mapper(store).update("9", {"name": "Lovelace"})


async def test_update_with_blank_name_does_not_touch_store():
    store = _make_mock_store()
    with pytest.raises(InvalidInputError):
        await _mapper(store).update("1", {"name": ""})
    store.execute.assert_not_awaited()


async def test_delete_zero_rows_succeeds():
    store = _make_mock_store()
    store.execute.return_value = 0
    assert await _mapper(store).delete("9") == 0


async def test_delete_maps_backend_error_to_store_write_error():
    store = _make_mock_store()
    store.execute.side_effect = BackendError("Database driver error", "execute")
    with pytest.raises(StoreWriteError) as exc_info:
        await _mapper(store).delete("1")
    assert exc_info.value.context.entity_id == "1"
