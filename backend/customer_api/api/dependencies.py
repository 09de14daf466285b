"""Request Dependencies — resolve collaborators from app.state and decode customer bodies.

Invariants:
    - Store and Cache handles come from the app they were passed to (create_app), never a module global
    - Body decoding accepts JSON objects and urlencoded/multipart forms; anything else is InvalidInputError
"""

from typing import Any

from fastapi import Request
from pydantic import ValidationError

from customer_api.core.errors import InvalidInputError
from customer_api.core.repository_protocols import Cache, Store
from customer_api.schemas.customer import CreateFromBody
from customer_api.services.cache_passthrough import CachePassthrough
from customer_api.services.customers import CustomerService

_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_store(request: Request) -> Store:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("Database not initialized")
    return store


def get_cache(request: Request) -> Cache:
    cache = getattr(request.app.state, "cache", None)
    if cache is None:
        raise RuntimeError("Cache not initialized")
    return cache


def get_customer_service(request: Request) -> CustomerService:
    settings = request.app.state.settings
    return CustomerService(get_store(request), settings.store_timeout_seconds)


def get_cache_passthrough(request: Request) -> CachePassthrough:
    settings = request.app.state.settings
    return CachePassthrough(get_cache(request), settings.cache_key)


async def decode_customer_body(request: Request) -> dict[str, Any]:
    """Decode the request body into a field mapping."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(_FORM_TYPES):
        form = await request.form()
        return {"name": form.get("name")}
    try:
        data = await request.json()
    except ValueError:
        raise InvalidInputError("Request body is not valid JSON")
    if not isinstance(data, dict):
        raise InvalidInputError("Request body must be a JSON object")
    return data


async def decode_create_body(request: Request) -> CreateFromBody:
    """Decode the body of POST /customer into its tagged create input."""
    body = await decode_customer_body(request)
    try:
        return CreateFromBody(name=body.get("name"))
    except ValidationError as e:
        raise InvalidInputError(
            f"Invalid Customer data: {e.errors()[0]['msg']}", field="name",
        )
