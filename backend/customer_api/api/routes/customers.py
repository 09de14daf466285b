"""Customer Routes — HTTP verbs over the customer entity.

Invariants:
    - Routes hold no logic beyond decoding input and shaping the response
    - Errors are raised as CustomerApiError and rendered by api/error_handlers.py
    - GET /customer and GET /customers are the same operation
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from customer_api.api.dependencies import (
    decode_create_body, decode_customer_body, get_customer_service,
)
from customer_api.schemas.customer import CreateFromBody, CreateFromPath, Customer
from customer_api.services.customers import (
    CUSTOMER_ADDED, CUSTOMER_DELETED, CUSTOMER_UPDATED, CustomerService,
)

router = APIRouter(tags=["customers"])


def _created(customer_id: int) -> JSONResponse:
    return JSONResponse(
        content=CUSTOMER_ADDED, headers={"Location": f"/customer/{customer_id}"},
    )


@router.post("/customer/{name}")
async def create_customer_from_path(
    name: str, service: CustomerService = Depends(get_customer_service),
):
    """Create a customer whose name is the path segment."""
    customer_id = await service.create(CreateFromPath(name=name))
    return _created(customer_id)


@router.post("/customer")
async def create_customer_from_body(
    data: CreateFromBody = Depends(decode_create_body),
    service: CustomerService = Depends(get_customer_service),
):
    """Create a customer from a JSON or form body."""
    customer_id = await service.create(data)
    return _created(customer_id)


@router.get("/customer", response_model=list[Customer])
@router.get("/customers", response_model=list[Customer])
async def list_customers(service: CustomerService = Depends(get_customer_service)):
    return await service.list_all()


@router.get("/customer/{customer_id}", response_model=Customer)
async def read_customer(
    customer_id: str, service: CustomerService = Depends(get_customer_service),
):
    return await service.read_one(customer_id)


@router.put("/customer/{customer_id}")
async def update_customer(
    customer_id: str,
    request: Request,
    service: CustomerService = Depends(get_customer_service),
):
    body = await decode_customer_body(request)
    await service.update(customer_id, body.get("name"))
    return CUSTOMER_UPDATED


@router.delete("/customer/{customer_id}")
async def delete_customer(
    customer_id: str, service: CustomerService = Depends(get_customer_service),
):
    await service.delete(customer_id)
    return CUSTOMER_DELETED
