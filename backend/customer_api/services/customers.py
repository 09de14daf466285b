"""Customer Service — the customer entity declaration and its create/read/update/delete entry points.

Invariants:
    - Both create inputs (path segment, decoded body) go through create_customer()
    - Confirmation messages are fixed strings; clients match on them
"""

from pydantic import BaseModel

from customer_api.core.entity import EntityDefinition
from customer_api.core.repository_protocols import Store
from customer_api.schemas.customer import (
    CreateCustomerInput, Customer, CustomerPayload,
)
from customer_api.services.entity_mapper import EntityResourceMapper

CUSTOMER_ENTITY = EntityDefinition(
    label="Customer",
    table="customers",
    key_column="id",
    key_type=int,
    fields=("name",),
    model=Customer,
    payload_model=CustomerPayload,
)

CUSTOMER_ADDED = "Customer added successfully"
CUSTOMER_UPDATED = "Customer updated successfully"
CUSTOMER_DELETED = "Customer deleted successfully"


class CustomerService:
    """Customer operations over the generic mapper."""

    def __init__(self, store: Store, timeout_seconds: float | None = None):
        self.mapper = EntityResourceMapper(CUSTOMER_ENTITY, store, timeout_seconds)

    async def create(self, data: CreateCustomerInput) -> int:
        return await self.create_customer(data.name)

    async def create_customer(self, name: str | None) -> int:
        return await self.mapper.create({"name": name})

    async def list_all(self) -> list[BaseModel]:
        return await self.mapper.list_all()

    async def read_one(self, raw_id: str) -> BaseModel:
        return await self.mapper.read_one(raw_id)

    async def update(self, raw_id: str, name: str | None) -> None:
        await self.mapper.update(raw_id, {"name": name})

    async def delete(self, raw_id: str) -> None:
        await self.mapper.delete(raw_id)
