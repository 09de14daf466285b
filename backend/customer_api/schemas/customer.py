"""Customer Schemas — Pydantic models for the customer entity and its create inputs.

Invariants:
    - CustomerPayload.name: stripped, non-empty
    - Customer.id is assigned by the store, never read from a create/update payload
    - CreateFromPath and CreateFromBody both resolve to a single name value

Design Decisions:
    - Tagged input per create route instead of binding path/body/form into one struct
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CustomerPayload(BaseModel):
    """Writable customer fields — shared by create and update."""
    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("name cannot be empty or whitespace")
        return v


class Customer(BaseModel):
    """Persisted customer as returned to clients."""
    id: int
    name: str


class CreateFromPath(BaseModel):
    """POST /customer/{name} — name taken from the path segment."""
    source: Literal["path"] = "path"
    name: str


class CreateFromBody(BaseModel):
    """POST /customer — name taken from the decoded JSON or form body."""
    source: Literal["body"] = "body"
    name: str | None = None


CreateCustomerInput = CreateFromPath | CreateFromBody
