"""Entity Declaration — table shape, key parsing, payload checks and row decoding for one entity.

Invariants:
    - Table, key and field names are validated identifiers; only they are ever placed in SQL text
    - Every client-supplied value travels as a named bind parameter (":name", ":key")
    - decode_row() either returns a full entity or raises RowDecodeError, never a partial one
    - The key is never part of the writable field set

Design Decisions:
    - Pydantic models carry both the payload rules and the row shape, so one declaration
      serves every entity with an integer/str key plus scalar fields
"""

import re
from dataclasses import dataclass
from typing import Any, Mapping

from pydantic import BaseModel, ValidationError

from customer_api.core.errors import InvalidInputError

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_INTEGER = re.compile(r"^-?[0-9]+\Z", re.ASCII)

# Signed 64-bit integer key range
INT_KEY_MIN = -(2 ** 63)
INT_KEY_MAX = 2 ** 63 - 1


class RowDecodeError(ValueError):
    """A result row does not match the entity's declared columns."""


@dataclass(frozen=True)
class EntityDefinition:
    """Binds an entity label to its table, key column and writable fields."""
    label: str
    table: str
    key_column: str
    key_type: type
    fields: tuple[str, ...]
    model: type[BaseModel]
    payload_model: type[BaseModel]

    def __post_init__(self) -> None:
        for name in (self.table, self.key_column, *self.fields):
            if not _IDENTIFIER.match(name):
                raise ValueError(f"Invalid SQL identifier: {name!r}")
        if self.key_column in self.fields or "key" in self.fields:
            raise ValueError("Key column cannot be a writable field")
        if not self.fields:
            raise ValueError("Entity needs at least one writable field")

    @property
    def columns(self) -> tuple[str, ...]:
        return (self.key_column, *self.fields)

    # ─── Input ──────────────────────────────────────────────────

    def parse_key(self, raw: str) -> Any:
        """Convert a path segment to the key type, or raise InvalidInputError.

        Integer keys must be plain ASCII digits (optional leading minus) within
        the signed 64-bit range.
        """
        invalid = InvalidInputError(
            f"Invalid {self.label} {self.key_column}: {raw!r}",
            field=self.key_column,
        )
        if self.key_type is int:
            if not isinstance(raw, str) or not _INTEGER.match(raw):
                raise invalid
            key = int(raw)
            if not INT_KEY_MIN <= key <= INT_KEY_MAX:
                raise invalid
            return key
        try:
            return self.key_type(raw)
        except (TypeError, ValueError):
            raise invalid

    def validate_payload(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        """Check the writable fields of a decoded request and return them."""
        try:
            model = self.payload_model.model_validate(payload)
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(loc) for loc in first["loc"]) or None
            raise InvalidInputError(
                f"Invalid {self.label} data: {first['msg']}", field=field,
            )
        return model.model_dump(include=set(self.fields))

    # ─── Output ─────────────────────────────────────────────────

    def decode_row(self, row: Mapping[str, Any]) -> BaseModel:
        """Build one entity from a row keyed by column name."""
        try:
            values = {column: row[column] for column in self.columns}
            return self.model.model_validate(values)
        except (KeyError, ValidationError) as e:
            raise RowDecodeError(f"Cannot decode {self.label} row: {e}") from e

    # ─── Statements ─────────────────────────────────────────────

    def insert_sql(self) -> str:
        names = ", ".join(self.fields)
        binds = ", ".join(f":{f}" for f in self.fields)
        return (
            f"INSERT INTO {self.table} ({names}) VALUES ({binds}) "
            f"RETURNING {self.key_column}"
        )

    def select_all_sql(self) -> str:
        return f"SELECT {', '.join(self.columns)} FROM {self.table}"

    def select_one_sql(self) -> str:
        return f"{self.select_all_sql()} WHERE {self.key_column} = :key"

    def update_sql(self) -> str:
        assignments = ", ".join(f"{f} = :{f}" for f in self.fields)
        return f"UPDATE {self.table} SET {assignments} WHERE {self.key_column} = :key"

    def delete_sql(self) -> str:
        return f"DELETE FROM {self.table} WHERE {self.key_column} = :key"
