"""Boundary Protocols — contracts between the mapper and its collaborators.

Invariants:
    - Core NEVER imports from infrastructure — dependency arrows point inward only
    - Queries take named bind parameters; values are never formatted into SQL text
    - query() returns a fully drained list; no open cursor escapes the store
    - Implementations raise core.errors.BackendError for driver failures

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
"""

from typing import Any, Mapping, Protocol


Row = Mapping[str, Any]


class Store(Protocol):
    """Relational store — one SQL statement per call, each in its own transaction."""

    async def execute(self, query: str, params: Mapping[str, Any] | None = None) -> int:
        """Run a write statement and return the number of rows affected."""
        ...

    async def query(self, query: str, params: Mapping[str, Any] | None = None) -> list[Row]:
        """Run a statement and return every resulting row."""
        ...

    async def query_one(self, query: str, params: Mapping[str, Any] | None = None) -> Row | None:
        """Run a statement and return its first row, or None when there is none."""
        ...


class Cache(Protocol):
    """Key-value cache — read-only from this service's point of view."""

    async def get(self, key: str) -> str | None:
        """Return the value under key, or None when the key is absent."""
        ...
