"""Error Hierarchy — typed, categorized exceptions for every request-scoped failure.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Input errors (400-level) are recoverable; store/cache errors (500-level) are not
    - Store and cache errors chain the collaborator failure as __cause__
    - to_response() never includes the wrapped driver message

Design Decisions:
    - Single hierarchy with CustomerApiError base: one global handler renders all kinds
    - BackendError sits outside the hierarchy: it is what Store/Cache implementations
      raise, and the mapper translates it into a StoreReadError/StoreWriteError/CacheReadError
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    CACHE = "cache"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and the response envelope."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    entity: str | None = None
    entity_id: str | None = None
    operation: str | None = None
    field: str | None = None
    debug_info: dict[str, Any] | None = None


class BackendError(Exception):
    """Raised by Store/Cache implementations when the driver call fails."""

    def __init__(self, message: str, operation: str):
        super().__init__(message)
        self.message = message
        self.operation = operation


class CustomerApiError(Exception):
    """Base exception for all errors rendered to HTTP clients."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "entity": self.context.entity,
                    "entity_id": self.context.entity_id,
                    "operation": self.context.operation,
                    "field": self.context.field,
                },
            }
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class InvalidInputError(CustomerApiError):
    """Request data is malformed or a required field is missing."""
    def __init__(self, message: str, field: str | None = None, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field = field
        super().__init__(
            message, "INVALID_INPUT", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.field = field


class NotFoundError(CustomerApiError):
    """No entity matches the requested key."""
    def __init__(self, entity: str, entity_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.entity = entity
        ctx.entity_id = entity_id
        super().__init__(
            f"{entity} '{entity_id}' not found",
            "ENTITY_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )


# ─── Collaborator Errors (500-level) ────────────────────────────

class StoreReadError(CustomerApiError):
    """Query against the relational store failed, or a row could not be decoded."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Store read failed during {operation}",
            "STORE_READ_FAILED", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation


class StoreWriteError(CustomerApiError):
    """Insert, update or delete against the relational store failed."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Store write failed during {operation}",
            "STORE_WRITE_FAILED", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation


class CacheReadError(CustomerApiError):
    """Key-value cache returned an error other than a missing key."""
    def __init__(self, key: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = "cache_get"
        ctx.entity_id = key
        super().__init__(
            f"Cache read failed for key '{key}'",
            "CACHE_READ_FAILED", ErrorCategory.CACHE,
            ErrorSeverity.CRITICAL, ctx, 502,
        )
        self.key = key
