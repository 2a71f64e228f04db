"""Error Hierarchy — typed, categorized exceptions for all shopping list failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error renders to a uuAppErrorMap: {"<command>/<violation>": ErrorEntry}
    - Domain errors (400-level) are user-correctable; infrastructure errors (500-level) are not
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with ShoppingListError base: the command runner and the
      FastAPI global handler both catch it (uniform error shape)
    - ErrorEntry as frozen dataclass: one violation, merged into maps by key
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    AUTHORIZATION = "authorization"
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass(frozen=True)
class ErrorEntry:
    """One uuApp error map entry."""
    key: str
    message: str
    param_map: Mapping[str, Any] | None = None
    type: str = "error"

    def to_dict(self) -> dict:
        entry: dict[str, Any] = {"type": self.type, "message": self.message}
        if self.param_map is not None:
            entry["paramMap"] = dict(self.param_map)
        return entry


ErrorMap = dict[str, ErrorEntry]


@dataclass
class ErrorContext:
    """Context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    command: str | None = None
    uu_identity: str | None = None
    list_id: str | None = None


class ShoppingListError(Exception):
    """Base exception for all shopping list errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        error_map: ErrorMap | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.error_map: ErrorMap = error_map or {
            code: ErrorEntry(code, message),
        }

    @property
    def user_correctable(self) -> bool:
        return self.http_status < 500

    def to_error_map(self) -> dict:
        """Convert to the serialized uuAppErrorMap."""
        return {key: entry.to_dict() for key, entry in self.error_map.items()}


# ─── Domain Errors (400-level) ──────────────────────────────────

class UnauthorizedError(ShoppingListError):
    """Caller profiles do not intersect the command's required profiles."""
    def __init__(self, command: str, context: ErrorContext | None = None):
        super().__init__(
            f"User is not authorized to call {command}.",
            f"{command}/unauthorized", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )
        self.command = command


class InvalidDtoInError(ShoppingListError):
    """One or more dtoIn fields failed validation. Carries every violation."""
    def __init__(
        self, command: str, error_map: ErrorMap, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"dtoIn of {command} is not valid.",
            f"{command}/invalidDtoIn", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400, error_map=dict(error_map),
        )
        self.command = command


class ListNotFoundError(ShoppingListError):
    """Requested shopping list does not exist."""
    def __init__(
        self,
        command: str,
        list_id: str,
        param_name: str = "id",
        context: ErrorContext | None = None,
    ):
        code = f"{command}/notFound"
        message = "Shopping list not found."
        super().__init__(
            message, code, ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
            error_map={code: ErrorEntry(code, message, {param_name: list_id})},
        )
        self.command = command
        self.list_id = list_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class CommandFailedError(ShoppingListError):
    """Unexpected failure while executing a command. Message stays generic."""
    def __init__(self, command: str, context: ErrorContext | None = None):
        super().__init__(
            f"Unexpected error while executing {command}.",
            f"{command}/failed", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.command = command


class DatabaseError(ShoppingListError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
