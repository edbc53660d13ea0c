"""Error Hierarchy: typed, categorized exceptions for every user-API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error declares the ResponseShape its HTTP body is rendered in
    - Domain errors (400-level) are recoverable by the caller; PersistenceError is critical
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with MockUsersError base: FastAPI global handler catches all
    - Response shape lives on the error, not the route: Create and Update report
      validation failures in different body shapes and routes stay free of error logic
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

PROBLEM_TYPE_URI = "https://example.com/problemdetails"
PROBLEM_TITLE = "Invalid Input"
USERS_INSTANCE = "/users"


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    PERSISTENCE = "persistence"
    INTERNAL = "internal"


class ResponseShape(str, Enum):
    """Body layouts a failure can be rendered in."""
    PROBLEM_DETAILS = "problem_details"   # {type, title, status, detail, instance}
    ERROR_LIST = "error_list"             # {errors: [...]}
    PLAIN_TEXT = "plain_text"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class MockUsersError(Exception):
    """Base exception for all user-API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        shape: ResponseShape = ResponseShape.PLAIN_TEXT,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.shape = shape

    def to_response(self, problem_type: str = PROBLEM_TYPE_URI) -> dict | str:
        """Render the body for this error's ResponseShape."""
        if self.shape is ResponseShape.PROBLEM_DETAILS:
            return {
                "type": problem_type,
                "title": PROBLEM_TITLE,
                "status": self.http_status,
                "detail": self.message,
                "instance": USERS_INSTANCE,
            }
        if self.shape is ResponseShape.ERROR_LIST:
            return {"errors": [self.message]}
        return self.message


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationFailedError(MockUsersError):
    """Candidate record violates one or more field constraints."""
    def __init__(
        self,
        violations: list[str],
        shape: ResponseShape = ResponseShape.PROBLEM_DETAILS,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            ", ".join(violations), "VALIDATION_FAILED", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400, shape,
        )
        self.violations = list(violations)

    def to_response(self, problem_type: str = PROBLEM_TYPE_URI) -> dict | str:
        if self.shape is ResponseShape.ERROR_LIST:
            return {"errors": list(self.violations)}
        return super().to_response(problem_type)


class MissingIdentifierError(MockUsersError):
    """Create called without a usable id."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "User must have an id", "MISSING_IDENTIFIER", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400, ResponseShape.PROBLEM_DETAILS,
        )


class UserNotFoundError(MockUsersError):
    """Referenced id is absent from the collection."""
    def __init__(self, user_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_id = user_id
        super().__init__(
            "User not found", "USER_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, ctx, 404, ResponseShape.PLAIN_TEXT,
        )
        self.user_id = user_id


class DuplicateIdentifierError(MockUsersError):
    """Id already used by another record (only when uniqueness is enforced)."""
    def __init__(self, user_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_id = user_id
        super().__init__(
            f"User with id '{user_id}' already exists",
            "DUPLICATE_IDENTIFIER", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 409, ResponseShape.PROBLEM_DETAILS,
        )
        self.user_id = user_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class PersistenceError(MockUsersError):
    """Writing the collection to the durable file failed."""
    def __init__(self, reason: str, path: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.debug_info = {"reason": reason, "path": path}
        super().__init__(
            "Internal Server Error", "PERSISTENCE_ERROR", ErrorCategory.PERSISTENCE,
            ErrorSeverity.CRITICAL, ctx, 500, ResponseShape.PLAIN_TEXT,
        )
        self.reason = reason
        self.path = path
