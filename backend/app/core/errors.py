"""Error Hierarchy — typed, categorized exceptions for all API failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the flat REST envelope {error, code, details?}
    - No internal details leaked in user-facing messages
    - Not-owned and non-existent resources raise the same error (same message, same status)

Design Decisions:
    - Single hierarchy with AppError base: FastAPI global handler catches all (ADR: uniform error shape)
    - error is a plain string: the dashboard renders it verbatim in alerts
"""

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
    AUTHENTICATION = "authentication"
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


class AppError(Exception):
    """Base exception for all application errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
        details: list[dict[str, Any]] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status
        self.details = details

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        body: dict[str, Any] = {"error": self.message, "code": self.code}
        if self.details is not None:
            body["details"] = self.details
        return body


# ─── Domain Errors (400-level) ──────────────────────────────────

class UnauthenticatedError(AppError):
    """No identity could be resolved for the request."""
    def __init__(self):
        super().__init__(
            "Unauthorized", "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, 401,
        )


class InvalidCredentialsError(AppError):
    """Email/password pair did not match a stored user."""
    def __init__(self):
        super().__init__(
            "Invalid email or password", "INVALID_CREDENTIALS",
            ErrorCategory.AUTHENTICATION, ErrorSeverity.WARNING, 401,
        )


class ValidationFailedError(AppError):
    """Input failed schema validation."""
    def __init__(self, details: list[dict[str, Any]]):
        super().__init__(
            "Validation failed", "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, 400, details,
        )


class EmailTakenError(AppError):
    """Registration attempted with an email that already exists."""
    def __init__(self):
        super().__init__(
            "User with this email already exists", "EMAIL_TAKEN",
            ErrorCategory.CONFLICT, ErrorSeverity.ERROR, 400,
        )


class SiteConflictError(AppError):
    """Owner already has a site registered with this URL."""
    def __init__(self):
        super().__init__(
            "You already have a site with this URL", "SITE_URL_CONFLICT",
            ErrorCategory.CONFLICT, ErrorSeverity.ERROR, 400,
        )


class ResourceNotFoundError(AppError):
    """Requested resource does not exist or is not owned by the caller."""
    def __init__(self, resource_type: str):
        super().__init__(
            f"{resource_type} not found", "RESOURCE_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.ERROR, 404,
        )


class SiteNotFoundError(ResourceNotFoundError):
    def __init__(self):
        super().__init__("Site")


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(AppError):
    """Database operation failed. Clients only see a generic 500; the reason stays in logs."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            "Internal server error", "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, 500,
        )
        self.operation = operation
        self.reason = f"Database {operation} failed: {message}"
