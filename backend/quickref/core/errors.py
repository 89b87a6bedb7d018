"""Error Hierarchy — typed, categorized exceptions for every QuickRef failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope used by every error handler
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with QuickRefError base: one global handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
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
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    UPLOAD = "upload"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and the response envelope."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    request_id: str | None = None
    resource: str | None = None
    debug_info: dict[str, Any] | None = None


class QuickRefError(Exception):
    """Base exception for all QuickRef errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.headers = headers

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
                    "request_id": self.context.request_id,
                    "resource": self.context.resource,
                },
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(QuickRefError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource = resource_type
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


class ConflictError(QuickRefError):
    """Write would violate a uniqueness rule."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class AuthenticationError(QuickRefError):
    """Credentials missing, invalid or expired."""
    def __init__(
        self,
        message: str = "Could not validate credentials",
        scheme: str = "Bearer",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
            headers={"WWW-Authenticate": scheme},
        )


class InactiveUserError(QuickRefError):
    """Authenticated user is disabled."""
    def __init__(self, username: str, context: ErrorContext | None = None):
        super().__init__(
            f"User '{username}' is inactive",
            "INACTIVE_USER", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 400,
        )


class InvalidUploadError(QuickRefError):
    """Uploaded file is malformed (missing or unsafe filename)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_UPLOAD", ErrorCategory.UPLOAD,
            ErrorSeverity.ERROR, context, 400,
        )


class PayloadTooLargeError(QuickRefError):
    """Uploaded file exceeds the configured size limit."""
    def __init__(self, size: int, limit: int, context: ErrorContext | None = None):
        super().__init__(
            f"File is {size} bytes; limit is {limit} bytes",
            "PAYLOAD_TOO_LARGE", ErrorCategory.UPLOAD,
            ErrorSeverity.ERROR, context, 413,
        )
        self.size = size
        self.limit = limit


class UnsupportedMediaTypeError(QuickRefError):
    """Uploaded file content type is not allowed."""
    def __init__(
        self, content_type: str | None, allowed: list[str],
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Content type '{content_type}' not allowed. Allowed: {', '.join(allowed)}",
            "UNSUPPORTED_MEDIA_TYPE", ErrorCategory.UPLOAD,
            ErrorSeverity.ERROR, context, 415,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(QuickRefError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
