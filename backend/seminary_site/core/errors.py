"""Error Hierarchy — typed, categorized exceptions for every seminary site failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Form/lookup errors (400-level) are recoverable; backend errors (500-level) are not
    - BackendError.code is the hosted backend's own code (e.g. PGRST116, 23503)
      when the payload carried one, so the error classifier can read it directly
    - to_response() produces REST envelope; to_sse_event() produces SSE envelope

Design Decisions:
    - Single hierarchy with SiteError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging
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
    AUTHENTICATION = "authentication"
    BACKEND = "backend"
    NETWORK = "network"
    STORAGE = "storage"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource: str | None = None
    record_id: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class SiteError(Exception):
    """Base exception for all seminary site errors."""

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
                    "resource": self.context.resource,
                    "record_id": self.context.record_id,
                },
            }
        }

    def to_sse_event(self) -> dict:
        """Convert to SSE error event."""
        return {
            "type": "error",
            "data": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "severity": self.severity.value,
                "recoverable": self.severity in (
                    ErrorSeverity.INFO, ErrorSeverity.WARNING,
                ),
            },
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class FormValidationError(SiteError):
    """Submitted form failed a business rule (required field, course selection)."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "FORM_VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class ResourceNotFoundError(SiteError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class AuthenticationError(SiteError):
    """Missing, expired or rejected admin session."""
    def __init__(self, message: str = "Authentication required", context: ErrorContext | None = None):
        super().__init__(
            message, "AUTHENTICATION_REQUIRED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


# ─── Backend Errors (500-level unless the backend says otherwise) ─

# Backend codes with a more precise HTTP mapping than "bad gateway".
_BACKEND_STATUS = {
    "PGRST116": 404,   # no rows for a single-object request
    "23503": 409,      # foreign-key violation
    "23505": 409,      # unique violation
    "42501": 403,      # row-level security denied
}


class BackendError(SiteError):
    """Hosted backend rejected the request (error payload in a non-2xx response)."""
    def __init__(
        self,
        message: str,
        backend_code: str | None = None,
        details: str | None = None,
        hint: str | None = None,
        status_code: int | None = None,
        context: ErrorContext | None = None,
    ):
        http_status = _BACKEND_STATUS.get(backend_code or "", 502)
        category = (
            ErrorCategory.CONFLICT if http_status == 409 else ErrorCategory.BACKEND
        )
        super().__init__(
            message, backend_code or "BACKEND_ERROR", category,
            ErrorSeverity.ERROR, context, http_status,
        )
        self.backend_code = backend_code
        self.details = details
        self.hint = hint
        self.status_code = status_code


class BackendUnavailableError(SiteError):
    """Hosted backend unreachable after the retry budget was spent."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "BACKEND_UNAVAILABLE", ErrorCategory.NETWORK,
            ErrorSeverity.CRITICAL, context, 503,
        )


class RecordValidationError(SiteError):
    """A row returned by the backend does not match its record type."""
    def __init__(self, resource: str, message: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.resource = resource
        super().__init__(
            f"Malformed {resource} record: {message}",
            "RECORD_VALIDATION_ERROR", ErrorCategory.BACKEND,
            ErrorSeverity.ERROR, ctx, 502,
        )


class UploadError(SiteError):
    """Object storage upload failed or was cancelled."""
    def __init__(self, message: str, bucket: str, context: ErrorContext | None = None):
        super().__init__(
            message, "UPLOAD_FAILED", ErrorCategory.STORAGE,
            ErrorSeverity.ERROR, context, 502,
        )
        self.bucket = bucket
