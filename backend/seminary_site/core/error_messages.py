"""Error Messages — maps raw backend/transport errors to stable display strings.

Invariants:
    - describe_error() is total: any input (exception, dict payload, None) yields a str
    - Classification order is fixed, first match wins:
      network failure → no rows (PGRST116) → foreign key (23503) → raw message → generic
    - Only side effect is one diagnostic log record per call

Design Decisions:
    - Duck-typed field access (dict key or attribute): errors arrive as SiteError,
      httpx exceptions, or raw PostgREST payload dicts
    - Network detection is a best-effort "fetch" substring match plus the
      transient transport errors the retry wrapper retries (TRANSIENT_ERRORS);
      a message that merely mentions "fetch" is misclassified
"""

import logging
from enum import Enum
from typing import Any

import httpx

logger = logging.getLogger(__name__)

NO_ROWS_CODE = "PGRST116"
FOREIGN_KEY_VIOLATION_CODE = "23503"
COURSE_REGISTRATIONS_CONSTRAINT = "registrations_course_id_fkey"

NETWORK_MESSAGE = (
    "Network connection error. Please check your internet connection and try again."
)
NO_DATA_MESSAGE = "No data available at the moment."
COURSE_HAS_REGISTRATIONS_MESSAGE = (
    "Cannot delete this course because there are student registrations "
    "associated with it. Please delete or reassign the registrations first, "
    "then try again."
)
REFERENCED_RECORD_MESSAGE = (
    "Cannot delete this item because it is referenced by other records. "
    "Please remove the related records first."
)
GENERIC_MESSAGE = "An unexpected error occurred"

# Transport failures the retry wrapper retries.
TRANSIENT_ERRORS: tuple[type[Exception], ...] = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
)


class ErrorKind(str, Enum):
    """Display categories produced by classify_error."""
    NETWORK = "network"
    NO_DATA = "no_data"
    COURSE_HAS_REGISTRATIONS = "course_has_registrations"
    REFERENCED_RECORD = "referenced_record"
    GENERIC = "generic"


def _field(error: Any, name: str) -> str | None:
    """Read a string field from a dict payload or an object attribute."""
    if isinstance(error, dict):
        value = error.get(name)
    else:
        value = getattr(error, name, None)
    return value if isinstance(value, str) else None


def _message(error: Any) -> str | None:
    if isinstance(error, str):
        return error
    message = _field(error, "message")
    if message is None and isinstance(error, BaseException) and error.args:
        first = error.args[0]
        message = first if isinstance(first, str) else None
    return message


def _is_network_failure(error: Any, message: str | None) -> bool:
    if isinstance(error, TRANSIENT_ERRORS):
        return True
    if _field(error, "code") == "BACKEND_UNAVAILABLE":
        return True
    return message is not None and "fetch" in message.lower()


def classify_error(error: Any) -> ErrorKind:
    """Classify an error into a display category (no logging)."""
    message = _message(error)
    if _is_network_failure(error, message):
        return ErrorKind.NETWORK
    # BackendError keeps the raw backend code separately from its own code
    code = _field(error, "backend_code") or _field(error, "code")
    if code == NO_ROWS_CODE:
        return ErrorKind.NO_DATA
    if code == FOREIGN_KEY_VIOLATION_CODE:
        if message and COURSE_REGISTRATIONS_CONSTRAINT in message:
            return ErrorKind.COURSE_HAS_REGISTRATIONS
        return ErrorKind.REFERENCED_RECORD
    return ErrorKind.GENERIC


_KIND_MESSAGES = {
    ErrorKind.NETWORK: NETWORK_MESSAGE,
    ErrorKind.NO_DATA: NO_DATA_MESSAGE,
    ErrorKind.COURSE_HAS_REGISTRATIONS: COURSE_HAS_REGISTRATIONS_MESSAGE,
    ErrorKind.REFERENCED_RECORD: REFERENCED_RECORD_MESSAGE,
}


def describe_error(error: Any) -> str:
    """Return the user-facing message for any error value."""
    kind = classify_error(error)
    logger.error(
        f"Backend error: {error!r}",
        extra={"error_kind": kind.value, "error_code": _field(error, "code")},
    )
    if kind in _KIND_MESSAGES:
        return _KIND_MESSAGES[kind]
    return _message(error) or GENERIC_MESSAGE
