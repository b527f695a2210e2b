"""Typed exception hierarchy shared by the client, stores and views."""

from __future__ import annotations

import enum
from typing import Any, Optional

DEFAULT_ERROR_MESSAGE = "Something went wrong"
AUTH_REQUIRED_MESSAGE = "Authentication required. Please login first."
SESSION_EXPIRED_MESSAGE = "Session expired. Please login again."


class ErrorKind(str, enum.Enum):
    unauthenticated = "unauthenticated"
    forbidden = "forbidden"
    not_found = "not_found"
    validation = "validation"
    conflict = "conflict"
    transport = "transport"
    server = "server"


# ── Exception hierarchy ─────────────────────────────────────────────

class AppException(Exception):
    """Base for all application exceptions — carries a structured kind."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        status_code: Optional[int] = None,
        payload: Any = None,
    ) -> None:
        self.kind = kind
        self.message = message
        self.status_code = status_code
        self.payload = payload
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"kind": self.kind.value, "message": self.message}
        if self.status_code is not None:
            body["status"] = self.status_code
        return body


class UnauthenticatedError(AppException):
    """No usable token, or the backend rejected it."""

    def __init__(
        self,
        message: str = AUTH_REQUIRED_MESSAGE,
        status_code: Optional[int] = None,
        payload: Any = None,
    ) -> None:
        super().__init__(ErrorKind.unauthenticated, message, status_code, payload)


class NotFoundException(AppException):
    """Entity not found."""

    def __init__(self, entity_type: str, entity_id: Any) -> None:
        super().__init__(
            ErrorKind.not_found,
            f"{entity_type} with id '{entity_id}' does not exist.",
            status_code=404,
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class ValidationException(AppException):
    """Business-logic validation failures, keyed by field."""

    def __init__(
        self,
        errors: dict[str, list[str]],
        message: str = "One or more fields failed validation.",
    ) -> None:
        super().__init__(ErrorKind.validation, message, payload=errors)
        self.errors = errors

    @classmethod
    def from_pydantic(cls, error: Any) -> "ValidationException":
        """Build from a ``pydantic.ValidationError``, keyed by dotted field path."""
        errors: dict[str, list[str]] = {}
        for err in error.errors():
            name = ".".join(str(p) for p in err.get("loc", ())) or "unknown"
            errors.setdefault(name, []).append(err.get("msg", "Invalid value"))
        return cls(errors)


class TransportError(AppException):
    """The request never produced an HTTP response."""

    def __init__(self, message: str) -> None:
        super().__init__(ErrorKind.transport, message)


class ApiError(AppException):
    """Non-2xx response from the REST backend."""

    def __init__(self, status_code: int, message: str, payload: Any = None) -> None:
        super().__init__(kind_for_status(status_code), message, status_code, payload)


# ── Helpers ─────────────────────────────────────────────────────────

_STATUS_KINDS = {
    400: ErrorKind.validation,
    401: ErrorKind.unauthenticated,
    403: ErrorKind.forbidden,
    404: ErrorKind.not_found,
    409: ErrorKind.conflict,
    422: ErrorKind.validation,
}


def kind_for_status(status_code: int) -> ErrorKind:
    """Map an HTTP status onto an ``ErrorKind``."""
    return _STATUS_KINDS.get(status_code, ErrorKind.server)


def is_auth_error(exc: BaseException) -> bool:
    return isinstance(exc, AppException) and exc.kind is ErrorKind.unauthenticated
