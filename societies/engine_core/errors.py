"""
Errors - Typed rejections raised by the engine and the session layer.

Every precondition failure maps to exactly one kind. The kind carries the
HTTP status the API layer responds with, so handlers never deal in raw
status codes.
"""

from __future__ import annotations
from enum import Enum


class ErrorKind(str, Enum):
    """Kinds of rejection."""
    VALIDATION_ERROR = "VALIDATION_ERROR"  # Missing or malformed payload
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"  # Wrong session password
    AUTHORIZATION_ERROR = "AUTHORIZATION_ERROR"  # Wrong turn, phase, or not host
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"  # Stale snapshot or taken slot
    INTERNAL_ERROR = "INTERNAL_ERROR"  # Invariant violated

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self]


_HTTP_STATUS = {
    ErrorKind.VALIDATION_ERROR: 400,
    ErrorKind.AUTHENTICATION_ERROR: 401,
    ErrorKind.AUTHORIZATION_ERROR: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL_ERROR: 500,
}


class GameError(Exception):
    """Base class for all typed rejections."""
    kind: ErrorKind = ErrorKind.INTERNAL_ERROR

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    @property
    def http_status(self) -> int:
        return self.kind.http_status

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class ValidationError(GameError):
    kind = ErrorKind.VALIDATION_ERROR


class AuthenticationError(GameError):
    kind = ErrorKind.AUTHENTICATION_ERROR


class AuthorizationError(GameError):
    kind = ErrorKind.AUTHORIZATION_ERROR


class NotFoundError(GameError):
    kind = ErrorKind.NOT_FOUND


class ConflictError(GameError):
    kind = ErrorKind.CONFLICT


class InternalError(GameError):
    kind = ErrorKind.INTERNAL_ERROR


_ERROR_CLASSES = {cls.kind: cls for cls in (
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ConflictError,
    InternalError,
)}


def error_for_kind(kind: ErrorKind | None, message: str) -> GameError:
    """Rebuild the typed error for a failed ActionResult."""
    return _ERROR_CLASSES.get(kind, InternalError)(message)
