"""Error taxonomy shared by every layer of the application."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    UNAUTHORIZED = "unauthorized"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"

    @property
    def status_code(self) -> int:
        return _STATUS_BY_KIND[self]


# A duplicate username is reported as a bad request, not 409.
_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.CONFLICT: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL: 500,
}

VALIDATION_ERROR_MESSAGE = "Validation error"


class ServiceError(Exception):
    """
    Domain failure tagged with an :class:`ErrorKind`.

    Services raise it for every expected failure; the HTTP layer turns it into a
    status code and an ``{"errors": message}`` body.
    """

    def __init__(self, kind: ErrorKind, message: str, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    @classmethod
    def validation(cls, details: Optional[Any] = None) -> "ServiceError":
        return cls(ErrorKind.VALIDATION, VALIDATION_ERROR_MESSAGE, details)

    @classmethod
    def unauthorized(cls, message: str = "Unauthorized") -> "ServiceError":
        return cls(ErrorKind.UNAUTHORIZED, message)

    @classmethod
    def conflict(cls, message: str) -> "ServiceError":
        return cls(ErrorKind.CONFLICT, message)

    @classmethod
    def not_found(cls, message: str) -> "ServiceError":
        return cls(ErrorKind.NOT_FOUND, message)

    def __repr__(self) -> str:
        return f"ServiceError(kind={self.kind.value!r}, message={self.message!r})"
