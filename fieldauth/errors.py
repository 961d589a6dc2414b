"""
Error kinds and service results.

Services never raise for expected failures. They return a ServiceResult
carrying either a value or an ErrorKind plus message, and the HTTP layer
unwraps it at the boundary.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Failure categories surfaced to API clients."""
    UNAUTHORIZED = "UNAUTHORIZED"
    BAD_REQUEST = "BAD_REQUEST"
    CONFLICT = "CONFLICT"
    NOT_FOUND = "NOT_FOUND"
    PROJECT_NOT_FOUND = "PROJECT_NOT_FOUND"

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self]


STATUS_CODES = {
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.CONFLICT: 409,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.PROJECT_NOT_FOUND: 404,
}


class ServiceError(Exception):
    """Raised when a failed ServiceResult is unwrapped."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def to_dict(self) -> dict:
        return {"error": {"code": self.kind.value, "message": self.message}}


@dataclass
class ServiceResult(Generic[T]):
    """Outcome of a service operation."""
    success: bool
    value: Optional[T] = None
    error: Optional[ErrorKind] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls, value: T) -> "ServiceResult[T]":
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, kind: ErrorKind, message: str) -> "ServiceResult[T]":
        return cls(success=False, error=kind, message=message)

    def unwrap(self) -> T:
        """Return the value or raise ServiceError for a failed result."""
        if not self.success:
            raise ServiceError(self.error, self.message or self.error.value)
        return self.value
