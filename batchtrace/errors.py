"""Registry exception hierarchy.

All registry failures inherit from RegistryError, which carries an
error_code used by callers (and metrics) to classify the rejection.
Every error is raised before any state change, so a failed call leaves
no partial record and no audit event behind.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Machine-readable failure classes for registry operations."""

    UNAUTHORIZED = "UNAUTHORIZED"
    """The caller does not hold the required capability."""

    INVALID_INPUT = "INVALID_INPUT"
    """An argument is malformed (e.g. an empty key)."""

    CONFLICT = "CONFLICT"
    """A record already exists for the given product_id."""

    NOT_FOUND = "NOT_FOUND"
    """No record exists for the given product_id."""

    FORBIDDEN = "FORBIDDEN"
    """The caller is authenticated but does not own the record."""


class RegistryError(Exception):
    """Base exception for all registry errors."""

    error_code: ErrorCode

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UnauthorizedError(RegistryError):
    """Raised when the caller lacks a required capability."""

    error_code = ErrorCode.UNAUTHORIZED

    def __init__(self, message: str, capability: str | None = None) -> None:
        super().__init__(message)
        self.capability = capability


class InvalidInputError(RegistryError):
    """Raised when an argument fails validation."""

    error_code = ErrorCode.INVALID_INPUT


class ConflictError(RegistryError):
    """Raised when registering a product_id that already exists."""

    error_code = ErrorCode.CONFLICT


class NotFoundError(RegistryError):
    """Raised when operating on a product_id with no record."""

    error_code = ErrorCode.NOT_FOUND


class ForbiddenError(RegistryError):
    """Raised when the caller is not the owner of the record."""

    error_code = ErrorCode.FORBIDDEN
