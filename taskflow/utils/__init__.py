"""Utility functions and helpers."""

from .exceptions import (
    AuthenticationError,
    ConflictError,
    ForbiddenError,
    InternalError,
    NotFoundError,
    TaskFlowError,
    ValidationFailedError,
    raise_conflict,
    raise_forbidden,
    raise_internal_error,
    raise_not_found,
    raise_unauthorized,
    raise_validation_failed,
)

__all__ = [
    "AuthenticationError",
    "ConflictError",
    "ForbiddenError",
    "InternalError",
    "NotFoundError",
    "TaskFlowError",
    "ValidationFailedError",
    "raise_conflict",
    "raise_forbidden",
    "raise_internal_error",
    "raise_not_found",
    "raise_unauthorized",
    "raise_validation_failed",
]
