"""Domain error taxonomy shared by services and the HTTP boundary."""

from typing import Any, NoReturn

from fastapi import status


class TaskFlowError(Exception):
    """Base class for failures that map onto an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal Server Error"
    headers: dict[str, str] | None = None

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationFailedError(TaskFlowError):
    """Input rejected with field-level messages."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "Bad Request"

    def __init__(
        self,
        message: str = "Validation failed",
        validation_errors: dict[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.validation_errors = validation_errors or {}


class AuthenticationError(TaskFlowError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Unauthorized"
    headers = {"WWW-Authenticate": "Bearer"}


class ForbiddenError(TaskFlowError):
    status_code = status.HTTP_403_FORBIDDEN
    error = "Forbidden"


class NotFoundError(TaskFlowError):
    """A resource looked up by one of its fields does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    error = "Not Found"

    def __init__(self, resource: str, field: str, value: Any) -> None:
        super().__init__(f"{resource} not found with {field}: {value}")
        self.resource = resource
        self.field = field
        self.value = value


class ConflictError(TaskFlowError):
    status_code = status.HTTP_409_CONFLICT
    error = "Conflict"


class InternalError(TaskFlowError):
    pass


def raise_not_found(resource: str, field: str, value: Any, *, cause: Exception | None = None) -> NoReturn:
    raise NotFoundError(resource, field, value) from cause


def raise_validation_failed(
    validation_errors: dict[str, str],
    *,
    message: str = "Validation failed",
    cause: Exception | None = None,
) -> NoReturn:
    raise ValidationFailedError(message, validation_errors) from cause


def raise_unauthorized(detail: str, *, cause: Exception | None = None) -> NoReturn:
    raise AuthenticationError(detail) from cause


def raise_forbidden(detail: str, *, cause: Exception | None = None) -> NoReturn:
    raise ForbiddenError(detail) from cause


def raise_conflict(detail: str, *, cause: Exception | None = None) -> NoReturn:
    raise ConflictError(detail) from cause


def raise_internal_error(detail: str, *, cause: Exception | None = None) -> NoReturn:
    raise InternalError(detail) from cause
