"""Translate failures into the structured error payload.

Every error response has the shape::

    {"message": ..., "status": 404, "error": "Not Found", "path": "/tasks/9",
     "timestamp": ..., "validationErrors": null}
"""

from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskflow.config import settings
from taskflow.logger import get_logger, log_exception
from taskflow.schemas.error import ErrorResponse
from taskflow.utils.exceptions import TaskFlowError

logger = get_logger(__name__)

_REQUEST_LOCATIONS = {"body", "query", "path", "header", "cookie"}
_UNIQUE_MARKERS = ("email", "unique", "uk_")


def _reason(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def error_response(
    request: Request,
    status_code: int,
    message: str,
    *,
    error: str | None = None,
    validation_errors: dict[str, str] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    payload = ErrorResponse(
        message=message,
        status=status_code,
        error=error or _reason(status_code),
        path=request.url.path,
        validation_errors=validation_errors,
    )
    return JSONResponse(
        status_code=status_code,
        content=payload.model_dump(mode="json", by_alias=True),
        headers=headers,
    )


def _field_name(loc: tuple[int | str, ...]) -> str:
    names = [str(part) for part in loc if isinstance(part, str)]
    if len(names) > 1 and names[0] in _REQUEST_LOCATIONS:
        names = names[1:]
    return names[-1] if names else "request"


def _clean_message(message: str) -> str:
    return message.removeprefix("Value error, ")


def collect_validation_errors(exc: RequestValidationError) -> dict[str, str]:
    """Map each failing field to its first error message."""
    errors: dict[str, str] = {}
    for item in exc.errors():
        field = _field_name(tuple(item.get("loc", ())))
        errors.setdefault(field, _clean_message(item.get("msg", "Invalid value")))
    return errors


async def taskflow_error_handler(request: Request, exc: TaskFlowError) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "Request failed",
        status_code=exc.status_code,
        error_type=type(exc).__name__,
        detail=exc.message,
    )
    return error_response(
        request,
        exc.status_code,
        exc.message,
        error=exc.error,
        validation_errors=getattr(exc, "validation_errors", None) or None,
        headers=exc.headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    validation_errors = collect_validation_errors(exc)
    logger.warning("Validation error", validation_errors=validation_errors)
    return error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "Validation failed",
        validation_errors=validation_errors,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.warning("HTTP error", status_code=exc.status_code, detail=exc.detail)
    return error_response(
        request,
        exc.status_code,
        str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Unchecked constraint violations.

    Uniqueness problems are reported as conflicts; anything else is an
    internal error.
    """
    text = str(exc.orig if exc.orig is not None else exc).lower()
    if not any(marker in text for marker in _UNIQUE_MARKERS):
        return await unhandled_exception_handler(request, exc)

    log_exception(logger, exc, "Uniqueness violation", level="warning", include_traceback=False)
    return error_response(
        request,
        status.HTTP_409_CONFLICT,
        "Email already exists. Please use a different email address.",
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    log_exception(logger, exc, "Unhandled exception", path=request.url.path)
    message = str(exc) if settings.debug else "An internal server error occurred"
    return error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskFlowError, taskflow_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
