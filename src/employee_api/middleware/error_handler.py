"""Global error handling to keep error bodies uniform and free of internals.

Every non-2xx response carries::

    {"timestamp", "status", "error", "message", "errors"?}

``errors`` (field -> message) appears only for validation failures.
"""

import logging
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from employee_api.exceptions import EmployeeAPIError, ValidationFailedError
from employee_api.utils.secure_logging import log_error

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."

# Pydantic error types raised for keys the request model does not accept
UNRECOGNIZED_FIELD_ERRORS = {"extra_forbidden"}

# Pydantic error types raised when the body is not a JSON object at all
MALFORMED_BODY_ERRORS = {"json_invalid", "model_attributes_type", "dict_type", "model_type"}


def build_error_body(
    status_code: int,
    message: str,
    errors: dict[str, str] | None = None,
) -> dict[str, Any]:
    """Build the error body shared by every failure response."""
    body: dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "status": status_code,
        "error": HTTPStatus(status_code).phrase,
        "message": message,
    }
    if errors is not None:
        body["errors"] = errors
    return body


def error_response(
    status_code: int,
    message: str,
    errors: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=build_error_body(status_code, message, errors),
    )


async def employee_api_exception_handler(request: Request, exc: EmployeeAPIError) -> JSONResponse:
    """Handle domain exceptions raised by the service layer."""
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        # Collaborator detail was logged where the error was translated
        return error_response(exc.status_code, GENERIC_ERROR_MESSAGE)

    logger.info("%s for %s %s", type(exc).__name__, request.method, request.url.path)
    errors = exc.errors if isinstance(exc, ValidationFailedError) else None
    return error_response(exc.status_code, exc.message, errors)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Translate request parsing errors into the API error shape.

    Field-level type errors in the body are validation failures with
    per-field detail. Bad path parameters, malformed JSON and unknown
    keys are invalid input.
    """
    field_errors: dict[str, str] = {}
    unrecognized: list[str] = []
    malformed = False

    for error in exc.errors():
        loc = [part for part in error.get("loc", ()) if part != "body"]
        error_type = error.get("type", "")
        source = error.get("loc", ("",))[0]

        if error_type in UNRECOGNIZED_FIELD_ERRORS:
            unrecognized.append(str(loc[-1]) if loc else "field")
        elif source != "body" or error_type in MALFORMED_BODY_ERRORS or not loc:
            malformed = True
        else:
            field_errors.setdefault(str(loc[-1]), error.get("msg", "Invalid value"))

    # Error entries echo the submitted values; log only their types
    logger.info(
        "Rejected request %s %s: %s",
        request.method,
        request.url.path,
        ", ".join(sorted({e.get("type", "unknown") for e in exc.errors()})),
    )

    if unrecognized:
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            f"Unrecognized field(s): {', '.join(sorted(unrecognized))}",
        )
    if malformed or not field_errors:
        return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request")
    return error_response(status.HTTP_400_BAD_REQUEST, "Validation failed", field_errors)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle routing-level HTTP exceptions (unknown path, wrong method)."""
    message = exc.detail if isinstance(exc.detail, str) else HTTPStatus(exc.status_code).phrase
    return JSONResponse(
        status_code=exc.status_code,
        content=build_error_body(exc.status_code, message),
        headers=getattr(exc, "headers", None),
    )


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle database exceptions that escaped the service layer."""
    log_error(logger, f"Database error for {request.method} {request.url.path}", exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without leaking information."""
    log_error(logger, f"Unhandled exception for {request.method} {request.url.path}", exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all error handlers to the application."""
    app.add_exception_handler(EmployeeAPIError, employee_api_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
