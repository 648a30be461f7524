"""Domain-specific exceptions for the employee API.

These exceptions provide a clean separation between service-layer errors
and HTTP responses. Each carries the HTTP status it maps to so the error
handlers never need to match on message text.
"""

from typing import Any

from fastapi import status


class EmployeeAPIError(Exception):
    """Base exception for all employee API errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "An error occurred", details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# =============================================================================
# Bad Request Errors (400)
# =============================================================================


class InvalidInputError(EmployeeAPIError):
    """Raised for a malformed identifier or request shape."""

    status_code = status.HTTP_400_BAD_REQUEST


class ValidationFailedError(EmployeeAPIError):
    """Raised when one or more field constraints are violated.

    ``errors`` maps the external field name to its message and always
    holds every violation found, never just the first one.
    """

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: dict[str, str], message: str = "Validation failed") -> None:
        self.errors = errors
        super().__init__(message, {"errors": errors})


# =============================================================================
# Resource Not Found Errors (404)
# =============================================================================


class NotFoundError(EmployeeAPIError):
    """Base class for resource not found errors."""

    status_code = status.HTTP_404_NOT_FOUND


class EmployeeNotFoundError(NotFoundError):
    """Raised when an employee cannot be found."""

    def __init__(self, employee_id: int | None = None) -> None:
        message = f"Employee not found with ID: {employee_id}"
        details = {"employee_id": employee_id} if employee_id is not None else {}
        super().__init__(message, details)


# =============================================================================
# Conflict Errors (409)
# =============================================================================


class DuplicateResourceError(EmployeeAPIError):
    """Base class for resource conflict errors."""

    status_code = status.HTTP_409_CONFLICT


class EmailAlreadyExistsError(DuplicateResourceError):
    """Raised when an email is already used by another employee."""

    def __init__(self, email: str | None = None) -> None:
        message = f"Email {email} is already in use" if email else "Email is already in use"
        details = {"email": email} if email else {}
        super().__init__(message, details)


# =============================================================================
# Unexpected Errors (500)
# =============================================================================


class UnexpectedError(EmployeeAPIError):
    """Raised when a collaborator (database, cache) fails unexpectedly.

    The message is always generic; the underlying error is chained.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self) -> None:
        super().__init__("An unexpected error occurred. Please try again later.")
