"""Secure logging utilities to prevent personal data in production logs."""

import logging
import re

from employee_api.config import get_settings

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+")
URL_PATTERN = re.compile(r"(postgresql|postgres|redis|rediss|http|https)(\+\w+)?://[^\s]+")
TOKEN_PATTERN = re.compile(r"[a-zA-Z0-9_\-]{32,}")

MAX_LOGGED_MESSAGE_LENGTH = 300


def sanitize_exception_message(error: BaseException) -> str:
    """Sanitize exception message for logging outside debug mode.

    Removes connection strings, email addresses and long tokens, then
    truncates the result.

    Args:
        error: The exception to sanitize

    Returns:
        Sanitized error message prefixed with the exception type
    """
    error_msg = str(error)
    error_msg = URL_PATTERN.sub("[URL]", error_msg)
    error_msg = EMAIL_PATTERN.sub("[EMAIL]", error_msg)
    error_msg = TOKEN_PATTERN.sub("[TOKEN]", error_msg)

    if len(error_msg) > MAX_LOGGED_MESSAGE_LENGTH:
        error_msg = error_msg[: MAX_LOGGED_MESSAGE_LENGTH - 3] + "..."

    return f"{type(error).__name__}: {error_msg}"


def log_error(logger: logging.Logger, message: str, error: BaseException | None = None) -> None:
    """Log an error with a detail level based on environment.

    In debug mode the raw exception and traceback are logged. Otherwise the
    exception message is sanitized and the traceback omitted.
    """
    if error is None:
        logger.error(message)
    elif get_settings().debug:
        logger.error("%s: %s", message, error, exc_info=error)
    else:
        logger.error("%s: %s", message, sanitize_exception_message(error))
