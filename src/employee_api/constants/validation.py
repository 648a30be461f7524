"""Centralized validation constants for the employee API.

This module provides a single source of truth for the field limits and
messages used by the employee validator.
"""

from decimal import Decimal
from typing import Final

# =============================================================================
# Name Constants
# =============================================================================

NAME_MIN_LENGTH: Final[int] = 2
NAME_MAX_LENGTH: Final[int] = 50
NAME_PATTERN: Final[str] = r"^[a-zA-Z\s]+$"

# =============================================================================
# Age Constants
# =============================================================================

MIN_AGE: Final[int] = 18
MAX_AGE: Final[int] = 65

# =============================================================================
# Salary Constants
# =============================================================================

MIN_SALARY: Final[Decimal] = Decimal("100.50")
MAX_SALARY: Final[Decimal] = Decimal("100000.99")
# Six integer digits so the upper bound itself fits
SALARY_INTEGER_DIGITS: Final[int] = 6
SALARY_FRACTION_DIGITS: Final[int] = 2

# =============================================================================
# Role Constants
# =============================================================================

DEFAULT_ALLOWED_ROLES: Final[tuple[str, ...]] = (
    "ADMIN",
    "MANAGER",
    "ENGINEER",
    "ANALYST",
    "HR",
    "SALES",
    "USER",
)

MAX_EMAIL_LENGTH: Final[int] = 255

# =============================================================================
# Identifier Constants
# =============================================================================

# Identity values are BIGINT and start at 1
MIN_EMPLOYEE_ID: Final[int] = 1
MAX_EMPLOYEE_ID: Final[int] = 2**63 - 1

# =============================================================================
# Field Messages
# =============================================================================

MSG_NAME_BLANK: Final[str] = "Name cannot be blank"
MSG_NAME_LENGTH: Final[str] = (
    f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"
)
MSG_NAME_PATTERN: Final[str] = "Name can only contain letters and spaces"

MSG_EMAIL_REQUIRED: Final[str] = "Email is required"
MSG_EMAIL_INVALID: Final[str] = "Email should be valid"

MSG_AGE_REQUIRED: Final[str] = "Age is required"
MSG_AGE_MIN: Final[str] = f"Age must be at least {MIN_AGE}"
MSG_AGE_MAX: Final[str] = f"Age must be at most {MAX_AGE}"

MSG_DATE_REQUIRED: Final[str] = "Date of joining is required"
MSG_DATE_FUTURE: Final[str] = "Date of joining must be in the past or today"

MSG_ACTIVE_REQUIRED: Final[str] = "Active status must be specified"
MSG_ACTIVE_FALSE: Final[str] = "Employee should be active"

MSG_SALARY_REQUIRED: Final[str] = "Salary cannot be null"
MSG_SALARY_POSITIVE: Final[str] = "Salary of Employee should be positive"
MSG_SALARY_DIGITS: Final[str] = "The salary can be in the form XXXXXX.XX"
MSG_SALARY_MAX: Final[str] = "Salary cannot exceed 100,000.99"
MSG_SALARY_MIN: Final[str] = "Salary must be at least 100.50"

MSG_ROLE_BLANK: Final[str] = "Role of the employee cannot be blank"
MSG_ROLE_INVALID: Final[str] = "Role of the employee must be one of: {roles}"

# Messages for values that cannot be read as the field's type, keyed by external name
MSG_TYPE_INVALID: Final[dict[str, str]] = {
    "name": "Name must be text",
    "email": "Email must be text",
    "age": "Age must be a whole number",
    "dateOfJoining": "Date of joining must be a valid date (yyyy-MM-dd)",
    "isActive": "Active status must be true or false",
    "salary": "Salary must be a number",
    "role": "Role of the employee must be text",
}
