"""Field-level validation for employee records.

Every rule runs independently and all violations are collected, so a
single response can report every problem with a request.
"""

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from functools import lru_cache

from email_validator import EmailNotValidError, validate_email

from employee_api.config import get_settings
from employee_api.constants.validation import (
    MAX_AGE,
    MAX_EMAIL_LENGTH,
    MAX_SALARY,
    MIN_AGE,
    MIN_SALARY,
    MSG_ACTIVE_FALSE,
    MSG_ACTIVE_REQUIRED,
    MSG_AGE_MAX,
    MSG_AGE_MIN,
    MSG_AGE_REQUIRED,
    MSG_DATE_FUTURE,
    MSG_DATE_REQUIRED,
    MSG_EMAIL_INVALID,
    MSG_EMAIL_REQUIRED,
    MSG_NAME_BLANK,
    MSG_NAME_LENGTH,
    MSG_NAME_PATTERN,
    MSG_ROLE_BLANK,
    MSG_ROLE_INVALID,
    MSG_SALARY_DIGITS,
    MSG_SALARY_MAX,
    MSG_SALARY_MIN,
    MSG_SALARY_POSITIVE,
    MSG_SALARY_REQUIRED,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    NAME_PATTERN,
    SALARY_FRACTION_DIGITS,
    SALARY_INTEGER_DIGITS,
)
from employee_api.exceptions import ValidationFailedError
from employee_api.models.dto.employee import EmployeeCandidate, EmployeePatch

NAME_REGEX = re.compile(NAME_PATTERN)


@dataclass(frozen=True)
class FieldError:
    """A single field constraint violation, keyed by external field name."""

    field: str
    message: str


def errors_to_dict(errors: Iterable[FieldError]) -> dict[str, str]:
    """Collapse field errors to one message per field (first wins)."""
    result: dict[str, str] = {}
    for error in errors:
        result.setdefault(error.field, error.message)
    return result


class RoleRule:
    """Membership check against an externally configured set of roles."""

    def __init__(self, allowed_roles: Iterable[str]) -> None:
        self.allowed_roles = frozenset(allowed_roles)

    def is_valid(self, role: str) -> bool:
        return role in self.allowed_roles

    @property
    def message(self) -> str:
        return MSG_ROLE_INVALID.format(roles=", ".join(sorted(self.allowed_roles)))


def check_name(name: str | None) -> str | None:
    if name is None or not name.strip():
        return MSG_NAME_BLANK
    if not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
        return MSG_NAME_LENGTH
    if not NAME_REGEX.fullmatch(name):
        return MSG_NAME_PATTERN
    return None


def check_email(email: str | None) -> str | None:
    if email is None or not email.strip():
        return MSG_EMAIL_REQUIRED
    if len(email) > MAX_EMAIL_LENGTH:
        return MSG_EMAIL_INVALID
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return MSG_EMAIL_INVALID
    return None


def check_age(age: int | None) -> str | None:
    if age is None:
        return MSG_AGE_REQUIRED
    if age < MIN_AGE:
        return MSG_AGE_MIN
    if age > MAX_AGE:
        return MSG_AGE_MAX
    return None


def check_salary(salary: Decimal | None) -> str | None:
    """Check salary sign, digit layout and range.

    Digit counts ignore trailing zeros, so ``5000.500`` has two fraction digits.
    """
    if salary is None:
        return MSG_SALARY_REQUIRED
    if not salary.is_finite():
        return MSG_SALARY_DIGITS
    if salary <= 0:
        return MSG_SALARY_POSITIVE

    _, digits, exponent = salary.normalize().as_tuple()
    integer_digits = max(len(digits) + exponent, 0)
    fraction_digits = max(-exponent, 0)
    if integer_digits > SALARY_INTEGER_DIGITS or fraction_digits > SALARY_FRACTION_DIGITS:
        return MSG_SALARY_DIGITS

    if salary > MAX_SALARY:
        return MSG_SALARY_MAX
    if salary < MIN_SALARY:
        return MSG_SALARY_MIN
    return None


class EmployeeValidator:
    """Validates inbound employee data without touching store or cache."""

    def __init__(self, role_rule: RoleRule, today: Callable[[], date] = date.today) -> None:
        self.role_rule = role_rule
        self._today = today

    def check_date_of_joining(self, date_of_joining: date | None) -> str | None:
        if date_of_joining is None:
            return MSG_DATE_REQUIRED
        if date_of_joining > self._today():
            return MSG_DATE_FUTURE
        return None

    def check_role(self, role: str | None) -> str | None:
        if role is None or not role.strip():
            return MSG_ROLE_BLANK
        if not self.role_rule.is_valid(role):
            return self.role_rule.message
        return None

    @staticmethod
    def check_active(active: bool | None) -> str | None:
        if active is None:
            return MSG_ACTIVE_REQUIRED
        if not active:
            return MSG_ACTIVE_FALSE
        return None

    def validate(self, candidate: EmployeeCandidate) -> list[FieldError]:
        """Validate a create/update candidate.

        A field whose value had the wrong type reports that instead of its
        rule violation.

        Args:
            candidate: Inbound employee data

        Returns:
            Every violation found (empty when valid)
        """
        type_errors = candidate.type_errors
        checks = (
            ("name", check_name(candidate.name)),
            ("email", check_email(candidate.email)),
            ("age", check_age(candidate.age)),
            ("dateOfJoining", self.check_date_of_joining(candidate.date_of_joining)),
            ("isActive", self.check_active(candidate.active)),
            ("salary", check_salary(candidate.salary)),
            ("role", self.check_role(candidate.role)),
        )
        return [
            FieldError(field, type_errors.get(field, message))
            for field, message in checks
            if message or field in type_errors
        ]

    def validate_patch(self, patch: EmployeePatch) -> list[FieldError]:
        """Validate only the fields present in a patch.

        ``isActive`` accepts either value here; deactivation goes through patch.
        """
        checks = list(patch.type_errors.items())
        if patch.name is not None:
            checks.append(("name", check_name(patch.name)))
        if patch.email is not None:
            checks.append(("email", check_email(patch.email)))
        if patch.age is not None:
            checks.append(("age", check_age(patch.age)))
        return [FieldError(field, message) for field, message in checks if message]

    def validate_or_raise(self, candidate: EmployeeCandidate) -> None:
        """Raise ValidationFailedError carrying every violation."""
        errors = self.validate(candidate)
        if errors:
            raise ValidationFailedError(errors_to_dict(errors))

    def validate_patch_or_raise(self, patch: EmployeePatch) -> None:
        """Raise ValidationFailedError carrying every patch violation."""
        errors = self.validate_patch(patch)
        if errors:
            raise ValidationFailedError(errors_to_dict(errors))


@lru_cache
def get_employee_validator() -> EmployeeValidator:
    """Get the validator configured with the allowed roles from settings."""
    return EmployeeValidator(RoleRule(get_settings().allowed_roles_set))
