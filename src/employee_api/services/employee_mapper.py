"""Translation between the API representation and the persisted employee row."""

from typing import Any

from employee_api.models.dto.employee import EmployeeCandidate, EmployeePatch, EmployeeResponse
from employee_api.models.orm.employee import EmployeeORM

# Columns replaced by a full update; id and timestamps are never written by callers
MUTABLE_COLUMNS = ("name", "email", "age", "active", "date_of_joining", "role", "salary")

# Columns a patch may touch
PATCHABLE_COLUMNS = ("name", "email", "age", "active")


def to_external(employee: EmployeeORM) -> EmployeeResponse:
    """Build an EmployeeResponse from an ORM row."""
    return EmployeeResponse(
        id=employee.id,
        name=employee.name,
        email=employee.email,
        age=employee.age,
        date_of_joining=employee.date_of_joining,
        active=employee.active,
        salary=employee.salary,
        role=employee.role,
    )


def to_internal(candidate: EmployeeCandidate) -> dict[str, Any]:
    """Build ORM column values from a validated candidate.

    The caller cannot choose the id; the store assigns it on insert.
    """
    return {column: getattr(candidate, column) for column in MUTABLE_COLUMNS}


def apply_candidate(employee: EmployeeORM, candidate: EmployeeCandidate) -> EmployeeORM:
    """Replace every mutable column with the candidate's values."""
    for column, value in to_internal(candidate).items():
        setattr(employee, column, value)
    return employee


def apply_patch(employee: EmployeeORM, patch: EmployeePatch) -> list[str]:
    """Overwrite only the patch fields that carry a value.

    Returns:
        Names of the columns that were written
    """
    written = []
    for column in PATCHABLE_COLUMNS:
        value = getattr(patch, column)
        if value is not None:
            setattr(employee, column, value)
            written.append(column)
    return written


def from_cache(payload: dict[str, Any]) -> EmployeeResponse:
    """Rebuild a response from a cached JSON payload."""
    return EmployeeResponse.model_validate(payload)
