"""Data Transfer Objects package."""

from employee_api.models.dto.employee import EmployeeCandidate, EmployeePatch, EmployeeResponse

__all__ = [
    "EmployeeCandidate",
    "EmployeePatch",
    "EmployeeResponse",
]
