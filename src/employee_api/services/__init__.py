"""Services package."""

from employee_api.services.cache_service import CacheService
from employee_api.services.employee_service import EmployeeService

__all__ = [
    "CacheService",
    "EmployeeService",
]
