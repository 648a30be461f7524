"""Centralized dependency injection factories for FastAPI."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from employee_api.database import get_db
from employee_api.services.cache_service import CacheService, get_cache_service
from employee_api.services.employee_service import EmployeeService
from employee_api.utils.validation import EmployeeValidator, get_employee_validator


def get_employee_service(
    db: AsyncSession = Depends(get_db),
    cache: CacheService = Depends(get_cache_service),
    validator: EmployeeValidator = Depends(get_employee_validator),
) -> EmployeeService:
    """Get EmployeeService instance."""
    return EmployeeService(db, cache=cache, validator=validator)
