"""Employee service: validation, uniqueness and cache coherence for employee records."""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from functools import wraps
from typing import ParamSpec, TypeVar

import redis.asyncio as redis
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from employee_api.constants.validation import MAX_EMPLOYEE_ID, MIN_EMPLOYEE_ID
from employee_api.database import transaction
from employee_api.exceptions import (
    EmailAlreadyExistsError,
    EmployeeAPIError,
    EmployeeNotFoundError,
    InvalidInputError,
    UnexpectedError,
)
from employee_api.models.dto.employee import EmployeeCandidate, EmployeePatch, EmployeeResponse
from employee_api.models.orm.employee import EMPLOYEE_EMAIL_CONSTRAINT, EmployeeORM
from employee_api.repositories.employee_repository import EmployeeRepository
from employee_api.services import employee_mapper
from employee_api.services.cache_service import CacheService
from employee_api.utils.secure_logging import log_error
from employee_api.utils.validation import EmployeeValidator, get_employee_validator

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def translate_collaborator_errors(
    func: Callable[P, Awaitable[R]],
) -> Callable[P, Awaitable[R]]:
    """Map database and cache failures to UnexpectedError.

    Domain errors pass through untouched; raw collaborator errors never
    reach the caller.
    """

    @wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return await func(*args, **kwargs)
        except EmployeeAPIError:
            raise
        except (SQLAlchemyError, redis.RedisError) as e:
            log_error(logger, f"Employee operation {func.__name__} failed", e)
            raise UnexpectedError() from e

    return wrapper


def is_email_conflict(error: IntegrityError) -> bool:
    """Check whether an IntegrityError comes from the unique email index."""
    message = str(error.orig if error.orig is not None else error).lower()
    return EMPLOYEE_EMAIL_CONSTRAINT in message or ("unique" in message and "email" in message)


class EmployeeService:
    """Service orchestrating the employee record lifecycle.

    Holds no state between calls. Every write runs in its own transaction
    and the cache entry for the record is rewritten only after the commit
    succeeds, so the next read is a hit with fresh data.
    """

    def __init__(
        self,
        session: AsyncSession,
        cache: CacheService,
        validator: EmployeeValidator | None = None,
        repository: EmployeeRepository | None = None,
    ) -> None:
        """Initialize service with its collaborators."""
        self.session = session
        self.cache = cache
        self.validator = validator or get_employee_validator()
        self.employee_repo = repository or EmployeeRepository(session)

    # ------------------------------------------------------------------ helpers

    @asynccontextmanager
    async def _write(self, email: str | None = None) -> AsyncIterator[None]:
        """Run a write in a transaction, surfacing email index conflicts as 409."""
        try:
            async with transaction(self.session):
                yield
        except IntegrityError as e:
            if is_email_conflict(e):
                logger.info("Unique email constraint rejected a concurrent write")
                raise EmailAlreadyExistsError(email) from e
            raise

    async def _get_or_raise(self, employee_id: int | None) -> EmployeeORM:
        if employee_id is None:
            raise InvalidInputError("Employee ID cannot be null")
        # Outside the identity range no row can exist, and the driver rejects the parameter
        if not MIN_EMPLOYEE_ID <= employee_id <= MAX_EMPLOYEE_ID:
            raise EmployeeNotFoundError(employee_id)
        employee = await self.employee_repo.get_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        return employee

    async def _ensure_email_available(self, email: str, current: EmployeeORM | None = None) -> None:
        """Raise if another employee already uses this email.

        The record's own current email never counts as a duplicate.
        """
        if current is not None and email == current.email:
            return
        exclude_id = current.id if current is not None else None
        if await self.employee_repo.email_exists(email, exclude_id=exclude_id):
            raise EmailAlreadyExistsError(email)

    async def _refresh_cache(self, employee: EmployeeResponse) -> None:
        await self.cache.set_employee(employee.id, employee)

    # --------------------------------------------------------------- operations

    @translate_collaborator_errors
    async def list_employees(self) -> list[EmployeeResponse]:
        """List all employees in store order.

        Returns:
            List of EmployeeResponse
        """
        employees = await self.employee_repo.get_all()
        return [employee_mapper.to_external(e) for e in employees]

    @translate_collaborator_errors
    async def get_employee(self, employee_id: int | None) -> EmployeeResponse:
        """Get an employee by ID, reading through the cache.

        Args:
            employee_id: Employee ID

        Returns:
            EmployeeResponse

        Raises:
            InvalidInputError: If employee_id is None
            EmployeeNotFoundError: If no employee has this ID
        """
        if employee_id is None:
            raise InvalidInputError("Employee ID cannot be null")

        cached = await self.cache.get_employee(employee_id)
        if cached is not None:
            logger.debug("Cache hit for employee %s", employee_id)
            return employee_mapper.from_cache(cached)

        logger.info("Fetching employee with ID: %s", employee_id)
        employee = await self._get_or_raise(employee_id)
        response = employee_mapper.to_external(employee)
        await self._refresh_cache(response)
        return response

    @translate_collaborator_errors
    async def create_employee(self, candidate: EmployeeCandidate) -> EmployeeResponse:
        """Create an employee.

        Args:
            candidate: Employee data; any supplied id is ignored

        Returns:
            Created EmployeeResponse with its assigned ID

        Raises:
            ValidationFailedError: If any field is invalid
            EmailAlreadyExistsError: If the email is already in use
        """
        logger.info("Creating new employee")
        self.validator.validate_or_raise(candidate)

        async with self._write(candidate.email):
            await self._ensure_email_available(candidate.email)
            employee = await self.employee_repo.create(**employee_mapper.to_internal(candidate))
            response = employee_mapper.to_external(employee)

        await self._refresh_cache(response)
        logger.info("Successfully created new employee with ID: %s", response.id)
        return response

    @translate_collaborator_errors
    async def update_employee(
        self, employee_id: int | None, candidate: EmployeeCandidate
    ) -> EmployeeResponse:
        """Replace every mutable field of an employee.

        Args:
            employee_id: Employee ID
            candidate: Complete employee data

        Returns:
            Updated EmployeeResponse

        Raises:
            EmployeeNotFoundError: If no employee has this ID
            ValidationFailedError: If any field is invalid
            EmailAlreadyExistsError: If the new email belongs to another employee
        """
        logger.info("Start updating employee with ID: %s", employee_id)

        async with self._write(candidate.email):
            employee = await self._get_or_raise(employee_id)
            self.validator.validate_or_raise(candidate)
            await self._ensure_email_available(candidate.email, current=employee)

            employee_mapper.apply_candidate(employee, candidate)
            employee = await self.employee_repo.save(employee)
            response = employee_mapper.to_external(employee)

        await self._refresh_cache(response)
        logger.info("Completed updating employee with ID: %s", employee_id)
        return response

    @translate_collaborator_errors
    async def patch_employee(self, employee_id: int | None, patch: EmployeePatch) -> EmployeeResponse:
        """Overwrite only the fields present in a patch.

        An empty patch is accepted: the unchanged record is written back,
        re-cached and returned.

        Args:
            employee_id: Employee ID
            patch: Fields to overwrite (name, email, age, isActive)

        Returns:
            Patched EmployeeResponse

        Raises:
            EmployeeNotFoundError: If no employee has this ID
            ValidationFailedError: If a patched value is invalid
            EmailAlreadyExistsError: If the new email belongs to another employee
        """
        async with self._write(patch.email):
            employee = await self._get_or_raise(employee_id)
            self.validator.validate_patch_or_raise(patch)
            if patch.email is not None:
                await self._ensure_email_available(patch.email, current=employee)

            if patch.is_empty:
                logger.info("Patch for employee %s carries no fields", employee_id)
            written = employee_mapper.apply_patch(employee, patch)
            logger.debug("Patching employee %s fields: %s", employee_id, ", ".join(written))

            employee = await self.employee_repo.save(employee)
            response = employee_mapper.to_external(employee)

        await self._refresh_cache(response)
        logger.info("Patched employee with ID: %s", employee_id)
        return response

    @translate_collaborator_errors
    async def delete_employee(self, employee_id: int | None) -> None:
        """Delete an employee and evict it from the cache.

        Args:
            employee_id: Employee ID

        Raises:
            EmployeeNotFoundError: If no employee has this ID
        """
        async with self._write():
            employee = await self._get_or_raise(employee_id)
            if not await self.employee_repo.delete(employee.id):
                raise EmployeeNotFoundError(employee_id)

        await self.cache.evict_employee(employee_id)
        logger.info("Deleted employee with ID: %s", employee_id)
