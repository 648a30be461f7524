"""Employees router - CRUD over employee records."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from employee_api.dependencies import get_employee_service
from employee_api.models.dto.employee import EmployeeCandidate, EmployeePatch, EmployeeResponse
from employee_api.services.employee_service import EmployeeService

router = APIRouter()

EmployeeServiceDep = Annotated[EmployeeService, Depends(get_employee_service)]


@router.get("", response_model=list[EmployeeResponse])
async def list_employees(service: EmployeeServiceDep) -> list[EmployeeResponse]:
    """List all employees."""
    return await service.list_employees()


@router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(employee_id: int, service: EmployeeServiceDep) -> EmployeeResponse:
    """Get an employee by ID."""
    return await service.get_employee(employee_id)


@router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(
    candidate: EmployeeCandidate,
    service: EmployeeServiceDep,
) -> EmployeeResponse:
    """Create a new employee. Any id in the body is ignored."""
    return await service.create_employee(candidate)


@router.put("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_id: int,
    candidate: EmployeeCandidate,
    service: EmployeeServiceDep,
) -> EmployeeResponse:
    """Replace all fields of an employee."""
    return await service.update_employee(employee_id, candidate)


@router.patch("/{employee_id}", response_model=EmployeeResponse)
async def patch_employee(
    employee_id: int,
    patch: EmployeePatch,
    service: EmployeeServiceDep,
) -> EmployeeResponse:
    """Update name, email, age or isActive of an employee.

    salary, role and dateOfJoining are not patchable; use PUT.
    """
    return await service.patch_employee(employee_id, patch)


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(employee_id: int, service: EmployeeServiceDep) -> Response:
    """Delete an employee."""
    await service.delete_employee(employee_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
