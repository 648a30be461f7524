"""Employee DTOs.

The external representation uses camelCase names (``dateOfJoining``,
``isActive``); Python attributes stay snake_case and map onto the ORM
columns through :mod:`employee_api.services.employee_mapper`. Request
models accept only the external names.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ModelWrapValidatorHandler,
    PrivateAttr,
    ValidationError,
    field_serializer,
    model_validator,
)

from employee_api.constants.validation import MSG_TYPE_INVALID


class EmployeeInput(BaseModel):
    """Base for request bodies whose field type errors are reported with rule violations.

    A value that cannot be read as its field's type does not fail parsing.
    The field is left unset and the problem is kept in ``type_errors``
    (external name -> message), so the validator can report it together
    with every other violation. Unknown keys still fail parsing.
    """

    _type_errors: dict[str, str] = PrivateAttr(default_factory=dict)

    @model_validator(mode="wrap")
    @classmethod
    def collect_type_errors(cls, data: Any, handler: ModelWrapValidatorHandler[Self]) -> Self:
        if not isinstance(data, dict):
            return handler(data)
        try:
            return handler(data)
        except ValidationError as e:
            errors = e.errors()
            if any(error["type"] == "extra_forbidden" or not error["loc"] for error in errors):
                raise
            type_errors: dict[str, str] = {}
            for error in errors:
                key = str(error["loc"][0])
                type_errors.setdefault(key, MSG_TYPE_INVALID.get(key, error["msg"]))

        instance = handler({key: value for key, value in data.items() if key not in type_errors})
        instance._type_errors = type_errors
        return instance

    @property
    def type_errors(self) -> dict[str, str]:
        """Fields whose submitted value had the wrong type."""
        return dict(self._type_errors)


class EmployeeCandidate(EmployeeInput):
    """Inbound employee data for create and full update.

    Fields are only type-checked here. Range and format constraints are
    enforced by the employee validator so every violation is reported at once.
    Any ``id`` supplied by the caller is ignored.
    """

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(default=None, description="Full name, letters and spaces only")
    email: str | None = Field(default=None, description="Unique email address")
    age: int | None = Field(default=None, description="Age between 18 and 65")
    date_of_joining: date | None = Field(
        default=None, alias="dateOfJoining", description="Joining date, not in the future"
    )
    active: bool | None = Field(default=None, alias="isActive", description="Must be true")
    salary: Decimal | None = Field(default=None, description="Salary between 100.50 and 100000.99")
    role: str | None = Field(default=None, description="One of the configured roles")


class EmployeePatch(EmployeeInput):
    """Partial update for an employee.

    Only ``name``, ``email``, ``age`` and ``isActive`` can be patched.
    ``salary``, ``role`` and ``dateOfJoining`` are deliberately excluded:
    they change only through a full update, which re-validates the whole
    record. Unknown keys, including those three and the internal name
    ``active``, are rejected.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    email: str | None = None
    age: int | None = None
    active: bool | None = Field(default=None, alias="isActive")

    @property
    def is_empty(self) -> bool:
        """True when no field carries a value."""
        return all(getattr(self, field) is None for field in type(self).model_fields)


class EmployeeResponse(BaseModel):
    """Employee response DTO."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    email: str
    age: int
    date_of_joining: date = Field(alias="dateOfJoining")
    active: bool = Field(alias="isActive")
    salary: Decimal
    role: str

    @field_serializer("salary", when_used="json")
    def serialize_salary(self, salary: Decimal) -> float:
        """Emit salary as a JSON number."""
        return float(salary)
