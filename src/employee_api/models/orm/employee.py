"""Employee ORM model."""

from datetime import date
from decimal import Decimal

from sqlalchemy import BigInteger, Boolean, Date, Identity, Index, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from employee_api.models.orm.base import Base, TimestampMixin

# Name of the unique index guarding email; matched when translating IntegrityError
EMPLOYEE_EMAIL_CONSTRAINT = "uq_employees_email"


class EmployeeORM(Base, TimestampMixin):
    """Employee database model."""

    __tablename__ = "employees"

    id: Mapped[int] = mapped_column(BigInteger, Identity(always=False), primary_key=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    date_of_joining: Mapped[date] = mapped_column(Date, nullable=False)
    # Exposed as "isActive" in the API
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    salary: Mapped[Decimal] = mapped_column(Numeric(8, 2), nullable=False)
    role: Mapped[str] = mapped_column(String(50), nullable=False)

    def __repr__(self) -> str:
        return f"<EmployeeORM id={self.id} role={self.role!r}>"


# Emails are unique regardless of case, matching EmployeeRepository.email_exists
Index(EMPLOYEE_EMAIL_CONSTRAINT, func.lower(EmployeeORM.email), unique=True)
