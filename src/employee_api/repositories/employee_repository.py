"""Employee repository."""

from sqlalchemy import func, select

from employee_api.models.orm.employee import EmployeeORM
from employee_api.repositories.base import BaseRepository


class EmployeeRepository(BaseRepository[EmployeeORM]):
    """Repository for employee operations."""

    model = EmployeeORM

    async def email_exists(self, email: str, exclude_id: int | None = None) -> bool:
        """Check if an email already exists.

        Comparison is case-insensitive.

        Args:
            email: Email to check
            exclude_id: Optionally exclude an employee ID from the check

        Returns:
            True if email exists, False otherwise
        """
        query = select(func.count()).select_from(EmployeeORM).where(
            func.lower(EmployeeORM.email) == email.lower()
        )
        if exclude_id is not None:
            query = query.where(EmployeeORM.id != exclude_id)
        result = await self.session.execute(query)
        return result.scalar_one() > 0
