"""Employee management for a business."""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cleanbooker.models.business import Employee
from cleanbooker.schemas.employee import EmployeeCreate
from cleanbooker.services.guards import ensure_email_available, flush_unique, get_owned

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL = "Employee already exists with this email"


class EmployeeService:
    async def list_employees(
        self, db: AsyncSession, business_id: UUID, active_only: bool = False
    ) -> list[Employee]:
        query = select(Employee).where(Employee.business_id == business_id)
        if active_only:
            query = query.where(Employee.is_active.is_(True))
        result = await db.execute(query.order_by(Employee.last_name, Employee.first_name))
        return list(result.scalars().all())

    async def create_employee(
        self, db: AsyncSession, business_id: UUID, data: EmployeeCreate
    ) -> Employee:
        email = data.email.lower()
        await ensure_email_available(
            db,
            Employee,
            email,
            DUPLICATE_EMAIL,
            business_id=business_id,
        )

        employee = Employee(
            business_id=business_id,
            first_name=data.first_name,
            last_name=data.last_name,
            email=email,
            phone=data.phone,
        )
        db.add(employee)
        await flush_unique(db, DUPLICATE_EMAIL)
        await db.refresh(employee)

        logger.info(f"Added employee {employee.id} to business {business_id}")
        return employee

    async def get_employee(self, db: AsyncSession, business_id: UUID, employee_id: UUID) -> Employee:
        return await get_owned(db, Employee, employee_id, business_id, "Employee")

    async def deactivate_employee(
        self, db: AsyncSession, business_id: UUID, employee_id: UUID
    ) -> Employee:
        """Mark an employee inactive. Their past bookings keep the assignment."""
        employee = await self.get_employee(db, business_id, employee_id)
        employee.is_active = False
        await db.flush()
        await db.refresh(employee)
        logger.info(f"Deactivated employee {employee_id}")
        return employee


employee_service = EmployeeService()
