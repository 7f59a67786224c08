"""Employee endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from cleanbooker.api.deps import CurrentBusiness, DbSession, RequestId
from cleanbooker.core.responses import ApiResponse, ok
from cleanbooker.schemas.employee import EmployeeCreate, EmployeeResponse
from cleanbooker.services.employee_service import employee_service

router = APIRouter()


@router.get("/", response_model=ApiResponse[list[EmployeeResponse]])
async def list_employees(
    business: CurrentBusiness,
    db: DbSession,
    request_id: RequestId,
    active_only: bool = False,
) -> ApiResponse:
    employees = await employee_service.list_employees(db, business.id, active_only)
    return ok(
        [EmployeeResponse.model_validate(employee) for employee in employees],
        "Employees retrieved successfully",
        request_id,
    )


@router.post(
    "/",
    response_model=ApiResponse[EmployeeResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_employee(
    data: EmployeeCreate, business: CurrentBusiness, db: DbSession, request_id: RequestId
) -> ApiResponse:
    employee = await employee_service.create_employee(db, business.id, data)
    return ok(EmployeeResponse.model_validate(employee), "Employee created successfully", request_id)


@router.get("/{employee_id}", response_model=ApiResponse[EmployeeResponse])
async def get_employee(
    employee_id: UUID, business: CurrentBusiness, db: DbSession, request_id: RequestId
) -> ApiResponse:
    employee = await employee_service.get_employee(db, business.id, employee_id)
    return ok(EmployeeResponse.model_validate(employee), "Employee retrieved successfully", request_id)


@router.patch("/{employee_id}/deactivate", response_model=ApiResponse[EmployeeResponse])
async def deactivate_employee(
    employee_id: UUID, business: CurrentBusiness, db: DbSession, request_id: RequestId
) -> ApiResponse:
    """Deactivate an employee. Existing booking assignments are kept."""
    employee = await employee_service.deactivate_employee(db, business.id, employee_id)
    return ok(EmployeeResponse.model_validate(employee), "Employee deactivated successfully", request_id)
