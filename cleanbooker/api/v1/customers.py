"""Customer endpoints."""

from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from cleanbooker.api.deps import CurrentBusiness, DbSession, RequestId, list_params
from cleanbooker.core.responses import ApiResponse, ok
from cleanbooker.domain.enums import CustomerStatus
from cleanbooker.domain.filters import CustomerFilter
from cleanbooker.models.customer import Customer
from cleanbooker.schemas.common import ListMeta
from cleanbooker.schemas.customer import (
    CustomerCreate,
    CustomerDetailResponse,
    CustomerListResponse,
    CustomerNoteCreate,
    CustomerNoteResponse,
    CustomerResponse,
    CustomerUpdate,
)
from cleanbooker.services.customer_service import customer_service

router = APIRouter()


def _with_counts(customer: Customer, counts: dict[UUID, tuple[int, int]]) -> CustomerResponse:
    bookings, reviews = counts.get(customer.id, (0, 0))
    return CustomerResponse.model_validate(customer).model_copy(
        update={"booking_count": bookings, "review_count": reviews}
    )


@router.get("/", response_model=ApiResponse[CustomerListResponse])
async def list_customers(
    business: CurrentBusiness,
    db: DbSession,
    request_id: RequestId,
    params: Annotated[dict[str, Any], Depends(list_params)],
    search: str | None = None,
    customer_status: Annotated[CustomerStatus | None, Query(alias="status")] = None,
) -> ApiResponse:
    """List the business's customers with booking and review counts."""
    criteria = CustomerFilter(
        business_id=business.id, search=search, status=customer_status, **params
    )
    customers, total = await customer_service.list_customers(db, criteria)
    counts = await customer_service.counts(db, [customer.id for customer in customers])

    payload = CustomerListResponse(
        customers=[_with_counts(customer, counts) for customer in customers],
        meta=ListMeta(**criteria.pagination.meta(total)),
    )
    return ok(payload, "Customers retrieved successfully", request_id)


@router.post(
    "/",
    response_model=ApiResponse[CustomerResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_customer(
    data: CustomerCreate, business: CurrentBusiness, db: DbSession, request_id: RequestId
) -> ApiResponse:
    customer = await customer_service.create_customer(db, business.id, data)
    return ok(CustomerResponse.model_validate(customer), "Customer created successfully", request_id)


@router.get("/{customer_id}", response_model=ApiResponse[CustomerDetailResponse])
async def get_customer(
    customer_id: UUID, business: CurrentBusiness, db: DbSession, request_id: RequestId
) -> ApiResponse:
    """Customer with booking history, reviews and notes."""
    customer = await customer_service.get_customer(db, business.id, customer_id, detail=True)
    counts = await customer_service.counts(db, [customer.id])
    bookings, reviews = counts[customer.id]

    payload = CustomerDetailResponse.model_validate(customer).model_copy(
        update={"booking_count": bookings, "review_count": reviews}
    )
    return ok(payload, "Customer retrieved successfully", request_id)


@router.put("/{customer_id}", response_model=ApiResponse[CustomerResponse])
async def update_customer(
    customer_id: UUID,
    data: CustomerUpdate,
    business: CurrentBusiness,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse:
    customer = await customer_service.update_customer(db, business.id, customer_id, data)
    counts = await customer_service.counts(db, [customer.id])
    return ok(_with_counts(customer, counts), "Customer updated successfully", request_id)


@router.delete("/{customer_id}", response_model=ApiResponse[None])
async def delete_customer(
    customer_id: UUID, business: CurrentBusiness, db: DbSession, request_id: RequestId
) -> ApiResponse:
    await customer_service.delete_customer(db, business.id, customer_id)
    return ok(None, "Customer deleted successfully", request_id)


@router.post(
    "/{customer_id}/notes",
    response_model=ApiResponse[CustomerNoteResponse],
    status_code=status.HTTP_201_CREATED,
)
async def add_customer_note(
    customer_id: UUID,
    data: CustomerNoteCreate,
    business: CurrentBusiness,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse:
    note = await customer_service.add_note(db, business.id, customer_id, data.content)
    return ok(CustomerNoteResponse.model_validate(note), "Note added successfully", request_id)
