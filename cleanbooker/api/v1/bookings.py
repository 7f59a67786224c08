"""Booking endpoints."""

from datetime import date, datetime
from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from cleanbooker.api.deps import CurrentBusiness, DbSession, RequestId, booking_list_params
from cleanbooker.core.responses import ApiResponse, ok
from cleanbooker.domain.booking_state import BookingStatus, CompletionData
from cleanbooker.domain.filters import BookingFilter
from cleanbooker.schemas.booking import (
    BookingCreate,
    BookingListResponse,
    BookingResponse,
    BookingStatusUpdate,
    BookingUpdate,
    ReviewCreate,
    ReviewResponse,
)
from cleanbooker.schemas.common import ListMeta
from cleanbooker.services.booking_service import booking_service
from cleanbooker.utils.timezone import as_utc

router = APIRouter()


@router.get("/", response_model=ApiResponse[BookingListResponse])
async def list_bookings(
    business: CurrentBusiness,
    db: DbSession,
    request_id: RequestId,
    params: Annotated[dict[str, Any], Depends(booking_list_params)],
    booking_status: Annotated[BookingStatus | None, Query(alias="status")] = None,
    customer_id: UUID | None = None,
    service_id: UUID | None = None,
    employee_id: UUID | None = None,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
) -> ApiResponse:
    """List bookings. ``date_to`` is exclusive."""
    criteria = BookingFilter(
        business_id=business.id,
        status=booking_status,
        customer_id=customer_id,
        service_id=service_id,
        employee_id=employee_id,
        date_from=as_utc(date_from) if date_from else None,
        date_to=as_utc(date_to) if date_to else None,
        **params,
    )
    bookings, total = await booking_service.list_bookings(db, criteria)

    payload = BookingListResponse(
        bookings=[BookingResponse.model_validate(booking) for booking in bookings],
        meta=ListMeta(**criteria.pagination.meta(total)),
    )
    return ok(payload, "Bookings retrieved successfully", request_id)


@router.get("/date/{day}", response_model=ApiResponse[list[BookingResponse]])
async def get_bookings_by_date(
    day: date, business: CurrentBusiness, db: DbSession, request_id: RequestId
) -> ApiResponse:
    """Bookings scheduled on one calendar day (UTC), earliest first."""
    bookings = await booking_service.bookings_on_date(db, business.id, day)
    return ok(
        [BookingResponse.model_validate(booking) for booking in bookings],
        "Bookings retrieved successfully",
        request_id,
    )


@router.post(
    "/",
    response_model=ApiResponse[BookingResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_booking(
    data: BookingCreate, business: CurrentBusiness, db: DbSession, request_id: RequestId
) -> ApiResponse:
    """Create a booking. Price and duration are computed from the service and add-ons."""
    booking = await booking_service.create_booking(db, business.id, data)
    return ok(BookingResponse.model_validate(booking), "Booking created successfully", request_id)


@router.get("/{booking_id}", response_model=ApiResponse[BookingResponse])
async def get_booking(
    booking_id: UUID, business: CurrentBusiness, db: DbSession, request_id: RequestId
) -> ApiResponse:
    booking = await booking_service.get_booking(db, business.id, booking_id)
    return ok(BookingResponse.model_validate(booking), "Booking retrieved successfully", request_id)


@router.put("/{booking_id}", response_model=ApiResponse[BookingResponse])
async def update_booking(
    booking_id: UUID,
    data: BookingUpdate,
    business: CurrentBusiness,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse:
    booking = await booking_service.update_booking(db, business.id, booking_id, data)
    return ok(BookingResponse.model_validate(booking), "Booking updated successfully", request_id)


@router.delete("/{booking_id}", response_model=ApiResponse[None])
async def delete_booking(
    booking_id: UUID, business: CurrentBusiness, db: DbSession, request_id: RequestId
) -> ApiResponse:
    """Delete a booking. In-progress and completed bookings cannot be deleted."""
    await booking_service.delete_booking(db, business.id, booking_id)
    return ok(None, "Booking deleted successfully", request_id)


@router.patch("/{booking_id}/status", response_model=ApiResponse[BookingResponse])
async def update_booking_status(
    booking_id: UUID,
    data: BookingStatusUpdate,
    business: CurrentBusiness,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse:
    completion = CompletionData(
        actual_duration=data.actual_duration,
        before_photos=data.before_photos,
        after_photos=data.after_photos,
    )
    booking = await booking_service.update_status(
        db, business.id, booking_id, data.status, completion
    )
    return ok(
        BookingResponse.model_validate(booking),
        "Booking status updated successfully",
        request_id,
    )


@router.post(
    "/{booking_id}/review",
    response_model=ApiResponse[ReviewResponse],
    status_code=status.HTTP_201_CREATED,
)
async def add_booking_review(
    booking_id: UUID,
    data: ReviewCreate,
    business: CurrentBusiness,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse:
    review = await booking_service.add_review(db, business.id, booking_id, data)
    return ok(ReviewResponse.model_validate(review), "Review added successfully", request_id)
