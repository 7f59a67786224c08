"""Booking-related Pydantic schemas."""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from cleanbooker.domain.booking_state import BookingStatus
from cleanbooker.domain.enums import PaymentMethod, PaymentStatus, RecurrenceType
from cleanbooker.schemas.common import ListMeta


class BookingCreate(BaseModel):
    """Schema for creating a booking."""

    customer_id: UUID
    service_id: UUID
    add_on_ids: list[UUID] = Field(default_factory=list)
    scheduled_date: datetime
    employee_id: UUID | None = None
    payment_method: PaymentMethod | None = None
    recurrence_type: RecurrenceType = RecurrenceType.NONE
    recurrence_end_date: date | None = None
    parent_booking_id: UUID | None = None
    special_instructions: str | None = Field(None, max_length=2000)
    internal_notes: str | None = Field(None, max_length=5000)

    @model_validator(mode="after")
    def validate_recurrence(self) -> "BookingCreate":
        if self.recurrence_type == RecurrenceType.NONE and self.recurrence_end_date:
            raise ValueError("recurrence_end_date requires a recurrence_type")
        if self.recurrence_end_date and self.recurrence_end_date < self.scheduled_date.date():
            raise ValueError("recurrence_end_date must not be before scheduled_date")
        return self


class BookingUpdate(BaseModel):
    """Schema for updating a booking. Omitted fields are left unchanged.

    Changing ``service_id`` or ``add_on_ids`` recomputes price and duration.
    """

    customer_id: UUID | None = None
    service_id: UUID | None = None
    add_on_ids: list[UUID] | None = None
    scheduled_date: datetime | None = None
    employee_id: UUID | None = None
    payment_method: PaymentMethod | None = None
    payment_status: PaymentStatus | None = None
    recurrence_type: RecurrenceType | None = None
    recurrence_end_date: date | None = None
    parent_booking_id: UUID | None = None
    special_instructions: str | None = Field(None, max_length=2000)
    internal_notes: str | None = Field(None, max_length=5000)


class BookingStatusUpdate(BaseModel):
    """Schema for a status change, with optional completion details."""

    status: BookingStatus
    actual_duration: int | None = Field(None, gt=0, le=24 * 60)
    before_photos: list[str] = Field(default_factory=list, max_length=50)
    after_photos: list[str] = Field(default_factory=list, max_length=50)


class BookingAddOnResponse(BaseModel):
    """Add-on as priced on the booking."""

    model_config = ConfigDict(from_attributes=True)

    add_on_id: UUID | None
    name: str
    price: Decimal
    duration: int


class ReviewCreate(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    comment: str | None = Field(None, max_length=2000)


class ReviewResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    booking_id: UUID
    customer_id: UUID
    rating: int
    comment: str | None
    created_at: datetime


class BookingResponse(BaseModel):
    """Schema for booking response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    business_id: UUID
    customer_id: UUID
    service_id: UUID
    employee_id: UUID | None

    scheduled_date: datetime
    status: str

    # Pricing
    total_price: Decimal
    estimated_duration: int
    actual_duration: int | None
    add_ons: list[BookingAddOnResponse]

    # Payment
    payment_method: str | None
    payment_status: str

    # Recurrence
    recurrence_type: str
    recurrence_end_date: date | None
    parent_booking_id: UUID | None

    before_photos: list[str]
    after_photos: list[str]
    special_instructions: str | None
    internal_notes: str | None

    review: ReviewResponse | None = None

    completed_at: datetime | None
    created_at: datetime
    updated_at: datetime

    @field_validator("before_photos", "after_photos", mode="before")
    @classmethod
    def default_photos(cls, v: list[str] | None) -> list[str]:
        return v or []


class BookingListResponse(BaseModel):
    """Schema for paginated booking list."""

    bookings: list[BookingResponse]
    meta: ListMeta
