"""Service catalog Pydantic schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from cleanbooker.domain.enums import ServiceCategory
from cleanbooker.schemas.booking import ReviewResponse
from cleanbooker.schemas.common import ListMeta


class AddOnCreate(BaseModel):
    """Schema for an add-on sent with a service."""

    name: str = Field(..., min_length=1, max_length=200)
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    duration: int = Field(..., gt=0, le=24 * 60)


class AddOnResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    price: Decimal
    duration: int


class ServiceBase(BaseModel):
    """Base service schema."""

    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(None, max_length=5000)
    category: ServiceCategory
    base_price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    base_duration: int = Field(..., gt=0, le=24 * 60)
    is_active: bool = True


class ServiceCreate(ServiceBase):
    """Schema for creating a service."""

    add_ons: list[AddOnCreate] = Field(default_factory=list)


class ServiceUpdate(BaseModel):
    """Schema for updating a service.

    When ``add_ons`` is present it replaces the service's whole add-on list.
    """

    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=5000)
    category: ServiceCategory | None = None
    base_price: Decimal | None = Field(None, gt=0, max_digits=10, decimal_places=2)
    base_duration: int | None = Field(None, gt=0, le=24 * 60)
    is_active: bool | None = None
    add_ons: list[AddOnCreate] | None = None


class ServiceResponse(BaseModel):
    """Schema for service response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    business_id: UUID
    name: str
    description: str | None
    category: str
    base_price: Decimal
    base_duration: int
    is_active: bool
    add_ons: list[AddOnResponse]
    created_at: datetime
    updated_at: datetime

    booking_count: int = 0


class BookingCustomerName(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    first_name: str
    last_name: str


class ServiceBookingSummary(BaseModel):
    """A recent job on the service, with who it was for and how it was rated."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    scheduled_date: datetime
    status: str
    total_price: Decimal
    customer: BookingCustomerName
    review: ReviewResponse | None = None


class ServiceDetailResponse(ServiceResponse):
    """Service with its latest in-progress and completed bookings."""

    recent_bookings: list[ServiceBookingSummary] = []


class ServiceListResponse(BaseModel):
    """Schema for paginated service list."""

    services: list[ServiceResponse]
    meta: ListMeta
