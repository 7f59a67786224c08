"""Customer Pydantic schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from cleanbooker.domain.enums import ContactMethod, CustomerStatus, PropertyType
from cleanbooker.schemas.booking import BookingResponse, ReviewResponse
from cleanbooker.schemas.common import Address, ListMeta


class CustomerBase(BaseModel):
    """Base customer schema."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str = Field(..., min_length=10, max_length=30)
    property_type: PropertyType = PropertyType.HOUSE
    property_size: int | None = Field(None, gt=0)
    special_instructions: str | None = Field(None, max_length=2000)
    preferred_contact_method: ContactMethod = ContactMethod.EMAIL
    status: CustomerStatus = CustomerStatus.POTENTIAL


class CustomerCreate(CustomerBase):
    """Schema for creating a customer."""

    address: Address


class CustomerUpdate(BaseModel):
    """Schema for updating a customer. Omitted fields are left unchanged."""

    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    email: EmailStr | None = None
    phone: str | None = Field(None, min_length=10, max_length=30)
    address: Address | None = None
    property_type: PropertyType | None = None
    property_size: int | None = Field(None, gt=0)
    special_instructions: str | None = Field(None, max_length=2000)
    preferred_contact_method: ContactMethod | None = None
    status: CustomerStatus | None = None


class CustomerResponse(BaseModel):
    """Schema for customer response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    business_id: UUID
    first_name: str
    last_name: str
    email: str
    phone: str
    street: str
    city: str
    state: str
    zip_code: str
    property_type: str
    property_size: int | None
    special_instructions: str | None
    preferred_contact_method: str
    status: str
    created_at: datetime
    updated_at: datetime

    booking_count: int = 0
    review_count: int = 0


class CustomerNoteCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000)


class CustomerNoteResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    customer_id: UUID
    content: str
    created_at: datetime


class CustomerDetailResponse(CustomerResponse):
    """Customer with booking history (latest first), reviews and notes."""

    bookings: list[BookingResponse] = []
    reviews: list[ReviewResponse] = []
    notes: list[CustomerNoteResponse] = []


class CustomerListResponse(BaseModel):
    """Schema for paginated customer list."""

    customers: list[CustomerResponse]
    meta: ListMeta
