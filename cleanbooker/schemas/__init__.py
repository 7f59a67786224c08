"""Pydantic schemas for API validation."""

from cleanbooker.schemas.booking import (
    BookingCreate,
    BookingResponse,
    BookingStatusUpdate,
    BookingUpdate,
    ReviewCreate,
    ReviewResponse,
)
from cleanbooker.schemas.business import (
    AuthResponse,
    BusinessLogin,
    BusinessProfile,
    BusinessRegister,
    TokenResponse,
)
from cleanbooker.schemas.customer import (
    CustomerCreate,
    CustomerDetailResponse,
    CustomerResponse,
    CustomerUpdate,
)
from cleanbooker.schemas.employee import EmployeeCreate, EmployeeResponse
from cleanbooker.schemas.service import (
    AddOnCreate,
    ServiceCreate,
    ServiceDetailResponse,
    ServiceResponse,
    ServiceUpdate,
)

__all__ = [
    # Business
    "BusinessRegister",
    "BusinessLogin",
    "BusinessProfile",
    "AuthResponse",
    "TokenResponse",
    # Customer
    "CustomerCreate",
    "CustomerUpdate",
    "CustomerResponse",
    "CustomerDetailResponse",
    # Service
    "AddOnCreate",
    "ServiceCreate",
    "ServiceUpdate",
    "ServiceResponse",
    "ServiceDetailResponse",
    # Booking
    "BookingCreate",
    "BookingUpdate",
    "BookingStatusUpdate",
    "BookingResponse",
    "ReviewCreate",
    "ReviewResponse",
    # Employee
    "EmployeeCreate",
    "EmployeeResponse",
]
