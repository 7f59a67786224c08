"""Business and authentication Pydantic schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from cleanbooker.schemas.common import Address


class BusinessAddress(Address):
    country: str = Field(default="US", min_length=2, max_length=2)


class BusinessRegister(BaseModel):
    """Schema for business registration."""

    business_name: str = Field(..., min_length=2, max_length=200)
    owner_name: str = Field(..., min_length=2, max_length=200)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    phone: str = Field(..., min_length=10, max_length=30)
    address: BusinessAddress
    service_area: list[str] = Field(default_factory=list)


class BusinessLogin(BaseModel):
    """Schema for business login."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class RefreshTokenRequest(BaseModel):
    """Schema for token refresh request."""

    refresh_token: str = Field(..., min_length=1)


class LogoutRequest(BaseModel):
    refresh_token: str | None = None


class BusinessSummary(BaseModel):
    """Minimal business identity returned with tokens."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    business_name: str
    email: str
    is_verified: bool


class AuthResponse(BaseModel):
    """Tokens plus the business they were issued for."""

    business: BusinessSummary
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class TokenResponse(BaseModel):
    """Schema for authentication token response."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class BusinessProfile(BaseModel):
    """Full business profile."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    business_name: str
    owner_name: str
    email: str
    phone: str
    street: str
    city: str
    state: str
    zip_code: str
    country: str
    service_area: list[str]
    logo_url: str | None
    website: str | None
    description: str | None
    business_hours: dict | None
    is_verified: bool
    created_at: datetime
