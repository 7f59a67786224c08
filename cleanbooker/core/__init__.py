"""Core utilities and security modules."""

from cleanbooker.core.exceptions import (
    AppException,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InvalidBookingStatus,
    NotFoundError,
    RateLimitExceeded,
    ValidationError,
)
from cleanbooker.core.security import (
    create_access_token,
    create_refresh_token,
    get_password_hash,
    verify_password,
    verify_token,
)

__all__ = [
    "AppException",
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "InvalidBookingStatus",
    "NotFoundError",
    "RateLimitExceeded",
    "ValidationError",
    "create_access_token",
    "create_refresh_token",
    "get_password_hash",
    "verify_password",
    "verify_token",
]
