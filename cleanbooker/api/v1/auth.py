"""Authentication endpoints."""

from fastapi import APIRouter, Depends, status

from cleanbooker.api.deps import CurrentBusiness, DbSession, RequestId
from cleanbooker.core.middleware import login_limiter, register_limiter
from cleanbooker.core.responses import ApiResponse, ok
from cleanbooker.schemas.business import (
    AuthResponse,
    BusinessLogin,
    BusinessProfile,
    BusinessRegister,
    BusinessSummary,
    LogoutRequest,
    RefreshTokenRequest,
    TokenResponse,
)
from cleanbooker.services.auth_service import auth_service

router = APIRouter()


@router.post(
    "/register",
    response_model=ApiResponse[AuthResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(register_limiter)],
)
async def register(data: BusinessRegister, db: DbSession, request_id: RequestId) -> ApiResponse:
    """Register a new business account."""
    business, tokens = await auth_service.register(db, data)
    payload = AuthResponse(business=BusinessSummary.model_validate(business), **tokens)
    return ok(payload, "Business registered successfully", request_id)


@router.post(
    "/login",
    response_model=ApiResponse[AuthResponse],
    dependencies=[Depends(login_limiter)],
)
async def login(credentials: BusinessLogin, db: DbSession, request_id: RequestId) -> ApiResponse:
    """Login with email and password."""
    business, tokens = await auth_service.login(db, credentials.email, credentials.password)
    payload = AuthResponse(business=BusinessSummary.model_validate(business), **tokens)
    return ok(payload, "Login successful", request_id)


@router.post("/refresh", response_model=ApiResponse[TokenResponse])
async def refresh_token(
    data: RefreshTokenRequest, db: DbSession, request_id: RequestId
) -> ApiResponse:
    """Exchange a refresh token for a new token pair. The old token is revoked."""
    tokens = await auth_service.refresh(db, data.refresh_token)
    return ok(TokenResponse(**tokens), "Token refreshed successfully", request_id)


@router.post("/logout", response_model=ApiResponse[None])
async def logout(
    data: LogoutRequest,
    business: CurrentBusiness,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse:
    await auth_service.logout(db, business.id, data.refresh_token)
    return ok(None, "Logout successful", request_id)


@router.get("/profile", response_model=ApiResponse[BusinessProfile])
async def get_profile(business: CurrentBusiness, db: DbSession, request_id: RequestId) -> ApiResponse:
    """Get the authenticated business's profile."""
    profile = await auth_service.get_profile(db, business.id)
    return ok(BusinessProfile.model_validate(profile), "Profile retrieved successfully", request_id)
