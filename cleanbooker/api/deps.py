"""API dependencies for authentication, sessions and list parameters."""

from collections.abc import AsyncIterator
from typing import Annotated, Any
from uuid import UUID

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from cleanbooker.config import settings
from cleanbooker.core.exceptions import AuthenticationError
from cleanbooker.core.security import verify_token
from cleanbooker.database import Database
from cleanbooker.domain.filters import Pagination, Sort
from cleanbooker.models.business import Business
from cleanbooker.services.auth_service import auth_service

# Security scheme
security = HTTPBearer(auto_error=False)


def get_database(request: Request) -> Database:
    """The Database handle attached to the application at startup."""
    return request.app.state.db


async def get_db(
    database: Annotated[Database, Depends(get_database)],
) -> AsyncIterator[AsyncSession]:
    """One transactional session per request."""
    async with database.session() as session:
        yield session


def get_request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


async def get_current_business(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Business:
    """Resolve the business behind the bearer access token."""
    if credentials is None:
        raise AuthenticationError("Access token required")

    payload = verify_token(credentials.credentials, token_type="access")
    try:
        business_id = UUID(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise AuthenticationError("Invalid token payload")

    return await auth_service.get_active_business(db, business_id)


DbSession = Annotated[AsyncSession, Depends(get_db)]
CurrentBusiness = Annotated[Business, Depends(get_current_business)]
RequestId = Annotated[str | None, Depends(get_request_id)]


class ListParams:
    """Pagination and sort query parameters, as filter keyword arguments."""

    def __init__(self, default_sort: str = "created_at"):
        self.default_sort = default_sort

    def __call__(
        self,
        page: Annotated[int, Query(description="1-based page number")] = 1,
        limit: Annotated[int | None, Query(description="Page size")] = None,
        sort_by: Annotated[str | None, Query()] = None,
        sort_order: Annotated[str, Query()] = "desc",
    ) -> dict[str, Any]:
        if limit is None:
            limit = settings.default_page_size
        return {
            # Oversized pages are capped, not rejected
            "pagination": Pagination(page=page, limit=min(limit, settings.max_page_size)),
            "sort": Sort(field=sort_by or self.default_sort, order=sort_order.lower()),
        }


list_params = ListParams()
booking_list_params = ListParams(default_sort="scheduled_date")
