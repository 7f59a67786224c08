"""Service catalog endpoints."""

from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Depends, status

from cleanbooker.api.deps import CurrentBusiness, DbSession, RequestId, list_params
from cleanbooker.core.responses import ApiResponse, ok
from cleanbooker.domain.enums import ServiceCategory
from cleanbooker.domain.filters import ServiceFilter
from cleanbooker.schemas.common import ListMeta
from cleanbooker.schemas.service import (
    ServiceBookingSummary,
    ServiceCreate,
    ServiceDetailResponse,
    ServiceListResponse,
    ServiceResponse,
    ServiceUpdate,
)
from cleanbooker.services.catalog_service import catalog_service

router = APIRouter()


@router.get("/", response_model=ApiResponse[ServiceListResponse])
async def list_services(
    business: CurrentBusiness,
    db: DbSession,
    request_id: RequestId,
    params: Annotated[dict[str, Any], Depends(list_params)],
    search: str | None = None,
    category: ServiceCategory | None = None,
    is_active: bool | None = None,
) -> ApiResponse:
    """List services with their add-ons and booking counts."""
    criteria = ServiceFilter(
        business_id=business.id,
        search=search,
        category=category,
        is_active=is_active,
        **params,
    )
    services, total = await catalog_service.list_services(db, criteria)
    counts = await catalog_service.booking_counts(db, [service.id for service in services])

    payload = ServiceListResponse(
        services=[
            ServiceResponse.model_validate(service).model_copy(
                update={"booking_count": counts.get(service.id, 0)}
            )
            for service in services
        ],
        meta=ListMeta(**criteria.pagination.meta(total)),
    )
    return ok(payload, "Services retrieved successfully", request_id)


@router.post(
    "/",
    response_model=ApiResponse[ServiceResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_service(
    data: ServiceCreate, business: CurrentBusiness, db: DbSession, request_id: RequestId
) -> ApiResponse:
    service = await catalog_service.create_service(db, business.id, data)
    return ok(ServiceResponse.model_validate(service), "Service created successfully", request_id)


@router.get("/{service_id}", response_model=ApiResponse[ServiceDetailResponse])
async def get_service(
    service_id: UUID, business: CurrentBusiness, db: DbSession, request_id: RequestId
) -> ApiResponse:
    """Service with its booking count and the 10 latest in-progress or completed jobs."""
    service = await catalog_service.get_service(db, business.id, service_id)
    counts = await catalog_service.booking_counts(db, [service.id])
    recent = await catalog_service.recent_bookings(db, service.id)
    payload = ServiceDetailResponse.model_validate(service).model_copy(
        update={
            "booking_count": counts[service.id],
            "recent_bookings": [ServiceBookingSummary.model_validate(b) for b in recent],
        }
    )
    return ok(payload, "Service retrieved successfully", request_id)


@router.put("/{service_id}", response_model=ApiResponse[ServiceResponse])
async def update_service(
    service_id: UUID,
    data: ServiceUpdate,
    business: CurrentBusiness,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse:
    """Update a service. A given ``add_ons`` list replaces the existing add-ons."""
    service = await catalog_service.update_service(db, business.id, service_id, data)
    return ok(ServiceResponse.model_validate(service), "Service updated successfully", request_id)


@router.delete("/{service_id}", response_model=ApiResponse[None])
async def delete_service(
    service_id: UUID, business: CurrentBusiness, db: DbSession, request_id: RequestId
) -> ApiResponse:
    """Delete a service. Refused with 409 while any booking references it."""
    await catalog_service.delete_service(db, business.id, service_id)
    return ok(None, "Service deleted successfully", request_id)


@router.patch("/{service_id}/toggle-status", response_model=ApiResponse[ServiceResponse])
async def toggle_service_status(
    service_id: UUID, business: CurrentBusiness, db: DbSession, request_id: RequestId
) -> ApiResponse:
    service = await catalog_service.toggle_status(db, business.id, service_id)
    state = "activated" if service.is_active else "deactivated"
    return ok(ServiceResponse.model_validate(service), f"Service {state} successfully", request_id)
