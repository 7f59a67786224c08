"""Service catalog management (services and their add-ons)."""

import logging
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from cleanbooker.core.exceptions import ConflictError
from cleanbooker.domain.booking_state import BookingStatus
from cleanbooker.domain.filters import ServiceFilter, build_list_queries
from cleanbooker.domain.pricing import to_money
from cleanbooker.models.booking import Booking, BookingAddOn
from cleanbooker.models.service import AddOn, Service
from cleanbooker.schemas.service import AddOnCreate, ServiceCreate, ServiceUpdate
from cleanbooker.services.guards import count_dependents, get_owned

logger = logging.getLogger(__name__)

RECENT_BOOKING_STATUSES = (BookingStatus.IN_PROGRESS.value, BookingStatus.COMPLETED.value)


def _build_add_ons(add_ons: list[AddOnCreate]) -> list[AddOn]:
    return [
        AddOn(name=add_on.name, price=to_money(add_on.price), duration=add_on.duration)
        for add_on in add_ons
    ]


class CatalogService:
    """CRUD over a business's services."""

    async def booking_counts(self, db: AsyncSession, service_ids: list[UUID]) -> dict[UUID, int]:
        if not service_ids:
            return {}
        result = await db.execute(
            select(Booking.service_id, func.count(Booking.id))
            .where(Booking.service_id.in_(service_ids))
            .group_by(Booking.service_id)
        )
        counts = dict(result.all())
        return {service_id: counts.get(service_id, 0) for service_id in service_ids}

    async def list_services(
        self, db: AsyncSession, criteria: ServiceFilter
    ) -> tuple[list[Service], int]:
        page_query, count_query = build_list_queries(criteria)
        total = (await db.execute(count_query)).scalar_one()
        services = list((await db.execute(page_query)).scalars().all())
        return services, total

    async def create_service(
        self, db: AsyncSession, business_id: UUID, data: ServiceCreate
    ) -> Service:
        service = Service(
            business_id=business_id,
            name=data.name,
            description=data.description,
            category=data.category.value,
            base_price=to_money(data.base_price),
            base_duration=data.base_duration,
            is_active=data.is_active,
            add_ons=_build_add_ons(data.add_ons),
        )
        db.add(service)
        await db.flush()
        await db.refresh(service)

        logger.info(f"Created service {service.id} for business {business_id}")
        return service

    async def get_service(self, db: AsyncSession, business_id: UUID, service_id: UUID) -> Service:
        return await get_owned(db, Service, service_id, business_id, "Service")

    async def recent_bookings(
        self, db: AsyncSession, service_id: UUID, limit: int = 10
    ) -> list[Booking]:
        """Latest in-progress or completed bookings of a service, with their customers."""
        result = await db.execute(
            select(Booking)
            .options(selectinload(Booking.customer))
            .where(
                Booking.service_id == service_id,
                Booking.status.in_(RECENT_BOOKING_STATUSES),
            )
            .order_by(Booking.scheduled_date.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def update_service(
        self, db: AsyncSession, business_id: UUID, service_id: UUID, data: ServiceUpdate
    ) -> Service:
        """Update a service; a given ``add_ons`` list replaces the current one.

        Existing bookings are not repriced: they keep their add-on snapshots,
        which are detached from the removed catalog rows.
        """
        service = await self.get_service(db, business_id, service_id)
        updates = data.model_dump(exclude_unset=True, exclude={"add_ons"})

        for field, value in updates.items():
            if value is None:
                continue
            if field == "base_price":
                value = to_money(value)
            setattr(service, field, getattr(value, "value", value))

        if data.add_ons is not None:
            old_ids = [add_on.id for add_on in service.add_ons]
            if old_ids:
                await db.execute(
                    update(BookingAddOn)
                    .where(BookingAddOn.add_on_id.in_(old_ids))
                    .values(add_on_id=None)
                )
            service.add_ons = _build_add_ons(data.add_ons)

        await db.flush()
        await db.refresh(service)
        return service

    async def delete_service(self, db: AsyncSession, business_id: UUID, service_id: UUID) -> None:
        """Delete a service that has never been booked."""
        service = await self.get_service(db, business_id, service_id)

        booking_count = await count_dependents(db, Booking.service_id, service.id)
        if booking_count > 0:
            raise ConflictError(
                "Cannot delete service with existing bookings. Consider deactivating instead."
            )

        await db.delete(service)
        await db.flush()
        logger.info(f"Deleted service {service_id} for business {business_id}")

    async def toggle_status(self, db: AsyncSession, business_id: UUID, service_id: UUID) -> Service:
        service = await self.get_service(db, business_id, service_id)
        service.is_active = not service.is_active
        await db.flush()
        await db.refresh(service)
        logger.info(
            f"Service {service_id} {'activated' if service.is_active else 'deactivated'}"
        )
        return service


catalog_service = CatalogService()
