"""Booking lifecycle: pricing on create/update, status changes, deletion.

All lookups are scoped to the calling business through the guards module;
prices always come from :func:`compute_totals` against the service's current
add-ons, never from values cached on the booking.
"""

import logging
from datetime import date
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from cleanbooker.config import settings
from cleanbooker.core.exceptions import ConflictError, InvalidBookingStatus, ValidationError
from cleanbooker.domain.booking_state import (
    BookingStatus,
    CompletionData,
    apply_status,
    assert_can_delete,
    is_terminal,
)
from cleanbooker.domain.filters import BookingFilter, build_list_queries
from cleanbooker.domain.pricing import PricingResult, compute_totals
from cleanbooker.models.booking import Booking, BookingAddOn
from cleanbooker.models.business import Employee
from cleanbooker.models.customer import Customer
from cleanbooker.models.review import Review
from cleanbooker.models.service import Service
from cleanbooker.schemas.booking import BookingCreate, BookingUpdate, ReviewCreate
from cleanbooker.services.guards import count_dependents, get_owned
from cleanbooker.utils.timezone import as_utc, day_bounds

logger = logging.getLogger(__name__)


def _snapshot_rows(pricing: PricingResult) -> list[BookingAddOn]:
    return [
        BookingAddOn(
            add_on_id=snapshot.add_on_id,
            name=snapshot.name,
            price=snapshot.price,
            duration=snapshot.duration,
        )
        for snapshot in pricing.add_ons
    ]


class BookingService:
    """Booking operations for one business at a time."""

    def price(self, service: Service, add_on_ids: list[UUID]) -> PricingResult:
        """Price a booking and apply the unknown add-on policy."""
        pricing = compute_totals(service, add_on_ids)
        if pricing.skipped_add_on_ids:
            unknown = [str(add_on_id) for add_on_id in pricing.skipped_add_on_ids]
            if settings.reject_unknown_add_ons:
                raise ValidationError(
                    "Some add-ons do not belong to the selected service",
                    errors=[f"add_on_ids: unknown add-on {add_on_id}" for add_on_id in unknown],
                )
            logger.warning(
                f"Skipped add-ons {', '.join(unknown)} not offered by service {service.id}"
            )
        return pricing

    async def create_booking(
        self, db: AsyncSession, business_id: UUID, data: BookingCreate
    ) -> Booking:
        """Create a booking for a customer and service of the same business."""
        customer = await get_owned(db, Customer, data.customer_id, business_id, "Customer")
        service = await get_owned(db, Service, data.service_id, business_id, "Service")
        if data.employee_id is not None:
            await get_owned(db, Employee, data.employee_id, business_id, "Employee")
        if data.parent_booking_id is not None:
            await get_owned(db, Booking, data.parent_booking_id, business_id, "Parent booking")

        pricing = self.price(service, data.add_on_ids)

        booking = Booking(
            business_id=business_id,
            customer_id=customer.id,
            service_id=service.id,
            employee_id=data.employee_id,
            scheduled_date=as_utc(data.scheduled_date),
            status=BookingStatus.PENDING.value,
            total_price=pricing.total_price,
            estimated_duration=pricing.total_duration,
            payment_method=data.payment_method.value if data.payment_method else None,
            recurrence_type=data.recurrence_type.value,
            recurrence_end_date=data.recurrence_end_date,
            parent_booking_id=data.parent_booking_id,
            special_instructions=data.special_instructions,
            internal_notes=data.internal_notes,
            before_photos=[],
            after_photos=[],
            add_ons=_snapshot_rows(pricing),
        )
        db.add(booking)
        await db.flush()
        await db.refresh(booking)

        logger.info(
            f"Created booking {booking.id} for business {business_id}: "
            f"total {booking.total_price}, {booking.estimated_duration} min"
        )
        return booking

    async def get_booking(self, db: AsyncSession, business_id: UUID, booking_id: UUID) -> Booking:
        return await get_owned(db, Booking, booking_id, business_id, "Booking")

    async def list_bookings(
        self, db: AsyncSession, criteria: BookingFilter
    ) -> tuple[list[Booking], int]:
        page_query, count_query = build_list_queries(criteria)
        total = (await db.execute(count_query)).scalar_one()
        bookings = list((await db.execute(page_query)).scalars().all())
        return bookings, total

    async def bookings_on_date(
        self, db: AsyncSession, business_id: UUID, day: date
    ) -> list[Booking]:
        """All bookings scheduled on ``day`` (UTC), earliest first."""
        start, end = day_bounds(day)
        result = await db.execute(
            select(Booking)
            .where(
                Booking.business_id == business_id,
                Booking.scheduled_date >= start,
                Booking.scheduled_date < end,
            )
            .order_by(Booking.scheduled_date.asc())
        )
        return list(result.scalars().all())

    async def update_booking(
        self, db: AsyncSession, business_id: UUID, booking_id: UUID, patch: BookingUpdate
    ) -> Booking:
        """Apply ``patch``; reprice when the service or add-on selection changes.

        Raises:
            NotFoundError: booking, or any referenced entity, is not the caller's
            InvalidBookingStatus: repricing a booking that is already closed
        """
        booking = await self.get_booking(db, business_id, booking_id)
        updates = patch.model_dump(exclude_unset=True)

        if updates.get("customer_id") is not None:
            await get_owned(db, Customer, updates["customer_id"], business_id, "Customer")
        if updates.get("employee_id") is not None:
            await get_owned(db, Employee, updates["employee_id"], business_id, "Employee")
        if updates.get("parent_booking_id") is not None:
            if updates["parent_booking_id"] == booking.id:
                raise ValidationError("A booking cannot be its own parent")
            await get_owned(db, Booking, updates["parent_booking_id"], business_id, "Parent booking")

        service_id = updates.pop("service_id", None)
        add_on_ids = updates.pop("add_on_ids", None)
        if service_id is not None or add_on_ids is not None:
            if is_terminal(booking.status):
                raise InvalidBookingStatus(
                    f"Cannot change the service or add-ons of a {booking.status} booking"
                )
            service = await get_owned(
                db, Service, service_id or booking.service_id, business_id, "Service"
            )
            if add_on_ids is None:
                # Add-ons belong to one service, so a new service starts with none
                if service.id != booking.service_id:
                    add_on_ids = []
                else:
                    add_on_ids = [row.add_on_id for row in booking.add_ons if row.add_on_id]

            pricing = self.price(service, add_on_ids)
            booking.service_id = service.id
            booking.total_price = pricing.total_price
            booking.estimated_duration = pricing.total_duration
            booking.add_ons = _snapshot_rows(pricing)

        nullable = {"employee_id", "parent_booking_id", "recurrence_end_date", "payment_method"}
        for field, value in updates.items():
            if value is None and field not in nullable:
                continue
            if field == "scheduled_date":
                value = as_utc(value)
            setattr(booking, field, getattr(value, "value", value))

        await db.flush()
        await db.refresh(booking)
        logger.info(f"Updated booking {booking.id} for business {business_id}")
        return booking

    async def update_status(
        self,
        db: AsyncSession,
        business_id: UUID,
        booking_id: UUID,
        status: BookingStatus,
        completion: CompletionData | None = None,
    ) -> Booking:
        booking = await self.get_booking(db, business_id, booking_id)
        previous = apply_status(booking, status, completion)

        await db.flush()
        await db.refresh(booking)
        logger.info(f"Booking {booking.id} status {previous.value} → {booking.status}")
        return booking

    async def delete_booking(self, db: AsyncSession, business_id: UUID, booking_id: UUID) -> None:
        """Delete a booking that is not in progress or completed."""
        booking = await self.get_booking(db, business_id, booking_id)
        assert_can_delete(booking.status)

        # Detach recurring children from the series parent
        await db.execute(
            update(Booking)
            .where(Booking.parent_booking_id == booking.id)
            .values(parent_booking_id=None)
        )
        await db.delete(booking)
        await db.flush()
        logger.info(f"Deleted booking {booking_id} for business {business_id}")

    async def add_review(
        self, db: AsyncSession, business_id: UUID, booking_id: UUID, data: ReviewCreate
    ) -> Review:
        booking = await self.get_booking(db, business_id, booking_id)
        if booking.status != BookingStatus.COMPLETED.value:
            raise InvalidBookingStatus("Can only review completed bookings")
        if await count_dependents(db, Review.booking_id, booking.id):
            raise ConflictError("This booking already has a review")

        review = Review(
            booking_id=booking.id,
            business_id=business_id,
            customer_id=booking.customer_id,
            rating=data.rating,
            comment=data.comment,
        )
        db.add(review)
        await db.flush()
        await db.refresh(review)
        return review


booking_service = BookingService()
