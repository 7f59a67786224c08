"""
Integration tests for booking creation, repricing, status changes and deletion
"""

from datetime import UTC, datetime, timedelta
from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy import select

from cleanbooker.config import settings
from cleanbooker.core.exceptions import (
    ConflictError,
    InvalidBookingStatus,
    NotFoundError,
    ValidationError,
)
from cleanbooker.domain.booking_state import BookingStatus, CompletionData
from cleanbooker.models.booking import Booking
from cleanbooker.schemas.booking import BookingCreate, BookingUpdate, ReviewCreate
from cleanbooker.schemas.service import ServiceUpdate
from cleanbooker.services.booking_service import booking_service
from cleanbooker.services.catalog_service import catalog_service
from conftest import make_booking, make_customer, make_service

pytestmark = pytest.mark.integration


def add_on_ids(service):
    return [add_on.id for add_on in service.add_ons]


class TestCreateBooking:
    async def test_prices_from_service_and_add_ons(self, db, business, customer, service):
        booking = await make_booking(db, business.id, customer, service, add_on_ids(service))

        assert booking.total_price == Decimal("130.00")
        assert booking.estimated_duration == 80
        assert booking.status == "PENDING"
        assert sorted(row.price for row in booking.add_ons) == [Decimal("10.00"), Decimal("20.00")]

    async def test_unknown_add_on_skipped_by_default(self, db, business, customer, service):
        ids = add_on_ids(service)[:1] + [uuid4()]  # Balcony plus a stray id
        booking = await make_booking(db, business.id, customer, service, ids)

        assert booking.total_price == Decimal("110.00")
        assert booking.estimated_duration == 65
        assert len(booking.add_ons) == 1

    async def test_unknown_add_on_rejected_when_configured(
        self, db, business, customer, service, monkeypatch
    ):
        monkeypatch.setattr(settings, "reject_unknown_add_ons", True)

        with pytest.raises(ValidationError):
            await make_booking(db, business.id, customer, service, [uuid4()])

    async def test_customer_of_other_business_not_found(
        self, db, business, other_business, service
    ):
        stranger = await make_customer(db, other_business.id)

        with pytest.raises(NotFoundError) as exc_info:
            await make_booking(db, business.id, stranger, service)
        assert "Customer" in exc_info.value.detail

    async def test_service_of_other_business_not_found(
        self, db, business, other_business, customer
    ):
        foreign_service = await make_service(db, other_business.id)

        with pytest.raises(NotFoundError) as exc_info:
            await make_booking(db, business.id, customer, foreign_service)
        assert "Service" in exc_info.value.detail

    async def test_scheduled_date_stored_as_utc(self, db, business, customer, service):
        data = BookingCreate(
            customer_id=customer.id,
            service_id=service.id,
            scheduled_date="2026-11-02T09:30:00-05:00",
        )
        booking = await booking_service.create_booking(db, business.id, data)

        bookings = await booking_service.bookings_on_date(
            db, business.id, datetime(2026, 11, 2).date()
        )
        assert [b.id for b in bookings] == [booking.id]


class TestUpdateBooking:
    async def test_changing_add_ons_recomputes(self, db, business, customer, service):
        booking = await make_booking(db, business.id, customer, service)
        assert booking.total_price == Decimal("100.00")

        updated = await booking_service.update_booking(
            db, business.id, booking.id, BookingUpdate(add_on_ids=add_on_ids(service)[:1])
        )

        assert updated.total_price == Decimal("110.00")
        assert updated.estimated_duration == 65
        assert [row.name for row in updated.add_ons] == [service.add_ons[0].name]

    async def test_changing_service_recomputes(self, db, business, customer, service):
        booking = await make_booking(db, business.id, customer, service, add_on_ids(service))
        deep_clean = await make_service(db, business.id, base_price="250.00", base_duration=180)

        updated = await booking_service.update_booking(
            db, business.id, booking.id, BookingUpdate(service_id=deep_clean.id)
        )

        # The old service's add-ons do not belong to the new one
        assert updated.service_id == deep_clean.id
        assert updated.total_price == Decimal("250.00")
        assert updated.estimated_duration == 180
        assert updated.add_ons == []

    async def test_changing_service_with_strict_add_ons(
        self, db, business, customer, service, monkeypatch
    ):
        """Rejecting unknown add-ons does not block a plain service change"""
        monkeypatch.setattr(settings, "reject_unknown_add_ons", True)
        booking = await make_booking(db, business.id, customer, service, add_on_ids(service))
        deep_clean = await make_service(db, business.id, base_price="250.00", base_duration=180)

        updated = await booking_service.update_booking(
            db, business.id, booking.id, BookingUpdate(service_id=deep_clean.id)
        )

        assert updated.service_id == deep_clean.id
        assert updated.total_price == Decimal("250.00")
        assert updated.add_ons == []

    async def test_same_service_keeps_add_ons(self, db, business, customer, service):
        booking = await make_booking(db, business.id, customer, service, add_on_ids(service))

        updated = await booking_service.update_booking(
            db, business.id, booking.id, BookingUpdate(service_id=service.id)
        )

        assert updated.total_price == Decimal("130.00")
        assert len(updated.add_ons) == 2

    async def test_other_fields_keep_price(self, db, business, customer, service):
        booking = await make_booking(db, business.id, customer, service, add_on_ids(service))

        updated = await booking_service.update_booking(
            db,
            business.id,
            booking.id,
            BookingUpdate(special_instructions="Key under the mat", payment_status="PAID"),
        )

        assert updated.total_price == Decimal("130.00")
        assert updated.special_instructions == "Key under the mat"
        assert updated.payment_status == "PAID"

    async def test_repricing_closed_booking_conflicts(self, db, business, customer, service):
        booking = await make_booking(db, business.id, customer, service)
        await booking_service.update_status(db, business.id, booking.id, BookingStatus.COMPLETED)

        with pytest.raises(InvalidBookingStatus):
            await booking_service.update_booking(
                db, business.id, booking.id, BookingUpdate(add_on_ids=add_on_ids(service))
            )

    async def test_booking_keeps_price_at_time(self, db, business, customer, service):
        booking = await make_booking(db, business.id, customer, service, add_on_ids(service)[:1])

        await catalog_service.update_service(
            db,
            business.id,
            service.id,
            ServiceUpdate(
                base_price=Decimal("150.00"),
                add_ons=[{"name": "Inside fridge", "price": "45.00", "duration": 30}],
            ),
        )
        await db.refresh(booking)

        assert booking.total_price == Decimal("110.00")
        assert booking.add_ons[0].price == Decimal("10.00")
        assert booking.add_ons[0].add_on_id is None

    async def test_unknown_booking_not_found(self, db, business):
        with pytest.raises(NotFoundError):
            await booking_service.update_booking(db, business.id, uuid4(), BookingUpdate())


class TestStatusAndDelete:
    async def test_completion_records_details(self, db, business, customer, service):
        booking = await make_booking(db, business.id, customer, service)

        completed = await booking_service.update_status(
            db,
            business.id,
            booking.id,
            BookingStatus.COMPLETED,
            CompletionData(actual_duration=70, after_photos=["after.jpg"]),
        )

        assert completed.status == "COMPLETED"
        assert completed.completed_at is not None
        assert completed.actual_duration == 70
        assert completed.after_photos == ["after.jpg"]

    @pytest.mark.parametrize("status", [BookingStatus.COMPLETED, BookingStatus.IN_PROGRESS])
    async def test_delete_refused(self, db, business, customer, service, status):
        booking = await make_booking(db, business.id, customer, service)
        await booking_service.update_status(db, business.id, booking.id, status)

        with pytest.raises(ConflictError):
            await booking_service.delete_booking(db, business.id, booking.id)

        assert await db.get(Booking, booking.id) is not None

    @pytest.mark.parametrize(
        "status",
        [
            BookingStatus.PENDING,
            BookingStatus.CONFIRMED,
            BookingStatus.CANCELLED,
            BookingStatus.NO_SHOW,
        ],
    )
    async def test_delete_allowed(self, db, business, customer, service, status):
        booking = await make_booking(db, business.id, customer, service, add_on_ids(service))
        await booking_service.update_status(db, business.id, booking.id, status)

        await booking_service.delete_booking(db, business.id, booking.id)

        result = await db.execute(select(Booking).where(Booking.id == booking.id))
        assert result.scalar_one_or_none() is None

    async def test_delete_detaches_recurring_children(self, db, business, customer, service):
        parent = await make_booking(db, business.id, customer, service)
        child = await booking_service.create_booking(
            db,
            business.id,
            BookingCreate(
                customer_id=customer.id,
                service_id=service.id,
                scheduled_date=datetime.now(UTC) + timedelta(days=8),
                parent_booking_id=parent.id,
            ),
        )

        await booking_service.delete_booking(db, business.id, parent.id)
        await db.refresh(child)

        assert child.parent_booking_id is None


class TestReviews:
    async def test_review_requires_completion(self, db, business, customer, service):
        booking = await make_booking(db, business.id, customer, service)

        with pytest.raises(InvalidBookingStatus):
            await booking_service.add_review(db, business.id, booking.id, ReviewCreate(rating=5))

    async def test_one_review_per_booking(self, db, business, customer, service):
        booking = await make_booking(db, business.id, customer, service)
        await booking_service.update_status(db, business.id, booking.id, BookingStatus.COMPLETED)

        review = await booking_service.add_review(
            db, business.id, booking.id, ReviewCreate(rating=4, comment="Great")
        )
        assert review.customer_id == customer.id

        await db.refresh(booking)
        with pytest.raises(ConflictError):
            await booking_service.add_review(db, business.id, booking.id, ReviewCreate(rating=1))
