"""
Integration tests: one business can never see or touch another's rows
"""

import pytest

from cleanbooker.core.exceptions import NotFoundError
from cleanbooker.domain.booking_state import BookingStatus
from cleanbooker.domain.filters import BookingFilter, CustomerFilter, ServiceFilter
from cleanbooker.schemas.booking import BookingUpdate
from cleanbooker.schemas.customer import CustomerUpdate
from cleanbooker.schemas.service import ServiceUpdate
from cleanbooker.services.booking_service import booking_service
from cleanbooker.services.catalog_service import catalog_service
from cleanbooker.services.customer_service import customer_service
from conftest import make_booking

pytestmark = pytest.mark.integration


@pytest.fixture
async def booking(db, business, customer, service):
    return await make_booking(db, business.id, customer, service)


class TestBookingIsolation:
    async def test_get(self, db, other_business, booking):
        with pytest.raises(NotFoundError) as exc_info:
            await booking_service.get_booking(db, other_business.id, booking.id)

        assert exc_info.value.status_code == 404

    async def test_update(self, db, other_business, booking):
        with pytest.raises(NotFoundError):
            await booking_service.update_booking(
                db, other_business.id, booking.id, BookingUpdate(internal_notes="mine now")
            )

    async def test_status_change(self, db, other_business, booking):
        with pytest.raises(NotFoundError):
            await booking_service.update_status(
                db, other_business.id, booking.id, BookingStatus.CANCELLED
            )
        assert booking.status == "PENDING"

    async def test_delete(self, db, business, other_business, booking):
        with pytest.raises(NotFoundError):
            await booking_service.delete_booking(db, other_business.id, booking.id)

        assert (await booking_service.get_booking(db, business.id, booking.id)).id == booking.id

    async def test_listing(self, db, business, other_business, booking):
        mine, total = await booking_service.list_bookings(db, BookingFilter(business_id=business.id))
        theirs, their_total = await booking_service.list_bookings(
            db, BookingFilter(business_id=other_business.id)
        )

        assert total == 1 and [b.id for b in mine] == [booking.id]
        assert their_total == 0 and theirs == []


class TestCustomerIsolation:
    async def test_get_update_delete(self, db, other_business, customer):
        with pytest.raises(NotFoundError):
            await customer_service.get_customer(db, other_business.id, customer.id)
        with pytest.raises(NotFoundError):
            await customer_service.update_customer(
                db, other_business.id, customer.id, CustomerUpdate(first_name="Mallory")
            )
        with pytest.raises(NotFoundError):
            await customer_service.delete_customer(db, other_business.id, customer.id)
        with pytest.raises(NotFoundError):
            await customer_service.add_note(db, other_business.id, customer.id, "hi")

    async def test_listing(self, db, other_business, customer):
        customers, total = await customer_service.list_customers(
            db, CustomerFilter(business_id=other_business.id)
        )
        assert (customers, total) == ([], 0)


class TestServiceIsolation:
    async def test_get_update_delete_toggle(self, db, other_business, service):
        with pytest.raises(NotFoundError):
            await catalog_service.get_service(db, other_business.id, service.id)
        with pytest.raises(NotFoundError):
            await catalog_service.update_service(
                db, other_business.id, service.id, ServiceUpdate(name="Stolen")
            )
        with pytest.raises(NotFoundError):
            await catalog_service.delete_service(db, other_business.id, service.id)
        with pytest.raises(NotFoundError):
            await catalog_service.toggle_status(db, other_business.id, service.id)

        assert service.name == "Standard Clean"

    async def test_listing(self, db, other_business, service):
        services, total = await catalog_service.list_services(
            db, ServiceFilter(business_id=other_business.id)
        )
        assert (services, total) == ([], 0)
