"""
Integration tests for the service catalog and customer guards
"""

from decimal import Decimal

import pytest

import cleanbooker.services.customer_service as customer_module
from cleanbooker.core.exceptions import ConflictError
from cleanbooker.models.service import Service
from cleanbooker.schemas.customer import CustomerUpdate
from cleanbooker.schemas.service import ServiceUpdate
from cleanbooker.services.catalog_service import catalog_service
from cleanbooker.services.customer_service import customer_service
from conftest import make_booking, make_customer, make_service

pytestmark = pytest.mark.integration


class TestDeleteService:
    async def test_service_with_bookings_conflicts(self, db, business, customer, service):
        """Three bookings keep the service alive and active"""
        for _ in range(3):
            await make_booking(db, business.id, customer, service)

        with pytest.raises(ConflictError) as exc_info:
            await catalog_service.delete_service(db, business.id, service.id)

        assert "deactivating" in exc_info.value.detail
        remaining = await catalog_service.get_service(db, business.id, service.id)
        assert remaining.is_active is True
        assert (await catalog_service.booking_counts(db, [service.id]))[service.id] == 3

    async def test_unbooked_service_deleted(self, db, business, service):
        await catalog_service.delete_service(db, business.id, service.id)

        assert await db.get(Service, service.id) is None


class TestUpdateService:
    async def test_add_ons_replaced(self, db, business, service):
        updated = await catalog_service.update_service(
            db,
            business.id,
            service.id,
            ServiceUpdate(add_ons=[{"name": "Oven", "price": "25.50", "duration": 20}]),
        )

        assert [(a.name, a.price) for a in updated.add_ons] == [("Oven", Decimal("25.50"))]

    async def test_omitted_add_ons_untouched(self, db, business, service):
        updated = await catalog_service.update_service(
            db, business.id, service.id, ServiceUpdate(name="Weekly Clean")
        )

        assert updated.name == "Weekly Clean"
        assert len(updated.add_ons) == 2

    async def test_toggle_status(self, db, business, service):
        toggled = await catalog_service.toggle_status(db, business.id, service.id)
        assert toggled.is_active is False

        toggled = await catalog_service.toggle_status(db, business.id, service.id)
        assert toggled.is_active is True


class TestCustomerGuards:
    async def test_duplicate_email_in_same_business(self, db, business):
        await make_customer(db, business.id, email="jordan@example.com")

        with pytest.raises(ConflictError):
            await make_customer(db, business.id, email="Jordan@Example.com")

    async def test_same_email_in_other_business_allowed(self, db, business, other_business):
        await make_customer(db, business.id, email="jordan@example.com")
        other = await make_customer(db, other_business.id, email="jordan@example.com")

        assert other.business_id == other_business.id

    async def test_duplicate_email_at_insert_conflicts(self, db, business, monkeypatch):
        """A concurrent insert that wins the race still yields a conflict"""
        await make_customer(db, business.id, email="race@example.com")

        async def email_looks_free(*args, **kwargs):
            return None

        monkeypatch.setattr(customer_module, "ensure_email_available", email_looks_free)

        with pytest.raises(ConflictError) as exc_info:
            await make_customer(db, business.id, email="race@example.com")
        assert exc_info.value.detail == customer_module.DUPLICATE_EMAIL

    async def test_update_to_taken_email_conflicts(self, db, business):
        await make_customer(db, business.id, email="taken@example.com")
        customer = await make_customer(db, business.id, email="free@example.com")

        with pytest.raises(ConflictError):
            await customer_service.update_customer(
                db, business.id, customer.id, CustomerUpdate(email="taken@example.com")
            )

    async def test_customer_with_bookings_cannot_be_deleted(self, db, business, customer, service):
        await make_booking(db, business.id, customer, service)

        with pytest.raises(ConflictError):
            await customer_service.delete_customer(db, business.id, customer.id)

    async def test_counts(self, db, business, customer):
        service = await make_service(db, business.id)
        await make_booking(db, business.id, customer, service)
        await make_booking(db, business.id, customer, service)

        counts = await customer_service.counts(db, [customer.id])

        assert counts[customer.id] == (2, 0)
