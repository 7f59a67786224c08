"""Customer management for a business."""

import logging
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from cleanbooker.core.exceptions import ConflictError
from cleanbooker.domain.filters import CustomerFilter, build_list_queries
from cleanbooker.models.booking import Booking
from cleanbooker.models.customer import Customer, CustomerNote
from cleanbooker.models.review import Review
from cleanbooker.schemas.customer import CustomerCreate, CustomerUpdate
from cleanbooker.services.guards import (
    count_dependents,
    ensure_email_available,
    flush_unique,
    get_owned,
)

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL = "Customer already exists with this email"


class CustomerService:
    """CRUD over customers, always scoped to the calling business."""

    async def counts(
        self, db: AsyncSession, customer_ids: list[UUID]
    ) -> dict[UUID, tuple[int, int]]:
        """Booking and review counts keyed by customer id."""
        if not customer_ids:
            return {}
        bookings = await db.execute(
            select(Booking.customer_id, func.count(Booking.id))
            .where(Booking.customer_id.in_(customer_ids))
            .group_by(Booking.customer_id)
        )
        reviews = await db.execute(
            select(Review.customer_id, func.count(Review.id))
            .where(Review.customer_id.in_(customer_ids))
            .group_by(Review.customer_id)
        )
        booking_counts = dict(bookings.all())
        review_counts = dict(reviews.all())
        return {
            customer_id: (booking_counts.get(customer_id, 0), review_counts.get(customer_id, 0))
            for customer_id in customer_ids
        }

    async def list_customers(
        self, db: AsyncSession, criteria: CustomerFilter
    ) -> tuple[list[Customer], int]:
        page_query, count_query = build_list_queries(criteria)
        total = (await db.execute(count_query)).scalar_one()
        customers = list((await db.execute(page_query)).scalars().all())
        return customers, total

    async def create_customer(
        self, db: AsyncSession, business_id: UUID, data: CustomerCreate
    ) -> Customer:
        email = data.email.lower()
        await ensure_email_available(
            db, Customer, email, DUPLICATE_EMAIL, business_id=business_id
        )

        customer = Customer(
            business_id=business_id,
            first_name=data.first_name,
            last_name=data.last_name,
            email=email,
            phone=data.phone,
            street=data.address.street,
            city=data.address.city,
            state=data.address.state,
            zip_code=data.address.zip_code,
            property_type=data.property_type.value,
            property_size=data.property_size,
            special_instructions=data.special_instructions,
            preferred_contact_method=data.preferred_contact_method.value,
            status=data.status.value,
        )
        db.add(customer)
        await flush_unique(db, DUPLICATE_EMAIL)
        await db.refresh(customer)

        logger.info(f"Created customer {customer.id} for business {business_id}")
        return customer

    async def get_customer(
        self, db: AsyncSession, business_id: UUID, customer_id: UUID, detail: bool = False
    ) -> Customer:
        options = ()
        if detail:
            options = (
                selectinload(Customer.bookings),
                selectinload(Customer.reviews),
                selectinload(Customer.notes),
            )
        return await get_owned(db, Customer, customer_id, business_id, "Customer", options)

    async def update_customer(
        self, db: AsyncSession, business_id: UUID, customer_id: UUID, data: CustomerUpdate
    ) -> Customer:
        customer = await self.get_customer(db, business_id, customer_id)
        updates = data.model_dump(exclude_unset=True)

        address = updates.pop("address", None)
        if address:
            customer.street = address["street"]
            customer.city = address["city"]
            customer.state = address["state"]
            customer.zip_code = address["zip_code"]

        if updates.get("email"):
            updates["email"] = updates["email"].lower()
            if updates["email"] != customer.email:
                await ensure_email_available(
                    db,
                    Customer,
                    updates["email"],
                    DUPLICATE_EMAIL,
                    business_id=business_id,
                    exclude_id=customer.id,
                )

        for field, value in updates.items():
            if value is None:
                continue
            setattr(customer, field, getattr(value, "value", value))

        await flush_unique(db, DUPLICATE_EMAIL)
        await db.refresh(customer)
        return customer

    async def delete_customer(self, db: AsyncSession, business_id: UUID, customer_id: UUID) -> None:
        """Delete a customer that has no bookings."""
        customer = await self.get_customer(db, business_id, customer_id)

        if await count_dependents(db, Booking.customer_id, customer.id):
            raise ConflictError(
                "Cannot delete customer with existing bookings. Consider marking them INACTIVE instead."
            )

        await db.execute(delete(CustomerNote).where(CustomerNote.customer_id == customer.id))
        await db.delete(customer)
        await db.flush()
        logger.info(f"Deleted customer {customer_id} for business {business_id}")

    async def add_note(
        self, db: AsyncSession, business_id: UUID, customer_id: UUID, content: str
    ) -> CustomerNote:
        customer = await self.get_customer(db, business_id, customer_id)
        note = CustomerNote(customer_id=customer.id, content=content)
        db.add(note)
        await db.flush()
        await db.refresh(note)
        return note


customer_service = CustomerService()
