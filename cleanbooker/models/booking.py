"""Booking-related database models."""

from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import JSON, Date, DateTime, ForeignKey, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from cleanbooker.database import Base

if TYPE_CHECKING:
    from cleanbooker.models.business import Business, Employee
    from cleanbooker.models.customer import Customer
    from cleanbooker.models.review import Review
    from cleanbooker.models.service import Service


class Booking(Base):
    """A scheduled cleaning of one service for one customer."""

    __tablename__ = "bookings"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    business_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    customer_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("customers.id"), nullable=False, index=True
    )
    service_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("services.id"), nullable=False, index=True
    )
    employee_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("employees.id", ondelete="SET NULL"), index=True
    )

    # Schedule
    scheduled_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)

    # Status
    status: Mapped[str] = mapped_column(
        String(20), default="PENDING", index=True
    )  # PENDING, CONFIRMED, IN_PROGRESS, COMPLETED, CANCELLED, NO_SHOW

    # Pricing (derived from service + add-ons)
    total_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    estimated_duration: Mapped[int] = mapped_column(Integer, nullable=False)  # minutes
    actual_duration: Mapped[int | None] = mapped_column(Integer)  # minutes, set on completion

    # Payment
    payment_method: Mapped[str | None] = mapped_column(
        String(20)
    )  # CASH, CARD, BANK_TRANSFER, CHECK, OTHER
    payment_status: Mapped[str] = mapped_column(
        String(20), default="PENDING"
    )  # PENDING, PAID, PARTIALLY_PAID, REFUNDED

    # Recurrence
    recurrence_type: Mapped[str] = mapped_column(
        String(20), default="NONE"
    )  # NONE, WEEKLY, BIWEEKLY, MONTHLY
    recurrence_end_date: Mapped[date | None] = mapped_column(Date)
    parent_booking_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("bookings.id", ondelete="SET NULL"), index=True
    )

    # Job records
    before_photos: Mapped[list[str]] = mapped_column(JSON, default=list)
    after_photos: Mapped[list[str]] = mapped_column(JSON, default=list)
    special_instructions: Mapped[str | None] = mapped_column(Text)
    internal_notes: Mapped[str | None] = mapped_column(Text)

    # Timestamps
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    business: Mapped["Business"] = relationship("Business", back_populates="bookings")
    customer: Mapped["Customer"] = relationship("Customer", back_populates="bookings")
    service: Mapped["Service"] = relationship("Service", back_populates="bookings")
    employee: Mapped["Employee | None"] = relationship("Employee")
    add_ons: Mapped[list["BookingAddOn"]] = relationship(
        "BookingAddOn",
        back_populates="booking",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    review: Mapped["Review | None"] = relationship(
        "Review",
        back_populates="booking",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class BookingAddOn(Base):
    """Add-on selected for a booking, with its price captured at booking time."""

    __tablename__ = "booking_add_ons"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    booking_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    add_on_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("add_ons.id", ondelete="SET NULL")
    )  # NULL once the catalog add-on is removed

    # Snapshot
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)

    booking: Mapped["Booking"] = relationship("Booking", back_populates="add_ons")
