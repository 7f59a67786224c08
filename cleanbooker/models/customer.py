"""Customer database models."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from cleanbooker.database import Base

if TYPE_CHECKING:
    from cleanbooker.models.booking import Booking
    from cleanbooker.models.business import Business
    from cleanbooker.models.review import Review


class Customer(Base):
    """A client of a business."""

    __tablename__ = "customers"
    __table_args__ = (
        UniqueConstraint("business_id", "email", name="unique_customer_email_per_business"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    business_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Contact
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    phone: Mapped[str] = mapped_column(String(30), nullable=False)
    preferred_contact_method: Mapped[str] = mapped_column(
        String(10), default="EMAIL"
    )  # EMAIL, PHONE, SMS

    # Address
    street: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    state: Mapped[str] = mapped_column(String(100), nullable=False)
    zip_code: Mapped[str] = mapped_column(String(20), nullable=False)

    # Property
    property_type: Mapped[str] = mapped_column(
        String(20), default="HOUSE"
    )  # HOUSE, APARTMENT, OFFICE, COMMERCIAL
    property_size: Mapped[int | None] = mapped_column(Integer)  # square feet
    special_instructions: Mapped[str | None] = mapped_column(Text)

    status: Mapped[str] = mapped_column(
        String(20), default="POTENTIAL", index=True
    )  # POTENTIAL, ACTIVE, INACTIVE

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    business: Mapped["Business"] = relationship("Business", back_populates="customers")
    bookings: Mapped[list["Booking"]] = relationship(
        "Booking",
        back_populates="customer",
        passive_deletes=True,
        order_by="Booking.scheduled_date.desc()",
    )
    reviews: Mapped[list["Review"]] = relationship(
        "Review",
        back_populates="customer",
        passive_deletes=True,
        order_by="Review.created_at.desc()",
    )
    notes: Mapped[list["CustomerNote"]] = relationship(
        "CustomerNote",
        back_populates="customer",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="CustomerNote.created_at.desc()",
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class CustomerNote(Base):
    """Internal note a business keeps about a customer."""

    __tablename__ = "customer_notes"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    customer_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    customer: Mapped["Customer"] = relationship("Customer", back_populates="notes")
