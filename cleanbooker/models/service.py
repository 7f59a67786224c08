"""Service catalog database models."""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from cleanbooker.database import Base

if TYPE_CHECKING:
    from cleanbooker.models.booking import Booking
    from cleanbooker.models.business import Business


class Service(Base):
    """A bookable offering of one business."""

    __tablename__ = "services"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    business_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    category: Mapped[str] = mapped_column(
        String(30), nullable=False, index=True
    )  # REGULAR, DEEP, MOVE_IN, MOVE_OUT, COMMERCIAL, POST_CONSTRUCTION

    base_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    base_duration: Mapped[int] = mapped_column(Integer, nullable=False)  # minutes

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    business: Mapped["Business"] = relationship("Business", back_populates="services")
    add_ons: Mapped[list["AddOn"]] = relationship(
        "AddOn",
        back_populates="service",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="AddOn.name",
    )
    bookings: Mapped[list["Booking"]] = relationship(
        "Booking", back_populates="service", passive_deletes=True
    )


class AddOn(Base):
    """Optional extra attached to a service (e.g. inside the fridge)."""

    __tablename__ = "add_ons"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    service_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("services.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)  # minutes

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    service: Mapped["Service"] = relationship("Service", back_populates="add_ons")
