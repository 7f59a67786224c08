"""Typed list criteria and the queries built from them.

Each ``*Filter`` is a frozen dataclass of optional criteria for one entity.
``validate()`` rejects bad input before anything reaches the database, and
``clauses()`` always starts with the tenant clause so no listing can cross
businesses.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar
from uuid import UUID

from sqlalchemy import Select, func, or_, select
from sqlalchemy.sql.elements import ColumnElement

from cleanbooker.config import settings
from cleanbooker.core.exceptions import ValidationError
from cleanbooker.domain.booking_state import BookingStatus
from cleanbooker.domain.enums import CustomerStatus, ServiceCategory
from cleanbooker.models.booking import Booking
from cleanbooker.models.customer import Customer
from cleanbooker.models.service import Service


def contains_pattern(text: str) -> str:
    """LIKE pattern matching ``text`` literally anywhere in a column."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


@dataclass(frozen=True)
class Pagination:
    """Page number (1-based) and page size."""

    page: int = 1
    limit: int = field(default_factory=lambda: settings.default_page_size)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def errors(self) -> list[str]:
        problems = []
        if self.page < 1:
            problems.append("page: must be at least 1")
        if not 1 <= self.limit <= settings.max_page_size:
            problems.append(f"limit: must be between 1 and {settings.max_page_size}")
        return problems

    def meta(self, total: int) -> dict[str, int]:
        return {
            "total": total,
            "page": self.page,
            "limit": self.limit,
            "total_pages": math.ceil(total / self.limit) if total else 0,
        }


@dataclass(frozen=True)
class Sort:
    field: str = "created_at"
    order: str = "desc"


@dataclass(frozen=True)
class ListFilter:
    """Criteria shared by every tenant-scoped listing."""

    model: ClassVar[Any]
    sortable: ClassVar[frozenset[str]]

    business_id: UUID
    pagination: Pagination = field(default_factory=Pagination)
    sort: Sort = field(default_factory=Sort)

    def errors(self) -> list[str]:
        problems = self.pagination.errors()
        if self.sort.field not in self.sortable:
            allowed = ", ".join(sorted(self.sortable))
            problems.append(f"sort_by: must be one of {allowed}")
        if self.sort.order not in ("asc", "desc"):
            problems.append("sort_order: must be 'asc' or 'desc'")
        return problems

    def validate(self) -> None:
        problems = self.errors()
        if problems:
            raise ValidationError("Invalid list parameters", errors=problems)

    def clauses(self) -> list[ColumnElement[bool]]:
        return [self.model.business_id == self.business_id]

    def order_by(self) -> ColumnElement:
        column = getattr(self.model, self.sort.field)
        return column.asc() if self.sort.order == "asc" else column.desc()


@dataclass(frozen=True)
class CustomerFilter(ListFilter):
    model: ClassVar[Any] = Customer
    sortable: ClassVar[frozenset[str]] = frozenset(
        {"created_at", "updated_at", "first_name", "last_name", "email", "status"}
    )

    search: str | None = None
    status: CustomerStatus | None = None

    def clauses(self) -> list[ColumnElement[bool]]:
        clauses = super().clauses()
        if self.search:
            pattern = contains_pattern(self.search)
            clauses.append(
                or_(
                    Customer.first_name.ilike(pattern, escape="\\"),
                    Customer.last_name.ilike(pattern, escape="\\"),
                    Customer.email.ilike(pattern, escape="\\"),
                    Customer.phone.ilike(pattern, escape="\\"),
                )
            )
        if self.status is not None:
            clauses.append(Customer.status == self.status.value)
        return clauses


@dataclass(frozen=True)
class ServiceFilter(ListFilter):
    model: ClassVar[Any] = Service
    sortable: ClassVar[frozenset[str]] = frozenset(
        {"created_at", "updated_at", "name", "category", "base_price", "base_duration"}
    )

    search: str | None = None
    category: ServiceCategory | None = None
    is_active: bool | None = None

    def clauses(self) -> list[ColumnElement[bool]]:
        clauses = super().clauses()
        if self.search:
            pattern = contains_pattern(self.search)
            clauses.append(
                or_(
                    Service.name.ilike(pattern, escape="\\"),
                    Service.description.ilike(pattern, escape="\\"),
                )
            )
        if self.category is not None:
            clauses.append(Service.category == self.category.value)
        if self.is_active is not None:
            clauses.append(Service.is_active == self.is_active)
        return clauses


@dataclass(frozen=True)
class BookingFilter(ListFilter):
    model: ClassVar[Any] = Booking
    sortable: ClassVar[frozenset[str]] = frozenset(
        {"scheduled_date", "created_at", "updated_at", "total_price", "status"}
    )

    sort: Sort = field(default_factory=lambda: Sort(field="scheduled_date", order="desc"))
    status: BookingStatus | None = None
    customer_id: UUID | None = None
    service_id: UUID | None = None
    employee_id: UUID | None = None
    date_from: datetime | None = None
    date_to: datetime | None = None

    def errors(self) -> list[str]:
        problems = super().errors()
        if self.date_from and self.date_to and self.date_from >= self.date_to:
            problems.append("date_to: must be after date_from")
        return problems

    def clauses(self) -> list[ColumnElement[bool]]:
        clauses = super().clauses()
        if self.status is not None:
            clauses.append(Booking.status == self.status.value)
        if self.customer_id is not None:
            clauses.append(Booking.customer_id == self.customer_id)
        if self.service_id is not None:
            clauses.append(Booking.service_id == self.service_id)
        if self.employee_id is not None:
            clauses.append(Booking.employee_id == self.employee_id)
        if self.date_from is not None:
            clauses.append(Booking.scheduled_date >= self.date_from)
        if self.date_to is not None:
            clauses.append(Booking.scheduled_date < self.date_to)
        return clauses


def build_list_queries(criteria: ListFilter) -> tuple[Select, Select]:
    """Validate ``criteria`` and return ``(page_query, count_query)``."""
    criteria.validate()
    clauses = criteria.clauses()

    page_query = (
        select(criteria.model)
        .where(*clauses)
        .order_by(criteria.order_by())
        .offset(criteria.pagination.offset)
        .limit(criteria.pagination.limit)
    )
    count_query = select(func.count()).select_from(criteria.model).where(*clauses)
    return page_query, count_query
