"""Booking price and duration calculation.

A booking's total is the service's base price and duration plus the price
and duration of every selected add-on that belongs to the service right now.
Resolved add-ons are captured as snapshots so the booking keeps the price it
was sold at even if the catalog changes later.

Selected ids that do not belong to the service are reported back in
``PricingResult.skipped_add_on_ids`` rather than raising; callers decide
whether that is acceptable.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Protocol
from uuid import UUID

CENTS = Decimal("0.01")


class PricedAddOn(Protocol):
    id: UUID
    name: str
    price: Decimal
    duration: int


class PricedService(Protocol):
    base_price: Decimal
    base_duration: int
    add_ons: Sequence[PricedAddOn]


@dataclass(frozen=True)
class AddOnSnapshot:
    """Add-on as it was priced when the booking total was computed."""

    add_on_id: UUID
    name: str
    price: Decimal
    duration: int


@dataclass(frozen=True)
class PricingResult:
    """Totals for a booking plus the add-ons that contributed to them."""

    total_price: Decimal
    total_duration: int
    add_ons: tuple[AddOnSnapshot, ...] = ()
    skipped_add_on_ids: tuple[UUID, ...] = field(default=())


def to_money(value: Decimal | int | str | float) -> Decimal:
    """Coerce to a two-place Decimal.

    Floats go through ``str`` so 19.99 stays 19.99 instead of its binary
    expansion.
    """
    if isinstance(value, float):
        value = str(value)
    return Decimal(value).quantize(CENTS)


def compute_totals(service: PricedService, selected_add_on_ids: Iterable[UUID]) -> PricingResult:
    """Compute total price and duration for a booking of ``service``.

    Each selected id is looked up among ``service.add_ons``. Duplicates are
    counted once; order of the snapshots follows the selection order.

    Args:
        service: Service with its current add-ons loaded
        selected_add_on_ids: Add-on ids chosen for the booking

    Returns:
        PricingResult: totals, price-at-time snapshots and unresolved ids
    """
    available = {add_on.id: add_on for add_on in service.add_ons}

    total_price = to_money(service.base_price)
    total_duration = int(service.base_duration)
    snapshots: list[AddOnSnapshot] = []
    skipped: list[UUID] = []
    seen: set[UUID] = set()

    for add_on_id in selected_add_on_ids:
        if add_on_id in seen:
            continue
        seen.add(add_on_id)

        add_on = available.get(add_on_id)
        if add_on is None:
            skipped.append(add_on_id)
            continue

        price = to_money(add_on.price)
        total_price += price
        total_duration += int(add_on.duration)
        snapshots.append(
            AddOnSnapshot(
                add_on_id=add_on.id,
                name=add_on.name,
                price=price,
                duration=int(add_on.duration),
            )
        )

    return PricingResult(
        total_price=total_price,
        total_duration=total_duration,
        add_ons=tuple(snapshots),
        skipped_add_on_ids=tuple(skipped),
    )
