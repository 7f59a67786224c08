"""Booking state machine.

States:
- PENDING: Booked, awaiting confirmation
- CONFIRMED: Confirmed with the customer
- IN_PROGRESS: Crew on site
- COMPLETED: Job finished (terminal)
- CANCELLED: Called off before completion (terminal)
- NO_SHOW: Customer unavailable at the scheduled time (terminal)

By default any status may follow any other; only deletion is gated. With
``enforce_booking_transitions`` the forward graph below is applied.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

from cleanbooker.config import settings
from cleanbooker.core.exceptions import InvalidBookingStatus


class BookingStatus(str, Enum):
    """Booking lifecycle status."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"


TERMINAL_STATUSES = frozenset(
    {BookingStatus.COMPLETED, BookingStatus.CANCELLED, BookingStatus.NO_SHOW}
)

# Statuses in which a booking can no longer be hard-deleted
UNDELETABLE_STATUSES = frozenset({BookingStatus.COMPLETED, BookingStatus.IN_PROGRESS})

BOOKING_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset(
        {BookingStatus.CONFIRMED, BookingStatus.CANCELLED, BookingStatus.NO_SHOW}
    ),
    BookingStatus.CONFIRMED: frozenset(
        {BookingStatus.IN_PROGRESS, BookingStatus.CANCELLED, BookingStatus.NO_SHOW}
    ),
    BookingStatus.IN_PROGRESS: frozenset(
        {BookingStatus.COMPLETED, BookingStatus.CANCELLED, BookingStatus.NO_SHOW}
    ),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
    BookingStatus.NO_SHOW: frozenset(),
}


@dataclass(frozen=True)
class CompletionData:
    """Optional details recorded when a booking is completed."""

    actual_duration: int | None = None
    before_photos: list[str] = field(default_factory=list)
    after_photos: list[str] = field(default_factory=list)


def is_terminal(status: str | BookingStatus) -> bool:
    return BookingStatus(status) in TERMINAL_STATUSES


def can_delete(status: str | BookingStatus) -> bool:
    """Whether a booking in ``status`` may be hard-deleted."""
    return BookingStatus(status) not in UNDELETABLE_STATUSES


def assert_can_delete(status: str | BookingStatus) -> None:
    """Raise InvalidBookingStatus if the booking may not be deleted."""
    status = BookingStatus(status)
    if status in UNDELETABLE_STATUSES:
        raise InvalidBookingStatus(
            f"Cannot delete a booking that is {status.value}. Cancel it instead."
        )


def assert_booking_transition(
    current: str | BookingStatus,
    target: str | BookingStatus,
    strict: bool | None = None,
) -> None:
    """Validate a status change.

    Args:
        current: Current booking status
        target: Requested booking status
        strict: Apply ``BOOKING_TRANSITIONS``; defaults to the
            ``enforce_booking_transitions`` setting

    Raises:
        InvalidBookingStatus: If strict and the transition is not allowed
    """
    if strict is None:
        strict = settings.enforce_booking_transitions
    if not strict:
        return

    current = BookingStatus(current)
    target = BookingStatus(target)
    if current == target:
        return
    if target not in BOOKING_TRANSITIONS[current]:
        raise InvalidBookingStatus(
            f"Invalid booking transition: {current.value} → {target.value}"
        )


def apply_status(
    booking,
    target: str | BookingStatus,
    completion: CompletionData | None = None,
    strict: bool | None = None,
) -> BookingStatus:
    """Move ``booking`` to ``target`` and apply the transition's side effects.

    Only COMPLETED has side effects: ``completed_at`` is stamped and the
    optional completion data is copied onto the booking. Completion data sent
    with any other status is ignored.

    Returns:
        BookingStatus: the previous status
    """
    previous = BookingStatus(booking.status)
    target = BookingStatus(target)
    assert_booking_transition(previous, target, strict=strict)

    booking.status = target.value
    if target == BookingStatus.COMPLETED:
        booking.completed_at = datetime.now(UTC)
        if completion is not None:
            if completion.actual_duration is not None:
                booking.actual_duration = completion.actual_duration
            if completion.before_photos:
                booking.before_photos = list(completion.before_photos)
            if completion.after_photos:
                booking.after_photos = list(completion.after_photos)
    return previous
