"""Datetime helpers."""

from datetime import UTC, date, datetime, time, timedelta


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime.

    Naive values are taken to already be UTC (SQLite drops tzinfo on the way
    back out).
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """UTC ``[start, end)`` of a calendar day."""
    start = datetime.combine(day, time.min, tzinfo=UTC)
    return start, start + timedelta(days=1)
