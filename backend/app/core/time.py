"""Time utilities for timezone-aware UTC datetimes."""

from datetime import UTC, date, datetime, time


def utc_now() -> datetime:
    """Return a timezone-aware UTC datetime for defaults and onupdate hooks."""
    return datetime.now(UTC)


def utc_today() -> date:
    return utc_now().date()


def to_naive_utc(value: datetime) -> datetime:
    """Normalize a datetime to naive UTC, the form time entries are stored in."""
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def day_bounds(start: date, end: date) -> tuple[datetime, datetime]:
    """Return naive datetimes covering ``start`` 00:00 through the end of ``end``."""
    return datetime.combine(start, time.min), datetime.combine(end, time.max)
