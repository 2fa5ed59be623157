"""Reporting period resolution and time-series bucketing."""

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Tuple

from backend.app.core.errors import ValidationError

PERIODS = ("week", "month", "year", "custom")
# Custom ranges longer than this are bucketed by month instead of by day
MAX_DAILY_CUSTOM_DAYS = 62


def _month_end(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


@dataclass(frozen=True)
class ReportingPeriod:
    period: str
    start: date
    end: date
    previous_start: date
    previous_end: date

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    @property
    def grouping(self) -> str:
        if self.period in ("week", "month"):
            return "daily"
        if self.period == "custom" and self.days <= MAX_DAILY_CUSTOM_DAYS:
            return "daily"
        return "monthly"

    def as_dict(self) -> dict:
        return {
            "period": self.period,
            "start_date": self.start,
            "end_date": self.end,
            "previous_start_date": self.previous_start,
            "previous_end_date": self.previous_end,
        }


def resolve_period(
    period: str,
    today: date,
    start_date: date | None = None,
    end_date: date | None = None,
) -> ReportingPeriod:
    """Map a period name to the current range and the comparable previous range.

    Weeks start on Monday. A custom range is inclusive and its comparison
    range is the same number of days immediately before it.
    """
    if period == "week":
        start = today - timedelta(days=today.weekday())
        end = start + timedelta(days=6)
        return ReportingPeriod(period, start, end, start - timedelta(days=7), end - timedelta(days=7))
    if period == "month":
        start = today.replace(day=1)
        end = _month_end(today.year, today.month)
        previous_end = start - timedelta(days=1)
        return ReportingPeriod(period, start, end, previous_end.replace(day=1), previous_end)
    if period == "year":
        return ReportingPeriod(
            period,
            date(today.year, 1, 1),
            date(today.year, 12, 31),
            date(today.year - 1, 1, 1),
            date(today.year - 1, 12, 31),
        )
    if period == "custom":
        if start_date is None or end_date is None:
            raise ValidationError("Custom period requires start_date and end_date")
        if end_date < start_date:
            raise ValidationError("end_date must not be before start_date")
        shift = timedelta(days=(end_date - start_date).days + 1)
        return ReportingPeriod(period, start_date, end_date, start_date - shift, end_date - shift)
    raise ValidationError(f"Unknown period '{period}'")


def bucket_key(day: date, grouping: str) -> str:
    if grouping == "daily":
        return day.isoformat()
    return f"{day.year:04d}-{day.month:02d}"


def _bucket_label(day: date, reporting_period: ReportingPeriod) -> str:
    if reporting_period.grouping == "monthly":
        if reporting_period.period == "year":
            return day.strftime("%b")
        return day.strftime("%b %Y")
    if reporting_period.period == "week":
        return f"{day.strftime('%a')} {day.day}"
    if reporting_period.period == "month":
        return str(day.day)
    return f"{day.strftime('%b')} {day.day}"


def series_buckets(reporting_period: ReportingPeriod) -> List[Tuple[str, str]]:
    """Every (key, label) bucket of the period, in order, including empty ones."""
    buckets: List[Tuple[str, str]] = []
    if reporting_period.grouping == "daily":
        day = reporting_period.start
        while day <= reporting_period.end:
            buckets.append((bucket_key(day, "daily"), _bucket_label(day, reporting_period)))
            day += timedelta(days=1)
        return buckets

    year, month = reporting_period.start.year, reporting_period.start.month
    while (year, month) <= (reporting_period.end.year, reporting_period.end.month):
        first = date(year, month, 1)
        buckets.append((bucket_key(first, "monthly"), _bucket_label(first, reporting_period)))
        month += 1
        if month == 13:
            month = 1
            year += 1
    return buckets
