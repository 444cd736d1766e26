"""
Calendar helpers shared by the model, the report generator and the solver.

All calendar arithmetic happens on UTC calendar dates so that a valuta
stored as midnight UTC never drifts into a neighbouring day.
"""

from datetime import UTC, date, datetime, time
from typing import TypeAlias

DateLike: TypeAlias = date | datetime


def to_utc_datetime(value: DateLike) -> datetime:
    """Normalize a date or datetime to an aware UTC datetime.

    Naive datetimes are taken to already be UTC; plain dates map to midnight.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)
    return datetime.combine(value, time.min, tzinfo=UTC)


def calendar_date(value: DateLike) -> date:
    """Return the UTC calendar date of a date or datetime."""
    if isinstance(value, datetime):
        return to_utc_datetime(value).date()
    return value


def days_between(start: DateLike, end: DateLike) -> int:
    """Whole calendar days from start to end (negative if end is earlier)."""
    return (calendar_date(end) - calendar_date(start)).days


def quarter_of(month: int) -> int:
    """Quarter number (1-4) of a month (1-12)."""
    return (month + 2) // 3


def format_iso_millis(value: DateLike) -> str:
    """Format as ISO-8601 UTC with millisecond precision, e.g. 2024-01-31T00:00:00.000Z."""
    moment = to_utc_datetime(value)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def parse_iso_millis(value: str) -> datetime:
    """Parse the ISO-8601 millisecond UTC format written by format_iso_millis."""
    return datetime.strptime(value, "%Y-%m-%dT%H:%M:%S.%fZ").replace(tzinfo=UTC)
