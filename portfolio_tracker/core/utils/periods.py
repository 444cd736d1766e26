"""
Reporting period arithmetic.

Periods are compared as (year, subperiod) tuples; the string keys "YYYY" and
"YYYY-Qn" are only produced for display and lookups.
"""

import calendar
from dataclasses import dataclass
from datetime import UTC, date, datetime

from portfolio_tracker.core.enums import AggregateBy

from .dates import DateLike, calendar_date, quarter_of


@dataclass(frozen=True, order=True)
class ReportPeriod:
    """A calendar year or quarter."""

    year: int
    subperiod: int  # 1 for years, 1-4 for quarters
    aggregate_by: AggregateBy

    @classmethod
    def containing(cls, when: DateLike, aggregate_by: AggregateBy) -> "ReportPeriod":
        """Return the period that contains the given date."""
        day = calendar_date(when)
        if aggregate_by == AggregateBy.YEAR:
            return cls(day.year, 1, aggregate_by)
        return cls(day.year, quarter_of(day.month), aggregate_by)

    @classmethod
    def from_key(cls, key: str, aggregate_by: AggregateBy) -> "ReportPeriod":
        """Parse a "YYYY" or "YYYY-Qn" key.

        Raises:
            ValueError: If the key does not match the granularity
        """
        if aggregate_by == AggregateBy.YEAR:
            return cls(int(key), 1, aggregate_by)
        year, _, quarter = key.partition("-Q")
        if not quarter or not 1 <= int(quarter) <= 4:
            raise ValueError(f"Invalid quarter key: {key}")
        return cls(int(year), int(quarter), aggregate_by)

    @property
    def key(self) -> str:
        if self.aggregate_by == AggregateBy.YEAR:
            return f"{self.year:04d}"
        return f"{self.year:04d}-Q{self.subperiod}"

    def next(self) -> "ReportPeriod":
        """The period immediately following this one."""
        if self.subperiod < self.aggregate_by.periods_per_year:
            return ReportPeriod(self.year, self.subperiod + 1, self.aggregate_by)
        return ReportPeriod(self.year + 1, 1, self.aggregate_by)

    def start_date(self) -> date:
        if self.aggregate_by == AggregateBy.YEAR:
            return date(self.year, 1, 1)
        return date(self.year, self.subperiod * 3 - 2, 1)

    def end_date(self) -> date:
        """Last calendar day of the period."""
        if self.aggregate_by == AggregateBy.YEAR:
            return date(self.year, 12, 31)
        end_month = self.subperiod * 3
        return date(self.year, end_month, calendar.monthrange(self.year, end_month)[1])

    def end_datetime(self) -> datetime:
        """End of the last calendar day of the period, in UTC."""
        end = self.end_date()
        return datetime(end.year, end.month, end.day, 23, 59, 59, 999999, tzinfo=UTC)

    def __str__(self) -> str:
        return self.key


def iterate_periods(first: ReportPeriod, last: ReportPeriod) -> list[ReportPeriod]:
    """All periods from first to last inclusive (empty if last precedes first)."""
    periods = []
    current = first
    while current <= last:
        periods.append(current)
        current = current.next()
    return periods
