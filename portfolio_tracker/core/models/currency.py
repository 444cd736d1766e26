"""
Currency domain model.

A currency carries its recorded FX history against the portfolio's base
currency as a step function over dates.
"""

import bisect
from dataclasses import dataclass, field
from datetime import datetime

from portfolio_tracker.core.utils.dates import DateLike, to_utc_datetime
from portfolio_tracker.core.utils.validation import remove_at, validate_currency_code


@dataclass
class RatePoint:
    """Rate to the base currency effective from date onwards."""

    date: datetime
    rate: float

    def __post_init__(self) -> None:
        self.date = to_utc_datetime(self.date)


@dataclass(eq=False)
class Currency:
    """A currency identified by its ISO code.

    Compared by identity: every reference to a code within one portfolio
    must be the same object so that rate edits are seen everywhere.
    """

    iso: str
    rates: list[RatePoint] = field(default_factory=list)

    def __post_init__(self) -> None:
        validate_currency_code(self.iso)

    def rate_on(self, when: DateLike) -> float:
        """Effective rate for a date.

        Returns the rate of the latest point dated on or before when, or 1.0
        if no point precedes it.
        """
        moment = to_utc_datetime(when)
        rate = 1.0
        for point in self.rates:
            if point.date <= moment:
                rate = point.rate
            else:
                break
        return rate

    def add_rate(self, when: DateLike, rate: float) -> RatePoint:
        """Insert a rate point keeping the history ordered by date."""
        point = RatePoint(date=to_utc_datetime(when), rate=rate)
        dates = [p.date for p in self.rates]
        self.rates.insert(bisect.bisect_right(dates, point.date), point)
        return point

    def delete_rate(self, index: int) -> bool:
        """Delete the rate point at index; False if out of range."""
        return remove_at(self.rates, index)

    def __repr__(self) -> str:
        return f"Currency(iso={self.iso!r}, rates={len(self.rates)})"
