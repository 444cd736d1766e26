"""
Mark-to-market valuation series.

Explicit valuations and the unit prices implied by investments form one
date-sorted series that is read as a step function.
"""

from dataclasses import dataclass
from datetime import datetime

from portfolio_tracker.core.models import Asset
from portfolio_tracker.core.utils.dates import DateLike, calendar_date


@dataclass(frozen=True)
class ValuationPoint:
    date: datetime
    unit_price: float


def build_valuation_series(asset: Asset) -> list[ValuationPoint]:
    """Explicit marks plus value/units of every investment with units, by date."""
    points = [ValuationPoint(v.date, v.unit_price) for v in asset.valuations]
    points.extend(
        ValuationPoint(inv.valuta, inv.value / inv.units)
        for inv in asset.investments
        if inv.units != 0
    )
    points.sort(key=lambda p: p.date)
    return points


def find_valuation(series: list[ValuationPoint], on: DateLike) -> ValuationPoint | None:
    """Latest point dated on or before the calendar day of on, else None."""
    day = calendar_date(on)
    result = None
    for point in series:
        if calendar_date(point.date) <= day:
            result = point
        else:
            break
    return result
