"""
Cash-flow and valuation line models.

Signs follow the document convention: negative investment units/values
are capital deployed (purchases), positive ones are returns of capital.
"""

from dataclasses import dataclass
from datetime import datetime

from portfolio_tracker.core.utils.dates import to_utc_datetime


@dataclass
class Investment:
    """A dated capital movement with a unit delta.

    Also used for capital commitment lines.
    """

    valuta: datetime
    description: str
    units: float
    value: float
    fxrate: float | None = None  # Rate to base currency at valuta; None means 1
    doc: str = ""

    def __post_init__(self) -> None:
        self.valuta = to_utc_datetime(self.valuta)

    @property
    def effective_fxrate(self) -> float:
        return self.fxrate if self.fxrate else 1.0

    def value_in_base_currency(self) -> float:
        return self.value * self.effective_fxrate


@dataclass
class Revenue:
    """A dated cash flow without units.

    Positive values are distributions, dividends or interest received;
    negative values are costs or fees charged.
    """

    valuta: datetime
    description: str
    value: float
    fxrate: float | None = None
    doc: str = ""

    def __post_init__(self) -> None:
        self.valuta = to_utc_datetime(self.valuta)

    @property
    def effective_fxrate(self) -> float:
        return self.fxrate if self.fxrate else 1.0

    def value_in_base_currency(self) -> float:
        return self.value * self.effective_fxrate


@dataclass
class Valuation:
    """An explicit unit price mark."""

    date: datetime
    unit_price: float
    doc: str = ""

    def __post_init__(self) -> None:
        self.date = to_utc_datetime(self.date)
