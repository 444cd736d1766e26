"""
FX rate source interfaces.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import TypeAlias

RateTable: TypeAlias = dict[date, dict[str, float]]


class IRateSource(ABC):
    """Abstract interface for FX rate series providers."""

    @abstractmethod
    async def fetch_rate_series(
        self, base_iso: str, target_iso: str, start: date, end: date
    ) -> RateTable:
        """Rates for converting target_iso amounts, per calendar day in [start, end].

        The returned mapping goes from day to a per-currency table; the
        column named base_iso holds the rate into the base currency.

        Raises:
            RateFetchError: If the series cannot be retrieved
        """
        pass
