"""
CSV file rate source.

Reads a table with a date column and one column per currency code holding
the rate into that currency, one row per day.
"""

from datetime import date
from pathlib import Path

import pandas as pd
from loguru import logger

from portfolio_tracker.core.exceptions.portfolio import RateFetchError
from portfolio_tracker.core.interfaces.rates import IRateSource, RateTable


class CsvRateSource(IRateSource):
    """Rate series for one target currency loaded from a CSV file."""

    def __init__(self, file_path: Path | str, target_iso: str) -> None:
        self.file_path = Path(file_path)
        self.target_iso = target_iso

    async def fetch_rate_series(
        self, base_iso: str, target_iso: str, start: date, end: date
    ) -> RateTable:
        if target_iso != self.target_iso:
            reason = f"{self.file_path.name} holds {self.target_iso} rates"
            raise RateFetchError(base_iso, target_iso, reason)

        try:
            frame = pd.read_csv(self.file_path, parse_dates=["date"])
        except (OSError, ValueError, pd.errors.ParserError) as e:
            logger.error(f"Failed to read rate file {self.file_path}: {e}")
            raise RateFetchError(base_iso, target_iso, f"cannot read {self.file_path.name}") from e

        if base_iso not in frame.columns:
            reason = f"no {base_iso} column in {self.file_path.name}"
            raise RateFetchError(base_iso, target_iso, reason)

        days = frame["date"].dt.date
        window = frame[(days >= start) & (days <= end)].dropna(subset=[base_iso])
        logger.debug(f"Read {len(window)} {target_iso} rates from {self.file_path.name}")
        return {
            ts.date(): {base_iso: float(rate)}
            for ts, rate in zip(window["date"], window[base_iso], strict=True)
        }
