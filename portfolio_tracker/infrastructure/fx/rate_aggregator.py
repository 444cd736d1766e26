"""
FX rate aggregation.

Determines which dates a currency's rate history must cover, fetches a
fine-grained series for that span and keeps the last observation of every
month or quarter as the recorded history.
"""

import asyncio
from datetime import date

import pandas as pd
from loguru import logger

from portfolio_tracker.core.enums import RateFrequency
from portfolio_tracker.core.interfaces.rates import IRateSource
from portfolio_tracker.core.models import Currency, Portfolio, RatePoint
from portfolio_tracker.core.utils.dates import calendar_date, quarter_of, to_utc_datetime


def rate_bucket_key(day: date, frequency: RateFrequency) -> str:
    """"YYYY-MM" for monthly, "YYYY-Qn" for quarterly buckets."""
    if frequency == RateFrequency.MONTHLY:
        return f"{day.year:04d}-{day.month:02d}"
    return f"{day.year:04d}-Q{quarter_of(day.month)}"


def find_date_range(currency: Currency, portfolio: Portfolio) -> tuple[date, date] | None:
    """Span of dates the history of currency must cover.

    Union of every investment and revenue valuta of entities denominated in
    the currency and the dates already in its history; None when empty.
    """
    days = [calendar_date(point.date) for point in currency.rates]
    for entity in portfolio.entities:
        if entity.currency.iso != currency.iso:
            continue
        for asset in entity.assets:
            days.extend(calendar_date(valuta) for valuta in asset.transaction_dates())

    if not days:
        return None
    return min(days), max(days)


def downsample_rates(entries: dict[date, float], frequency: RateFrequency) -> list[RatePoint]:
    """Keep the chronologically latest entry of every bucket, ascending by date."""
    if not entries:
        return []

    frame = pd.DataFrame({"date": pd.to_datetime(list(entries)), "rate": list(entries.values())})
    frame["bucket"] = [rate_bucket_key(ts.date(), frequency) for ts in frame["date"]]
    latest = frame.sort_values("date").groupby("bucket", sort=False).tail(1).sort_values("date")

    return [
        RatePoint(date=to_utc_datetime(ts.to_pydatetime()), rate=float(rate))
        for ts, rate in zip(latest["date"], latest["rate"], strict=True)
    ]


class RateAggregator:
    """
    Refreshes recorded FX histories from a rate source.

    Refreshes of the same currency are serialised; the rate list is only
    replaced after the fetch and the downsampling both succeeded.
    """

    def __init__(self, source: IRateSource) -> None:
        self._source = source
        self._locks: dict[str, asyncio.Lock] = {}

    async def refresh_rates(
        self,
        currency: Currency,
        base_currency: Currency,
        portfolio: Portfolio,
        frequency: RateFrequency | str = RateFrequency.MONTHLY,
    ) -> bool:
        """Replace the rate history of currency with downsampled source rates.

        Returns:
            True if the history was replaced, False if there was nothing to do

        Raises:
            RateFetchError: If the source fails (the history is left untouched)
        """
        frequency = RateFrequency(frequency)
        if currency is base_currency or currency.iso == base_currency.iso:
            return False

        lock = self._locks.setdefault(currency.iso, asyncio.Lock())
        async with lock:
            span = find_date_range(currency, portfolio)
            if span is None:
                logger.debug(f"No dates to cover for {currency.iso}, skipping refresh")
                return False

            start, end = span
            table = await self._source.fetch_rate_series(
                base_currency.iso, currency.iso, start, end
            )

            entries: dict[date, float] = {}
            for day, rates in table.items():
                rate = rates.get(base_currency.iso)
                if rate is None:
                    logger.warning(f"No {base_currency.iso} rate for {currency.iso} on {day}")
                    continue
                entries[calendar_date(day)] = float(rate)

            currency.rates = downsample_rates(entries, frequency)
            logger.info(
                f"Refreshed {currency.iso}/{base_currency.iso} {frequency} rates "
                f"{start}..{end}: {len(entries)} -> {len(currency.rates)} points"
            )
            return True

    async def refresh_all(
        self, portfolio: Portfolio, frequency: RateFrequency | str = RateFrequency.MONTHLY
    ) -> list[str]:
        """Refresh every non-base currency one after another.

        Returns:
            Codes of the currencies whose history was replaced
        """
        refreshed = []
        for currency in list(portfolio.currencies):
            if await self.refresh_rates(currency, portfolio.base_currency, portfolio, frequency):
                refreshed.append(currency.iso)
        return refreshed
