"""
Frankfurter HTTP rate source.

Daily ECB reference rates from the public Frankfurter API.
"""

import asyncio
import threading
from datetime import date
from typing import Any

import requests
from cachetools import TTLCache
from loguru import logger

from portfolio_tracker.core.constants import (
    FRANKFURTER_BASE_URL,
    FRANKFURTER_CACHE_SIZE,
    FRANKFURTER_CACHE_TTL,
)
from portfolio_tracker.core.exceptions.portfolio import RateFetchError
from portfolio_tracker.core.interfaces.rates import IRateSource, RateTable


class FrankfurterRateSource(IRateSource):
    """Fetches time series from api.frankfurter.dev.

    No timeout is applied unless one is configured; a hanging request
    blocks the refresh that issued it. Successful responses are cached per
    (base, target, start, end) for cache_ttl seconds.
    """

    def __init__(
        self,
        base_url: str = FRANKFURTER_BASE_URL,
        session: requests.Session | None = None,
        timeout: float | None = None,
        cache_ttl: float = FRANKFURTER_CACHE_TTL,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        if session is None:
            session = requests.Session()
            session.headers.update(
                {"User-Agent": "portfolio-tracker/1.0", "Accept": "application/json"}
            )
        self.session = session
        self.timeout = timeout

        # Fetches run in executor threads
        self._cache_lock = threading.Lock()
        self._responses: TTLCache[tuple[str, str, date, date], RateTable] = TTLCache(
            maxsize=FRANKFURTER_CACHE_SIZE, ttl=cache_ttl
        )

    def build_url(self, start: date, end: date) -> str:
        return f"{self.base_url}/{start.isoformat()}..{end.isoformat()}"

    def clear_cache(self) -> None:
        with self._cache_lock:
            self._responses.clear()

    async def fetch_rate_series(
        self, base_iso: str, target_iso: str, start: date, end: date
    ) -> RateTable:
        """Fetch the series in the default executor so the event loop stays free."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._fetch, base_iso, target_iso, start, end)

    def _fetch(self, base_iso: str, target_iso: str, start: date, end: date) -> RateTable:
        key = (base_iso, target_iso, start, end)
        with self._cache_lock:
            if key in self._responses:
                logger.debug(f"Cache hit for {target_iso}/{base_iso} {start}..{end}")
                return self._responses[key]

        table = self._request(base_iso, target_iso, start, end)
        with self._cache_lock:
            self._responses[key] = table
        return table

    def _request(self, base_iso: str, target_iso: str, start: date, end: date) -> RateTable:
        url = self.build_url(start, end)
        params = {"base": target_iso, "symbols": base_iso}
        logger.debug(f"Fetching {url} {params}")

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload: dict[str, Any] = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"Rate request {url} failed: {e}")
            raise RateFetchError(base_iso, target_iso, str(e)) from e
        except ValueError as e:
            raise RateFetchError(base_iso, target_iso, f"invalid JSON response: {e}") from e

        try:
            return {
                date.fromisoformat(day): {code: float(rate) for code, rate in rates.items()}
                for day, rates in payload["rates"].items()
            }
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise RateFetchError(base_iso, target_iso, f"unexpected response shape: {e}") from e
