#!/usr/bin/env python3
"""
FX Rate Refresher

Refreshes the recorded exchange rate history of every non-base currency in a
portfolio document, either from the Frankfurter API or from a local CSV file,
and saves the document if anything changed.
"""

import argparse
import asyncio
import sys
from pathlib import Path

from loguru import logger
from tqdm import tqdm

from portfolio_tracker.core.enums import RateFrequency
from portfolio_tracker.core.exceptions.portfolio import PortfolioException, RateFetchError
from portfolio_tracker.core.interfaces.rates import IRateSource
from portfolio_tracker.infrastructure.fx import CsvRateSource, FrankfurterRateSource, RateAggregator
from portfolio_tracker.infrastructure.storage import DocumentStore


def setup_logging(debug: bool = False):
    """Configure logging with loguru."""
    logger.remove()

    level = "DEBUG" if debug else "INFO"
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level,
    )


async def refresh_document(
    store: DocumentStore, source: IRateSource, frequency: RateFrequency, only: list[str] | None
) -> tuple[list[str], list[str]]:
    """Refresh currencies one by one; failures are logged and skipped."""
    portfolio = store.portfolio
    aggregator = RateAggregator(source)
    refreshed, failed = [], []

    currencies = [c for c in portfolio.currencies if c is not portfolio.base_currency]
    if only:
        currencies = [c for c in currencies if c.iso in only]

    for currency in tqdm(currencies, desc="Refreshing rates", unit="currency"):
        try:
            changed = await aggregator.refresh_rates(
                currency, portfolio.base_currency, portfolio, frequency
            )
            if changed:
                refreshed.append(currency.iso)
        except RateFetchError as e:
            logger.error(str(e))
            failed.append(currency.iso)

    return refreshed, failed


def main():
    parser = argparse.ArgumentParser(
        description="Refresh FX rate histories of a portfolio document",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Monthly rates for every currency from the Frankfurter API
  python refresh_rates.py --document holdings.velfi

  # Quarterly USD rates from a local file
  python refresh_rates.py --document holdings.velfi --frequency quarterly \
      --csv usd.csv --currency USD
        """,
    )

    parser.add_argument("--document", type=Path, required=True, help="Portfolio document path")

    parser.add_argument(
        "--frequency",
        choices=[f.value for f in RateFrequency],
        default=RateFrequency.MONTHLY.value,
        help="Rate history granularity (default: monthly)",
    )

    parser.add_argument("--currency", nargs="+", help="Only refresh these currency codes")

    parser.add_argument(
        "--csv", type=Path, help="Read rates from a CSV file instead of the Frankfurter API"
    )

    parser.add_argument("--timeout", type=float, help="HTTP timeout in seconds (default: none)")

    parser.add_argument(
        "--dry-run", action="store_true", help="Refresh in memory without saving the document"
    )

    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    if args.csv and (not args.currency or len(args.currency) != 1):
        parser.error("--csv requires exactly one --currency")

    setup_logging(args.debug)

    if args.csv:
        source: IRateSource = CsvRateSource(args.csv, args.currency[0])
    else:
        source = FrankfurterRateSource(timeout=args.timeout)

    try:
        store = DocumentStore.open(args.document)
        refreshed, failed = asyncio.run(
            refresh_document(store, source, RateFrequency(args.frequency), args.currency)
        )

        if args.dry_run:
            logger.info(f"Dry run, not saving. Refreshed: {', '.join(refreshed) or 'none'}")
        elif store.save_if_dirty():
            logger.success(f"Refreshed {', '.join(refreshed)} and saved {args.document}")
        else:
            logger.info("Rates unchanged, nothing to save")

        return 1 if failed else 0

    except PortfolioException as e:
        logger.exception(f"Rate refresh failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
