#!/usr/bin/env python3
"""
Report Printer

Prints the periodic report of one asset or the yearly portfolio report of a
portfolio document as a table, optionally exporting it to CSV.
"""

import argparse
import sys
from datetime import date
from pathlib import Path

import pandas as pd
from loguru import logger

from portfolio_tracker.core.analytics import (
    create_portfolio_report,
    create_report,
    get_year_range,
    portfolio_irr,
)
from portfolio_tracker.core.enums import AggregateBy
from portfolio_tracker.core.exceptions.portfolio import PortfolioException
from portfolio_tracker.infrastructure.storage import DocumentStore


def setup_logging(debug: bool = False):
    """Configure logging with loguru."""
    logger.remove()

    level = "DEBUG" if debug else "INFO"
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level=level,
    )


def main():
    parser = argparse.ArgumentParser(
        description="Print asset or portfolio reports of a portfolio document",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Quarterly report of the first asset of the second entity
  python print_report.py --document holdings.velfi --asset 1 0 --aggregate-by quarter

  # Portfolio report for 2023 exported to CSV
  python print_report.py --document holdings.velfi --year 2023 --output report-2023.csv
        """,
    )

    parser.add_argument("--document", type=Path, required=True, help="Portfolio document path")

    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument(
        "--asset", type=int, nargs=2, metavar=("ENTITY", "ASSET"), help="Asset position to report"
    )
    target.add_argument("--year", type=int, help="Calendar year of the portfolio report")
    target.add_argument("--years", action="store_true", help="List the reportable years")

    parser.add_argument(
        "--aggregate-by",
        choices=[a.value for a in AggregateBy],
        default=AggregateBy.YEAR.value,
        help="Asset report granularity (default: year)",
    )

    parser.add_argument("--no-fill-gaps", action="store_true", help="Skip inactive periods")

    parser.add_argument(
        "--as-of", type=date.fromisoformat, help="Date treated as today (YYYY-MM-DD)"
    )

    parser.add_argument("--output", type=Path, help="Also write the report table to this CSV")

    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    setup_logging(args.debug)

    try:
        portfolio = DocumentStore.open(args.document).portfolio

        if args.years:
            print(" ".join(str(year) for year in get_year_range(portfolio, args.as_of)))
            return 0

        if args.asset:
            entity_index, asset_index = args.asset
            try:
                asset = portfolio.entities[entity_index].assets[asset_index]
            except IndexError:
                logger.error(f"No asset at position {entity_index} {asset_index}")
                return 1
            report = create_report(
                asset, args.aggregate_by, fill_gaps=not args.no_fill_gaps, as_of=args.as_of
            )
            title = f"{report.name} ({report.currency.iso if report.currency else '-'})"
        else:
            report = create_portfolio_report(portfolio, args.year, as_of=args.as_of)
            irr = portfolio_irr(portfolio, args.as_of)
            title = f"{report.name} {report.year}"
            if irr is not None:
                title += f", IRR {irr:.2%}"

        frame = report.to_frame()
        with pd.option_context("display.max_columns", None, "display.width", 200):
            print(title)
            print(frame.to_string())

        if args.output:
            frame.to_csv(args.output)
            logger.success(f"Wrote {len(frame)} rows to {args.output}")
        return 0

    except PortfolioException as e:
        logger.exception(f"Report failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
