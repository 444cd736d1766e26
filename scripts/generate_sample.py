#!/usr/bin/env python3
"""
Sample Portfolio Generator

Writes a reproducible portfolio document with a few entities in different
currencies, each holding assets with capital calls, distributions, yearly
valuations and a commitment. Useful for trying reports without real data.
"""

import argparse
import sys
from datetime import UTC, datetime
from pathlib import Path

import numpy as np
from loguru import logger

from portfolio_tracker.core.enums import AssetType, AssetUnit
from portfolio_tracker.core.exceptions.portfolio import PortfolioException
from portfolio_tracker.core.models import Asset, Entity, Investment, Portfolio, Revenue, Valuation
from portfolio_tracker.infrastructure.settings import AppSettings, new_portfolio
from portfolio_tracker.infrastructure.storage import DocumentStore

SAMPLE_ENTITIES = [
    ("Alpine Holding AG", "CH", "CHF"),
    ("Atlantic Ventures LP", "US", "USD"),
    ("Rhein Capital GmbH", "DE", "EUR"),
]
ASSET_TYPES = [AssetType.EQUITY, AssetType.DEBT, AssetType.CONVERTIBLE, AssetType.LISTED_EQUITY]


def _utc(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=UTC)


def generate_asset(rng: np.random.Generator, name: str, start_year: int, end_year: int) -> Asset:
    """One asset with a commitment drawn down over the first years."""
    asset_type = ASSET_TYPES[int(rng.integers(len(ASSET_TYPES)))]
    unit_price = float(rng.uniform(50, 200))
    commitment = round(float(rng.uniform(1, 5)) * 100_000, -3)
    asset = Asset(name=name, type=asset_type, unit=AssetUnit.SHARES)
    asset.add_commitment(
        Investment(_utc(start_year, 1, 15), "Commitment", units=0.0, value=commitment)
    )

    drawn = 0.0
    for year in range(start_year, end_year + 1):
        if drawn < commitment:
            value = min(commitment - drawn, round(commitment * float(rng.uniform(0.2, 0.4)), -2))
            units = round(value / unit_price, 4)
            month = int(rng.integers(1, 13))
            asset.add_investment(
                Investment(_utc(year, month, 1), f"Capital call {year}", -units, -value)
            )
            drawn += value

        if year > start_year and rng.random() < 0.6:
            distribution = round(drawn * float(rng.uniform(0.02, 0.08)), 2)
            asset.add_revenue(Revenue(_utc(year, 11, 30), f"Distribution {year}", distribution))

        unit_price *= float(np.exp(rng.normal(0.06, 0.15)))
        asset.add_valuation(Valuation(_utc(year, 12, 31), round(unit_price, 2)))

    return asset


def generate_portfolio(
    seed: int, start_year: int, end_year: int, assets_per_entity: int
) -> Portfolio:
    rng = np.random.default_rng(seed)
    portfolio = new_portfolio(AppSettings(), name="Sample Portfolio")

    for entity_name, country, iso in SAMPLE_ENTITIES:
        entity = portfolio.add_entity(
            Entity(
                name=entity_name,
                currency=portfolio.get_or_create_currency(iso),
                country=country,
            )
        )
        for i in range(assets_per_entity):
            first_year = int(rng.integers(start_year, end_year + 1))
            name = f"{entity_name.split()[0]} Fund {i + 1}"
            entity.add_asset(generate_asset(rng, name, first_year, end_year))

    return portfolio


def setup_logging(debug: bool = False):
    """Configure logging with loguru."""
    logger.remove()

    level = "DEBUG" if debug else "INFO"
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level,
    )


def main():
    parser = argparse.ArgumentParser(description="Generate a sample portfolio document")

    parser.add_argument("--output", type=Path, default=Path("sample.velfi"), help="Output path")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--start-year", type=int, default=2018, help="First year (default: 2018)")
    parser.add_argument("--end-year", type=int, default=2024, help="Last year (default: 2024)")
    parser.add_argument("--assets", type=int, default=2, help="Assets per entity (default: 2)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    if args.start_year > args.end_year:
        logger.error("Start year must be before or equal to end year")
        return 1

    setup_logging(args.debug)

    try:
        portfolio = generate_portfolio(args.seed, args.start_year, args.end_year, args.assets)
        DocumentStore(portfolio).save_as(args.output)
        logger.success(f"Wrote sample portfolio to {args.output}")
        return 0
    except PortfolioException as e:
        logger.exception(f"Sample generation failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
