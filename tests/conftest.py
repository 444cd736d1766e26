"""
Shared fixtures: a small two-entity portfolio with known report figures.

Alpine Holding (CHF, base currency) holds Fund A:
    2020-03-15  buy 10 units for 1000
    2021-12-31  distribution 50, valuation 120 per unit
    2022-02-01  fee 10
    2022-06-01  sell 5 units for 600

Atlantic Ventures (USD, rates 0.90 from 2020-01-01, 0.95 from 2021-06-30)
holds Fund B:
    2021-01-10  commitment 5000
    2021-05-01  buy 20 units for 2000 at fxrate 0.92
"""

from datetime import date

import pytest

from portfolio_tracker.core.enums import AssetType
from portfolio_tracker.core.models import (
    Asset,
    Currency,
    Entity,
    Investment,
    Portfolio,
    RatePoint,
    Revenue,
    Valuation,
)


@pytest.fixture
def chf() -> Currency:
    return Currency(iso="CHF")


@pytest.fixture
def usd() -> Currency:
    return Currency(
        iso="USD",
        rates=[RatePoint(date(2020, 1, 1), 0.90), RatePoint(date(2021, 6, 30), 0.95)],
    )


@pytest.fixture
def fund_a() -> Asset:
    return Asset(
        name="Fund A",
        investments=[
            Investment(date(2020, 3, 15), "Initial purchase", units=-10.0, value=-1000.0),
            Investment(date(2022, 6, 1), "Partial sale", units=5.0, value=600.0),
        ],
        revenues=[
            Revenue(date(2021, 12, 31), "Distribution", value=50.0),
            Revenue(date(2022, 2, 1), "Management fee", value=-10.0),
        ],
        valuations=[Valuation(date(2021, 12, 31), unit_price=120.0)],
    )


@pytest.fixture
def fund_b() -> Asset:
    return Asset(
        name="Fund B",
        type=AssetType.DEBT,
        investments=[
            Investment(date(2021, 5, 1), "Capital call", units=-20.0, value=-2000.0, fxrate=0.92),
        ],
        commitments=[Investment(date(2021, 1, 10), "Commitment", units=0.0, value=5000.0)],
    )


@pytest.fixture
def portfolio(chf: Currency, usd: Currency, fund_a: Asset, fund_b: Asset) -> Portfolio:
    """Sample portfolio sharing one object per currency code."""
    portfolio = Portfolio(base_currency=chf, name="Family Office", currencies=[chf, usd])
    alpine = portfolio.add_entity(Entity(name="Alpine Holding", currency=chf, country="CH"))
    alpine.add_asset(fund_a)
    atlantic = portfolio.add_entity(Entity(name="Atlantic Ventures", currency=usd, country="US"))
    atlantic.add_asset(fund_b)
    return portfolio
