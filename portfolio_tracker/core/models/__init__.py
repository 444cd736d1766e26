"""
Portfolio document model.
"""

from .asset import Asset
from .currency import Currency, RatePoint
from .entity import Entity
from .portfolio import Portfolio
from .report import AssetReport, AssetReportRow, PortfolioReport, PortfolioReportRow
from .transactions import Investment, Revenue, Valuation

__all__ = [
    "Asset",
    "AssetReport",
    "AssetReportRow",
    "Currency",
    "Entity",
    "Investment",
    "Portfolio",
    "PortfolioReport",
    "PortfolioReportRow",
    "RatePoint",
    "Revenue",
    "Valuation",
]
