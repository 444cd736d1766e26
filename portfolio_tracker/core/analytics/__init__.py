"""
Portfolio analytics: periodic reports, valuation series and XIRR.
"""

from .performance import asset_cashflows, asset_irr, portfolio_cashflows, portfolio_irr
from .report_generator import create_portfolio_report, create_report, get_year_range
from .xirr import CashFlow, bisection_xirr, newton_xirr, xirr, xnpv, xnpv_derivative

__all__ = [
    "CashFlow",
    "asset_cashflows",
    "asset_irr",
    "bisection_xirr",
    "create_portfolio_report",
    "create_report",
    "get_year_range",
    "newton_xirr",
    "portfolio_cashflows",
    "portfolio_irr",
    "xirr",
    "xnpv",
    "xnpv_derivative",
]
