"""
Return analytics on top of the XIRR solver.

Builds investor-perspective cash flows for an asset or a whole portfolio and
solves them. Units held are negative under the document sign convention
(purchases carry negative units), so the terminal liquidation flow is
-(unit price x units held).
"""

from datetime import UTC, datetime

from loguru import logger

from portfolio_tracker.core.exceptions.portfolio import ConvergenceError, XirrValidationError
from portfolio_tracker.core.models import Asset, Portfolio
from portfolio_tracker.core.utils.dates import DateLike, to_utc_datetime

from .valuation import build_valuation_series, find_valuation
from .xirr import CashFlow, xirr


def _terminal_value(asset: Asset, as_of: datetime) -> float:
    """Liquidation value of the units held at as_of, in the asset's currency."""
    units = asset.units_held(as_of)
    mark = find_valuation(build_valuation_series(asset), as_of)
    if mark is None or units == 0:
        return 0.0
    return -(mark.unit_price * units)


def asset_cashflows(asset: Asset, as_of: DateLike | None = None) -> list[CashFlow]:
    """Investment and revenue flows up to as_of plus the terminal value at as_of."""
    moment = to_utc_datetime(as_of) if as_of is not None else datetime.now(UTC)
    flows = [CashFlow(inv.valuta, inv.value) for inv in asset.investments if inv.valuta <= moment]
    flows.extend(CashFlow(rev.valuta, rev.value) for rev in asset.revenues if rev.valuta <= moment)

    terminal = _terminal_value(asset, moment)
    if terminal != 0:
        flows.append(CashFlow(moment, terminal))
    return flows


def portfolio_cashflows(portfolio: Portfolio, as_of: DateLike | None = None) -> list[CashFlow]:
    """All asset flows converted to the base currency.

    Transaction lines use their recorded fxrate; terminal values use the
    currency's effective rate at as_of.
    """
    moment = to_utc_datetime(as_of) if as_of is not None else datetime.now(UTC)
    flows: list[CashFlow] = []
    terminal_total = 0.0

    for entity, asset in portfolio.entity_assets():
        flows.extend(
            CashFlow(inv.valuta, inv.value_in_base_currency())
            for inv in asset.investments
            if inv.valuta <= moment
        )
        flows.extend(
            CashFlow(rev.valuta, rev.value_in_base_currency())
            for rev in asset.revenues
            if rev.valuta <= moment
        )
        if entity.currency is portfolio.base_currency:
            rate = 1.0
        else:
            rate = entity.currency.rate_on(moment)
        terminal_total += _terminal_value(asset, moment) * rate

    if terminal_total != 0:
        flows.append(CashFlow(moment, terminal_total))
    return flows


def _solve_or_none(flows: list[CashFlow], label: str) -> float | None:
    try:
        return xirr(flows)
    except (XirrValidationError, ConvergenceError) as e:
        logger.debug(f"No IRR for {label}: {e}")
        return None


def asset_irr(asset: Asset, as_of: DateLike | None = None) -> float | None:
    """Annualized return of an asset, or None when it cannot be computed."""
    return _solve_or_none(asset_cashflows(asset, as_of), f"asset {asset.name!r}")


def portfolio_irr(portfolio: Portfolio, as_of: DateLike | None = None) -> float | None:
    """Annualized return of the whole portfolio in the base currency, or None."""
    return _solve_or_none(portfolio_cashflows(portfolio, as_of), f"portfolio {portfolio.name!r}")
