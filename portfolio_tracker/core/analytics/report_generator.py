"""
Periodic asset and portfolio reports.

Turns an asset's irregular investment and revenue lines into one row per
year or quarter with running unit counts and mark-to-market valuation, and
rolls the yearly rows of every asset into a cross-portfolio report.
"""

from dataclasses import dataclass
from datetime import UTC, date, datetime

from loguru import logger

from portfolio_tracker.core.enums import AggregateBy, AssetType
from portfolio_tracker.core.models import (
    Asset,
    AssetReport,
    AssetReportRow,
    Currency,
    Entity,
    Portfolio,
    PortfolioReport,
    PortfolioReportRow,
)
from portfolio_tracker.core.utils.dates import DateLike, calendar_date, to_utc_datetime
from portfolio_tracker.core.utils.periods import ReportPeriod, iterate_periods

from .performance import asset_irr
from .valuation import ValuationPoint, build_valuation_series, find_valuation


@dataclass(frozen=True)
class _Event:
    date: datetime
    is_investment: bool
    value: float
    units: float
    fxrate: float | None


def _collect_events(asset: Asset) -> list[_Event]:
    events = [
        _Event(inv.valuta, True, inv.value, inv.units, inv.fxrate) for inv in asset.investments
    ]
    events.extend(_Event(rev.valuta, False, rev.value, 0.0, rev.fxrate) for rev in asset.revenues)
    events.sort(key=lambda e: e.date)
    return events


def _accumulate(row: AssetReportRow, event: _Event) -> None:
    value_in_base = event.value * (event.fxrate or 1.0)
    if event.is_investment:
        if event.value >= 0:
            row.invested += event.value
        else:
            row.divested += -event.value
        row.net_invested_in_base_currency += value_in_base
    else:
        if event.value >= 0:
            row.revenue += event.value
        else:
            row.cost += -event.value
        row.net_revenue_in_base_currency += value_in_base


def _apply_valuation(
    row: AssetReportRow,
    period: ReportPeriod,
    series: list[ValuationPoint],
    currency: Currency | None,
) -> None:
    """Mark the row at the period's last day; rows without a mark keep zeros."""
    mark = find_valuation(series, period.end_date())
    if mark is None:
        return
    row.valuation = mark.unit_price
    row.valuation_date = mark.date
    row.net_asset_value = mark.unit_price * row.end_units
    rate = currency.rate_on(period.end_datetime()) if currency is not None else 1.0
    row.net_asset_value_in_base_currency = row.net_asset_value * rate


def _total_row(rows: list[AssetReportRow]) -> AssetReportRow:
    total = AssetReportRow(date="Total")
    for row in rows:
        total.invested += row.invested
        total.divested += row.divested
        total.revenue += row.revenue
        total.cost += row.cost
        total.net_invested_in_base_currency += row.net_invested_in_base_currency
        total.net_revenue_in_base_currency += row.net_revenue_in_base_currency
        total.commitments += row.commitments
    if rows:
        first, last = rows[0], rows[-1]
        total.start_units = first.start_units
        total.end_units = last.end_units
        total.valuation = last.valuation
        total.valuation_date = last.valuation_date
        total.net_asset_value = last.net_asset_value
        total.net_asset_value_in_base_currency = last.net_asset_value_in_base_currency
    return total


def _today(as_of: DateLike | None) -> date:
    return calendar_date(as_of) if as_of is not None else datetime.now(UTC).date()


def create_report(
    asset: Asset,
    aggregate_by: AggregateBy | str = AggregateBy.YEAR,
    fill_gaps: bool = True,
    as_of: DateLike | None = None,
) -> AssetReport:
    """Build the periodic report of an asset.

    Args:
        asset: Asset to report on (not modified)
        aggregate_by: Row granularity, year or quarter
        fill_gaps: Emit a row for every period from the first active one up
            to the later of the last active one and the current period
        as_of: Date treated as today (defaults to the current date)

    Returns:
        AssetReport with ordered rows and a total row
    """
    aggregate_by = AggregateBy(aggregate_by)
    currency = asset.currency

    rows_by_period: dict[ReportPeriod, AssetReportRow] = {}
    unit_deltas: dict[ReportPeriod, float] = {}
    for event in _collect_events(asset):
        period = ReportPeriod.containing(event.date, aggregate_by)
        row = rows_by_period.setdefault(period, AssetReportRow(date=period.key))
        _accumulate(row, event)
        if event.is_investment:
            unit_deltas[period] = unit_deltas.get(period, 0.0) + event.units

    commitments_by_period: dict[ReportPeriod, float] = {}
    for commitment in asset.commitments:
        period = ReportPeriod.containing(commitment.valuta, aggregate_by)
        commitments_by_period[period] = commitments_by_period.get(period, 0.0) + commitment.value

    periods = sorted(rows_by_period)
    if periods and fill_gaps:
        current = ReportPeriod.containing(_today(as_of), aggregate_by)
        periods = iterate_periods(periods[0], max(periods[-1], current))

    series = build_valuation_series(asset)
    rows: list[AssetReportRow] = []
    carried_units = 0.0
    for period in periods:
        row = rows_by_period.get(period) or AssetReportRow(date=period.key)
        row.start_units = carried_units
        row.end_units = carried_units + unit_deltas.get(period, 0.0)
        row.commitments = commitments_by_period.get(period, 0.0)
        _apply_valuation(row, period, series, currency)
        carried_units = row.end_units
        rows.append(row)

    total = _total_row(rows)
    if rows:
        total.irr = asset_irr(asset, as_of)

    logger.debug(f"Report for {asset.name!r} by {aggregate_by}: {len(rows)} rows")
    return AssetReport(
        name=asset.name,
        aggregated_by=aggregate_by,
        type=asset.type,
        unit=asset.unit,
        currency=currency,
        total_row=total,
        rows=rows,
    )


def _placeholder_row(entity: Entity, asset: Asset) -> PortfolioReportRow:
    return PortfolioReportRow(
        entity_name=entity.name,
        country=entity.country,
        asset_name=asset.name,
        type=asset.type,
        currency=entity.currency,
    )


def _commitment_columns(
    asset: Asset, year_end: datetime
) -> tuple[float | None, float, float | None]:
    """(committed, capital deployed, open commitment) up to year_end."""
    total_invested = sum(
        (-inv.value for inv in asset.investments if inv.value < 0 and inv.valuta <= year_end), 0.0
    )
    commitments = [c for c in asset.commitments if c.valuta <= year_end]
    if not commitments:
        return None, total_invested, None
    committed = sum((c.value for c in commitments), 0.0)
    return committed, total_invested, committed - total_invested


def create_portfolio_report(
    portfolio: Portfolio, year: int, as_of: DateLike | None = None
) -> PortfolioReport:
    """Roll the yearly rows of every asset into one report for year.

    Every asset contributes exactly one row; assets without a row for the
    year contribute a placeholder. The total row only sums base-currency
    columns and carries the base currency.
    """
    year_key = ReportPeriod(year, 1, AggregateBy.YEAR).key
    year_end = ReportPeriod(year, 1, AggregateBy.YEAR).end_datetime()
    if as_of is not None:
        year_end = min(year_end, to_utc_datetime(as_of))
    rows: list[PortfolioReportRow] = []

    for entity, asset in portfolio.entity_assets():
        year_row = create_report(asset, AggregateBy.YEAR, as_of=as_of).row(year_key)
        if year_row is None:
            rows.append(_placeholder_row(entity, asset))
            continue

        committed, total_invested, open_commitment = _commitment_columns(asset, year_end)
        rows.append(
            PortfolioReportRow(
                entity_name=entity.name,
                country=entity.country,
                asset_name=asset.name,
                type=asset.type,
                currency=entity.currency,
                invested=year_row.invested,
                divested=year_row.divested,
                start_units=year_row.start_units,
                end_units=year_row.end_units,
                net_revenue_in_base_currency=year_row.net_revenue_in_base_currency,
                net_invested_in_base_currency=year_row.net_invested_in_base_currency,
                net_asset_value_in_base_currency=year_row.net_asset_value_in_base_currency,
                valuation_date=year_row.valuation_date,
                irr=asset_irr(asset, year_end),
                committed=committed,
                total_invested=total_invested,
                open_commitment=open_commitment,
            )
        )

    total = PortfolioReportRow(
        entity_name="",
        country="",
        asset_name="Total",
        type=AssetType.OTHER,
        currency=portfolio.base_currency,
        net_revenue_in_base_currency=0.0,
        net_invested_in_base_currency=0.0,
    )
    for row in rows:
        total.net_invested_in_base_currency += row.net_invested_in_base_currency or 0.0
        total.net_revenue_in_base_currency += row.net_revenue_in_base_currency or 0.0
        total.net_asset_value_in_base_currency += row.net_asset_value_in_base_currency

    logger.info(f"Portfolio report {year}: {len(rows)} asset rows")
    name = portfolio.name or "Portfolio"
    return PortfolioReport(name=name, year=year, total_row=total, rows=rows)


def get_year_range(portfolio: Portfolio, today: DateLike | None = None) -> list[int]:
    """Inclusive list of calendar years spanned by investments and revenues.

    Both bounds start at the current year, so the range always reaches it.
    """
    current_year = _today(today).year
    first = last = current_year
    for asset in portfolio.all_assets():
        for valuta in asset.transaction_dates():
            year = calendar_date(valuta).year
            first = min(first, year)
            last = max(last, year)
    return list(range(first, last + 1))
