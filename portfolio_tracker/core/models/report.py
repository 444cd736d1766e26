"""
Report result models.

Rows are plain value holders; the report generator fills them and never
reads the graph back through them.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import pandas as pd

from portfolio_tracker.core.enums import AggregateBy, AssetType, AssetUnit
from portfolio_tracker.core.utils.dates import format_iso_millis

from .currency import Currency


def _iso_or_none(value: datetime | None) -> str | None:
    return format_iso_millis(value) if value is not None else None


@dataclass
class AssetReportRow:
    """Figures of one asset for one period (or the total row)."""

    date: str
    invested: float = 0.0
    divested: float = 0.0
    revenue: float = 0.0
    cost: float = 0.0
    start_units: float = 0.0
    end_units: float = 0.0
    valuation: float = 0.0
    valuation_date: datetime | None = None
    net_asset_value: float = 0.0
    net_invested_in_base_currency: float = 0.0
    net_revenue_in_base_currency: float = 0.0
    net_asset_value_in_base_currency: float = 0.0
    commitments: float = 0.0
    irr: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "invested": self.invested,
            "divested": self.divested,
            "revenue": self.revenue,
            "cost": self.cost,
            "startUnits": self.start_units,
            "endUnits": self.end_units,
            "valuation": self.valuation,
            "valuationDate": _iso_or_none(self.valuation_date),
            "netAssetValue": self.net_asset_value,
            "netInvestedInBaseCurrency": self.net_invested_in_base_currency,
            "netRevenueInBaseCurrency": self.net_revenue_in_base_currency,
            "netAssetValueInBaseCurrency": self.net_asset_value_in_base_currency,
            "commitments": self.commitments,
            "irr": self.irr,
        }


@dataclass
class AssetReport:
    """Periodic report of a single asset."""

    name: str
    aggregated_by: AggregateBy
    type: AssetType
    unit: AssetUnit
    currency: Currency | None
    total_row: AssetReportRow
    rows: list[AssetReportRow] = field(default_factory=list)

    def row(self, key: str) -> AssetReportRow | None:
        """Row for a period key, if the period was emitted."""
        for row in self.rows:
            if row.date == key:
                return row
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "aggregatedBy": self.aggregated_by.value,
            "type": self.type.value,
            "unit": self.unit.value,
            "currency": self.currency.iso if self.currency else None,
            "totalRow": self.total_row.to_dict(),
            "rows": [row.to_dict() for row in self.rows],
        }

    def to_frame(self) -> pd.DataFrame:
        """Rows plus the total row as a DataFrame indexed by period key."""
        records = [row.to_dict() for row in [*self.rows, self.total_row]]
        return pd.DataFrame.from_records(records).set_index("date")


@dataclass
class PortfolioReportRow:
    """One asset's figures for a reporting year.

    Placeholder rows for inactive assets keep None in every figure except
    the base-currency net asset value.
    """

    entity_name: str
    country: str
    asset_name: str
    type: AssetType
    currency: Currency | None
    invested: float | None = None
    divested: float | None = None
    start_units: float | None = None
    end_units: float | None = None
    net_revenue_in_base_currency: float | None = None
    net_invested_in_base_currency: float | None = None
    net_asset_value_in_base_currency: float = 0.0
    valuation_date: datetime | None = None
    irr: float | None = None
    committed: float | None = None
    total_invested: float | None = None
    open_commitment: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "entityName": self.entity_name,
            "country": self.country,
            "assetName": self.asset_name,
            "type": self.type.value,
            "currency": self.currency.iso if self.currency else None,
            "invested": self.invested,
            "divested": self.divested,
            "startUnits": self.start_units,
            "endUnits": self.end_units,
            "netRevenueInBaseCurrency": self.net_revenue_in_base_currency,
            "netInvestedInBaseCurrency": self.net_invested_in_base_currency,
            "netAssetValueInBaseCurrency": self.net_asset_value_in_base_currency,
            "valuationDate": _iso_or_none(self.valuation_date),
            "irr": self.irr,
            "committed": self.committed,
            "totalInvested": self.total_invested,
            "openCommitment": self.open_commitment,
        }


@dataclass
class PortfolioReport:
    """Cross-portfolio report for one calendar year."""

    name: str
    year: int
    total_row: PortfolioReportRow
    rows: list[PortfolioReportRow] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "year": self.year,
            "totalRow": self.total_row.to_dict(),
            "rows": [row.to_dict() for row in self.rows],
        }

    def to_frame(self) -> pd.DataFrame:
        records = [row.to_dict() for row in [*self.rows, self.total_row]]
        return pd.DataFrame.from_records(records)
