"""
Asset domain model.

An asset is an investment position held by an entity. It owns four
transaction lists and points back to its owning entity.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from portfolio_tracker.core.enums import (
    DEFAULT_ASSET_TYPE,
    DEFAULT_ASSET_UNIT,
    AssetType,
    AssetUnit,
)
from portfolio_tracker.core.utils.validation import remove_at

from .transactions import Investment, Revenue, Valuation

if TYPE_CHECKING:
    from .currency import Currency
    from .entity import Entity


@dataclass(eq=False)
class Asset:
    """An investment position.

    The entity back-reference is set by Entity.add_asset and by the
    document loader; it is never serialized.
    """

    name: str
    type: AssetType = DEFAULT_ASSET_TYPE
    unit: AssetUnit = DEFAULT_ASSET_UNIT
    investments: list[Investment] = field(default_factory=list)
    revenues: list[Revenue] = field(default_factory=list)
    valuations: list[Valuation] = field(default_factory=list)
    commitments: list[Investment] = field(default_factory=list)
    entity: "Entity | None" = field(default=None, repr=False)

    @property
    def currency(self) -> "Currency | None":
        """Denomination of the asset (the owning entity's currency)."""
        return self.entity.currency if self.entity is not None else None

    def transaction_dates(self) -> Iterator[datetime]:
        """Valuta dates of all investments and revenues."""
        for investment in self.investments:
            yield investment.valuta
        for revenue in self.revenues:
            yield revenue.valuta

    def units_held(self, as_of: datetime | None = None) -> float:
        """Sum of unit deltas up to as_of (all lines when None)."""
        return sum(
            (inv.units for inv in self.investments if as_of is None or inv.valuta <= as_of),
            0.0,
        )

    def add_investment(self, investment: Investment) -> Investment:
        self.investments.append(investment)
        return investment

    def delete_investment(self, index: int) -> bool:
        return remove_at(self.investments, index)

    def add_revenue(self, revenue: Revenue) -> Revenue:
        self.revenues.append(revenue)
        return revenue

    def delete_revenue(self, index: int) -> bool:
        return remove_at(self.revenues, index)

    def add_valuation(self, valuation: Valuation) -> Valuation:
        self.valuations.append(valuation)
        return valuation

    def delete_valuation(self, index: int) -> bool:
        return remove_at(self.valuations, index)

    def add_commitment(self, commitment: Investment) -> Investment:
        self.commitments.append(commitment)
        return commitment

    def delete_commitment(self, index: int) -> bool:
        return remove_at(self.commitments, index)
