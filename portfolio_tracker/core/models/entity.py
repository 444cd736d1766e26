"""
Entity domain model.

An entity is a legal holding vehicle owning an ordered list of assets.
"""

from dataclasses import dataclass, field

from portfolio_tracker.core.utils.validation import remove_at

from .asset import Asset
from .currency import Currency


@dataclass(eq=False)
class Entity:
    """A legal holding vehicle.

    currency must be the same object as the matching member of the
    portfolio's currency list.
    """

    name: str
    currency: Currency
    address: str = ""
    country: str = ""
    docfolder: str = ""
    assets: list[Asset] = field(default_factory=list)

    def __post_init__(self) -> None:
        for asset in self.assets:
            asset.entity = self

    def add_asset(self, asset: Asset) -> Asset:
        """Append an asset and point its back-reference at this entity."""
        asset.entity = self
        self.assets.append(asset)
        return asset

    def delete_asset(self, index: int) -> bool:
        return remove_at(self.assets, index)
