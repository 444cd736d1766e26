"""
Asset classification enumerations.

This module defines the allowed asset types and the unit kinds an asset
position can be counted in.
"""

from enum import StrEnum


class AssetType(StrEnum):
    """
    Allowed asset types.

    Values match the tags stored in portfolio documents.
    """

    DEBT = "debt"
    EQUITY = "equity"  # Non-listed stock
    CONVERTIBLE = "convertible"
    LISTED_EQUITY = "listedequity"
    OTHER = "other"

    @property
    def display_name(self) -> str:
        """Human readable name of the asset type."""
        names = {
            AssetType.DEBT: "Debt",
            AssetType.EQUITY: "Equity",
            AssetType.CONVERTIBLE: "Convertible",
            AssetType.LISTED_EQUITY: "Listed Equity",
            AssetType.OTHER: "Other",
        }
        return names[self]

    @property
    def is_listed(self) -> bool:
        """Check if the asset trades on a public market."""
        return self == self.LISTED_EQUITY

    @classmethod
    def from_string(cls, value: str) -> "AssetType":
        """
        Convert a document tag to AssetType.

        Args:
            value: Tag as stored in the document

        Returns:
            Corresponding AssetType

        Raises:
            ValueError: If the tag is not a known asset type
        """
        for asset_type in cls:
            if asset_type.value == value:
                return asset_type

        raise ValueError(
            f"Unsupported asset type: {value}. "
            f"Supported types: {', '.join([t.value for t in cls])}"
        )


class AssetUnit(StrEnum):
    """
    Allowed unit kinds.

    Defines what the unit count of an asset position measures.
    """

    SHARES = "shares"
    PERCENT = "percent"
    AMOUNT = "amount"

    @classmethod
    def from_string(cls, value: str) -> "AssetUnit":
        """
        Convert a document tag to AssetUnit.

        Raises:
            ValueError: If the tag is not a known unit kind
        """
        for unit in cls:
            if unit.value == value:
                return unit

        raise ValueError(
            f"Unsupported asset unit: {value}. "
            f"Supported units: {', '.join([u.value for u in cls])}"
        )


DEFAULT_ASSET_TYPE = AssetType.EQUITY
DEFAULT_ASSET_UNIT = AssetUnit.SHARES
