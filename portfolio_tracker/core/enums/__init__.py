"""
Core enumerations for the portfolio tracker.

This module provides centralized enumerations for domain concepts
like asset types, unit kinds, report granularity and rate frequency.
"""

from .asset_types import DEFAULT_ASSET_TYPE, DEFAULT_ASSET_UNIT, AssetType, AssetUnit
from .periods import AggregateBy, RateFrequency

__all__ = [
    "AssetType",
    "AssetUnit",
    "AggregateBy",
    "RateFrequency",
    "DEFAULT_ASSET_TYPE",
    "DEFAULT_ASSET_UNIT",
]
