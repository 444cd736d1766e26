"""
Portfolio document (de)serialization.
"""

from .document_serializer import (
    deserialize_portfolio,
    portfolio_from_document,
    portfolio_to_document,
    revive_dates,
    serialize_portfolio,
)

__all__ = [
    "deserialize_portfolio",
    "portfolio_from_document",
    "portfolio_to_document",
    "revive_dates",
    "serialize_portfolio",
]
