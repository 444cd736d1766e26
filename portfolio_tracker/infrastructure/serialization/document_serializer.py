"""
Portfolio document serialization.

The in-memory graph shares currency objects and points assets back at their
entities. The wire form is an acyclic JSON tree: entity currencies become ISO
codes, asset back-references and the document root are dropped. Loading
revives dates and relinks the shared references.
"""

import json
from datetime import datetime
from typing import Any

from loguru import logger

from portfolio_tracker.core.constants import DOCUMENT_INDENT, ISO_DATETIME_PATTERN
from portfolio_tracker.core.enums import AssetType, AssetUnit
from portfolio_tracker.core.exceptions.portfolio import DocumentFormatError, ValidationError
from portfolio_tracker.core.models import (
    Asset,
    Currency,
    Entity,
    Investment,
    Portfolio,
    RatePoint,
    Revenue,
    Valuation,
)
from portfolio_tracker.core.utils.dates import format_iso_millis, parse_iso_millis


def serialize_portfolio(portfolio: Portfolio) -> str:
    """Serialize the portfolio graph to pretty-printed JSON text."""
    return json.dumps(
        portfolio_to_document(portfolio),
        indent=DOCUMENT_INDENT,
        ensure_ascii=False,
        default=_encode_revived,
    )


def _encode_revived(value: Any) -> str:
    """Write back datetimes that date revival put into free-text fields."""
    if isinstance(value, datetime):
        return format_iso_millis(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def deserialize_portfolio(text: str) -> Portfolio:
    """Parse JSON text and rebuild the shared-reference graph.

    Raises:
        DocumentFormatError: If the text is not a valid portfolio document
    """
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise DocumentFormatError(f"Portfolio document is not valid JSON: {e}") from e
    return portfolio_from_document(revive_dates(raw))


def revive_dates(node: Any) -> Any:
    """Replace every string matching the document date format with a datetime.

    Applied to the whole parsed tree regardless of field names. Strings that
    have the shape but name no real instant (2024-02-30...) stay strings.
    """
    if isinstance(node, dict):
        return {key: revive_dates(value) for key, value in node.items()}
    if isinstance(node, list):
        return [revive_dates(item) for item in node]
    if isinstance(node, str) and ISO_DATETIME_PATTERN.fullmatch(node):
        try:
            return parse_iso_millis(node)
        except ValueError:
            logger.debug(f"Keeping {node!r} as text, not a calendar date")
    return node


# --- graph -> wire form ---


def _currency_to_document(currency: Currency) -> dict[str, Any]:
    return {
        "iso": currency.iso,
        "rates": [{"date": format_iso_millis(p.date), "rate": p.rate} for p in currency.rates],
    }


def _investment_to_document(investment: Investment) -> dict[str, Any]:
    document: dict[str, Any] = {
        "valuta": format_iso_millis(investment.valuta),
        "description": investment.description,
        "units": investment.units,
        "value": investment.value,
    }
    if investment.fxrate is not None:
        document["fxrate"] = investment.fxrate
    document["doc"] = investment.doc
    return document


def _revenue_to_document(revenue: Revenue) -> dict[str, Any]:
    document: dict[str, Any] = {
        "valuta": format_iso_millis(revenue.valuta),
        "description": revenue.description,
        "value": revenue.value,
    }
    if revenue.fxrate is not None:
        document["fxrate"] = revenue.fxrate
    document["doc"] = revenue.doc
    return document


def _asset_to_document(asset: Asset) -> dict[str, Any]:
    return {
        "name": asset.name,
        "type": asset.type.value,
        "unit": asset.unit.value,
        "investments": [_investment_to_document(inv) for inv in asset.investments],
        "revenues": [_revenue_to_document(rev) for rev in asset.revenues],
        "valuations": [
            {"date": format_iso_millis(v.date), "unitPrice": v.unit_price, "doc": v.doc}
            for v in asset.valuations
        ],
        "commitments": [_investment_to_document(c) for c in asset.commitments],
    }


def portfolio_to_document(portfolio: Portfolio) -> dict[str, Any]:
    """Acyclic JSON-ready tree of the portfolio (dates as ISO strings)."""
    return {
        "name": portfolio.name,
        "entities": [
            {
                "name": entity.name,
                "address": entity.address,
                "country": entity.country,
                "docfolder": entity.docfolder,
                "currency": entity.currency.iso,
                "assets": [_asset_to_document(asset) for asset in entity.assets],
            }
            for entity in portfolio.entities
        ],
        "baseCurrency": _currency_to_document(portfolio.base_currency),
        "currencies": [_currency_to_document(c) for c in portfolio.currencies],
    }


# --- wire form -> graph ---


def _require(node: dict[str, Any], key: str, where: str) -> Any:
    if key not in node:
        raise DocumentFormatError(f"Missing '{key}' in {where}")
    return node[key]


def _number(value: Any) -> float:
    """Numbers stay as parsed so integers are written back as integers."""
    if isinstance(value, int | float) and not isinstance(value, bool):
        return value
    return float(value)


def _currency_from_document(node: dict[str, Any]) -> Currency:
    iso = _require(node, "iso", "currency")
    where = f"{iso} rate"
    rates = [
        RatePoint(date=_require(r, "date", where), rate=_number(_require(r, "rate", where)))
        for r in node.get("rates", [])
    ]
    return Currency(iso=iso, rates=rates)


def _investment_from_document(node: dict[str, Any]) -> Investment:
    fxrate = node.get("fxrate")
    return Investment(
        valuta=_require(node, "valuta", "investment"),
        description=node.get("description", ""),
        units=_number(node.get("units", 0)),
        value=_number(_require(node, "value", "investment")),
        fxrate=_number(fxrate) if fxrate is not None else None,
        doc=node.get("doc", ""),
    )


def _revenue_from_document(node: dict[str, Any]) -> Revenue:
    fxrate = node.get("fxrate")
    return Revenue(
        valuta=_require(node, "valuta", "revenue"),
        description=node.get("description", ""),
        value=_number(_require(node, "value", "revenue")),
        fxrate=_number(fxrate) if fxrate is not None else None,
        doc=node.get("doc", ""),
    )


def _asset_from_document(node: dict[str, Any]) -> Asset:
    name = _require(node, "name", "asset")
    try:
        asset_type = AssetType.from_string(node.get("type", AssetType.EQUITY.value))
        unit = AssetUnit.from_string(node.get("unit", AssetUnit.SHARES.value))
    except ValueError as e:
        raise DocumentFormatError(f"Asset {name!r}: {e}") from e
    return Asset(
        name=name,
        type=asset_type,
        unit=unit,
        investments=[_investment_from_document(n) for n in node.get("investments", [])],
        revenues=[_revenue_from_document(n) for n in node.get("revenues", [])],
        valuations=[
            Valuation(
                date=_require(n, "date", "valuation"),
                unit_price=_number(_require(n, "unitPrice", "valuation")),
                doc=n.get("doc", ""),
            )
            for n in node.get("valuations", [])
        ],
        commitments=[_investment_from_document(n) for n in node.get("commitments", [])],
    )


def _find_or_register(currencies: list[Currency], iso: str) -> Currency:
    for currency in currencies:
        if currency.iso == iso:
            return currency
    logger.warning(f"Document references unknown currency {iso}, adding it without rates")
    currency = Currency(iso=iso)
    currencies.append(currency)
    return currency


def portfolio_from_document(document: dict[str, Any]) -> Portfolio:
    """Build the graph from a parsed document whose dates are already revived.

    Relinking: the base currency and every entity currency resolve to the
    single matching object in the currency list (appending missing ones),
    and every asset points back at its owning entity.

    Raises:
        DocumentFormatError: If required structure is missing or invalid
    """
    if not isinstance(document, dict):
        raise DocumentFormatError("Portfolio document must be a JSON object")

    try:
        currencies = [_currency_from_document(node) for node in document.get("currencies", [])]

        base_node = _require(document, "baseCurrency", "portfolio")
        base_iso = _require(base_node, "iso", "baseCurrency")
        base_currency = next((c for c in currencies if c.iso == base_iso), None)
        if base_currency is None:
            logger.warning(f"Base currency {base_iso} missing from currency list, adding it")
            base_currency = _currency_from_document(base_node)
            currencies.append(base_currency)

        entities = []
        for node in _require(document, "entities", "portfolio"):
            iso = _require(node, "currency", f"entity {node.get('name', '?')!r}")
            if not isinstance(iso, str):
                raise DocumentFormatError(f"Entity currency must be an ISO code, got {iso!r}")
            entity = Entity(
                name=node.get("name", ""),
                currency=_find_or_register(currencies, iso),
                address=node.get("address", ""),
                country=node.get("country", ""),
                docfolder=node.get("docfolder", ""),
            )
            for asset_node in node.get("assets", []):
                entity.add_asset(_asset_from_document(asset_node))
            entities.append(entity)
    except (TypeError, ValueError, AttributeError, ValidationError) as e:
        raise DocumentFormatError(f"Invalid portfolio document: {e}") from e

    portfolio = Portfolio(
        base_currency=base_currency,
        name=document.get("name", ""),
        entities=entities,
        currencies=currencies,
    )
    logger.debug(
        f"Loaded portfolio {portfolio.name!r}: {len(entities)} entities, "
        f"{len(currencies)} currencies"
    )
    return portfolio
