"""
Report API endpoints.

Every request carries the raw portfolio document; nothing is stored
server-side.
"""

from typing import Any

from fastapi import APIRouter, HTTPException

from portfolio_tracker.core.analytics import create_portfolio_report, create_report, get_year_range
from portfolio_tracker.core.models import Portfolio
from portfolio_tracker.core.utils.validation import is_valid_index
from portfolio_tracker.infrastructure.serialization import portfolio_from_document, revive_dates

from ..schemas.api_models import (
    AssetReportRequest,
    ErrorResponse,
    PortfolioReportRequest,
    YearRangeRequest,
    YearRangeResponse,
)

router = APIRouter(
    responses={
        400: {"model": ErrorResponse, "description": "Malformed portfolio document"},
    }
)


def _load(document: dict[str, Any]) -> Portfolio:
    return portfolio_from_document(revive_dates(document))


@router.post(
    "/asset", responses={404: {"model": ErrorResponse, "description": "Unknown entity or asset"}}
)
async def asset_report(request: AssetReportRequest) -> dict[str, Any]:
    """Periodic report of one asset addressed by entity and asset position."""
    portfolio = _load(request.document)

    if not is_valid_index(portfolio.entities, request.entity_index):
        raise HTTPException(status_code=404, detail=f"No entity at index {request.entity_index}")
    entity = portfolio.entities[request.entity_index]
    if not is_valid_index(entity.assets, request.asset_index):
        raise HTTPException(status_code=404, detail=f"No asset at index {request.asset_index}")

    report = create_report(
        entity.assets[request.asset_index],
        request.aggregate_by,
        fill_gaps=request.fill_gaps,
        as_of=request.as_of,
    )
    return report.to_dict()


@router.post("/portfolio")
async def portfolio_report(request: PortfolioReportRequest) -> dict[str, Any]:
    """Cross-portfolio report for one calendar year."""
    report = create_portfolio_report(_load(request.document), request.year, as_of=request.as_of)
    return report.to_dict()


@router.post("/years")
async def year_range(request: YearRangeRequest) -> YearRangeResponse:
    """Calendar years a portfolio report can be requested for."""
    return YearRangeResponse(years=get_year_range(_load(request.document), today=request.today))
