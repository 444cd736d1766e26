"""
Pydantic schemas for API request/response models.
"""

import math
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from portfolio_tracker.core.constants import XIRR_DEFAULT_GUESS
from portfolio_tracker.core.enums import AggregateBy


class DocumentRequest(BaseModel):
    """A raw portfolio document as stored on disk."""

    document: dict[str, Any] = Field(..., description="Portfolio document (dates as ISO strings)")


class AssetReportRequest(DocumentRequest):
    """Request model for a periodic asset report."""

    entity_index: int = Field(..., ge=0, description="Position of the entity in the document")
    asset_index: int = Field(..., ge=0, description="Position of the asset within the entity")
    aggregate_by: AggregateBy = Field(default=AggregateBy.YEAR, description="Row granularity")
    fill_gaps: bool = Field(default=True, description="Emit rows for inactive periods")
    as_of: date | None = Field(default=None, description="Date treated as today")


class PortfolioReportRequest(DocumentRequest):
    """Request model for a yearly portfolio report."""

    year: int = Field(..., ge=1900, le=9999, description="Reporting calendar year")
    as_of: date | None = Field(default=None, description="Date treated as today")


class YearRangeRequest(DocumentRequest):
    """Request model for the reportable year range."""

    today: date | None = Field(default=None, description="Date treated as today")


class YearRangeResponse(BaseModel):
    years: list[int]


class CashFlowModel(BaseModel):
    date: datetime
    amount: float


class XirrRequest(BaseModel):
    """Request model for a standalone XIRR calculation."""

    cashflows: list[CashFlowModel] = Field(..., description="Dated cash flows")
    guess: float = Field(default=XIRR_DEFAULT_GUESS, gt=-1.0, description="Newton starting rate")

    @field_validator("cashflows")
    @classmethod
    def validate_amounts(cls, v: list[CashFlowModel]) -> list[CashFlowModel]:
        """Reject non-finite amounts before they reach the solver."""
        for flow in v:
            if not math.isfinite(flow.amount):
                raise ValueError(f"Cash flow amount must be finite, got {flow.amount}")
        return v


class XirrResponse(BaseModel):
    """Response model for a standalone XIRR calculation."""

    rate: float
    flow_count: int


class ErrorResponse(BaseModel):
    detail: str
