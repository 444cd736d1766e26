"""
API request/response schemas.
"""

from .api_models import (
    AssetReportRequest,
    CashFlowModel,
    DocumentRequest,
    ErrorResponse,
    PortfolioReportRequest,
    XirrRequest,
    XirrResponse,
    YearRangeRequest,
    YearRangeResponse,
)

__all__ = [
    "AssetReportRequest",
    "CashFlowModel",
    "DocumentRequest",
    "ErrorResponse",
    "PortfolioReportRequest",
    "XirrRequest",
    "XirrResponse",
    "YearRangeRequest",
    "YearRangeResponse",
]
