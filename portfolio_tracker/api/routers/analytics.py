"""
Analytics API endpoints.
"""

from fastapi import APIRouter

from portfolio_tracker.core.analytics import CashFlow, xirr

from ..schemas.api_models import ErrorResponse, XirrRequest, XirrResponse

router = APIRouter()


@router.post(
    "/xirr",
    responses={409: {"model": ErrorResponse, "description": "No root could be found"}},
)
async def calculate_xirr(request: XirrRequest) -> XirrResponse:
    """Annualized internal rate of return of the posted cash flows."""
    flows = [CashFlow(flow.date, flow.amount) for flow in request.cashflows]
    return XirrResponse(rate=xirr(flows, guess=request.guess), flow_count=len(flows))
