"""Analysis endpoints."""

from fastapi import APIRouter, Depends, Query

from dividend_tracker.api.deps import get_analysis_service
from dividend_tracker.api.schemas import (
    CashFlowReportResponse,
    EquityPerformanceResponse,
    OverviewResponse,
    RecentDividendsResponse,
)
from dividend_tracker.services import AnalysisService

router = APIRouter(prefix="/analysis", tags=["analysis"])


@router.get("/overview", response_model=OverviewResponse)
async def get_overview(
    analysis: AnalysisService = Depends(get_analysis_service),
) -> OverviewResponse:
    """Headline metrics across held positions."""
    overview = analysis.overview()
    metrics = overview.metrics
    return OverviewResponse(
        total_cost_basis=metrics.total_cost_basis,
        total_market_value=metrics.total_market_value,
        total_dividends=metrics.total_dividends,
        total_return=metrics.total_return,
        roi=metrics.roi,
        income_yield_on_cost=metrics.income_yield_on_cost,
        unrealized_pnl=overview.unrealized_pnl,
    )


@router.get("/performance", response_model=list[EquityPerformanceResponse])
async def get_performance(
    analysis: AnalysisService = Depends(get_analysis_service),
) -> list[EquityPerformanceResponse]:
    return [EquityPerformanceResponse.model_validate(row) for row in analysis.equity_performance()]


@router.get("/recent-dividends", response_model=RecentDividendsResponse)
async def get_recent_dividends(
    limit: int = Query(default=8, ge=1, le=100),
    analysis: AnalysisService = Depends(get_analysis_service),
) -> RecentDividendsResponse:
    """Newest dividend payouts and trailing income."""
    return RecentDividendsResponse.model_validate(analysis.recent_dividends(limit))


@router.get("/cash-flow", response_model=CashFlowReportResponse)
async def get_cash_flow(
    analysis: AnalysisService = Depends(get_analysis_service),
) -> CashFlowReportResponse:
    """Monthly cash flow report."""
    return CashFlowReportResponse.model_validate(analysis.cash_flow_report())
