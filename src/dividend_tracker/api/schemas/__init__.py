"""Pydantic schemas for API request/response."""

from dividend_tracker.api.schemas.portfolio import (
    DividendPaymentResponse,
    DividendWithSharesResponse,
    NavPointResponse,
    PurchaseLotResponse,
    EquityPositionResponse,
    EquityViewResponse,
    EquityMetricsResponse,
    PortfolioStateResponse,
    PurchaseLotCreate,
    PurchaseLotUpdateRequest,
    SeedUpdateRequest,
    PortfolioFileRequest,
    PortfolioFileResponse,
)
from dividend_tracker.api.schemas.market_data import (
    RefreshStatusResponse,
    MarketDataStatusResponse,
    QuoteResultResponse,
    DividendResultResponse,
    QuoteRefreshResponse,
    DividendRefreshResponse,
)
from dividend_tracker.api.schemas.portfolios import (
    PortfolioNameRequest,
    PortfolioMetadataResponse,
    PortfolioListResponse,
)
from dividend_tracker.api.schemas.analysis import (
    OverviewResponse,
    EquityPerformanceResponse,
    RecentPayoutResponse,
    RecentDividendsResponse,
    CashFlowReportResponse,
)

__all__ = [
    "DividendPaymentResponse",
    "DividendWithSharesResponse",
    "NavPointResponse",
    "PurchaseLotResponse",
    "EquityPositionResponse",
    "EquityViewResponse",
    "EquityMetricsResponse",
    "PortfolioStateResponse",
    "PurchaseLotCreate",
    "PurchaseLotUpdateRequest",
    "SeedUpdateRequest",
    "PortfolioFileRequest",
    "PortfolioFileResponse",
    "RefreshStatusResponse",
    "MarketDataStatusResponse",
    "QuoteResultResponse",
    "DividendResultResponse",
    "QuoteRefreshResponse",
    "DividendRefreshResponse",
    "PortfolioNameRequest",
    "PortfolioMetadataResponse",
    "PortfolioListResponse",
    "OverviewResponse",
    "EquityPerformanceResponse",
    "RecentPayoutResponse",
    "RecentDividendsResponse",
    "CashFlowReportResponse",
]
