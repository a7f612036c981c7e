"""Business logic services."""

from dividend_tracker.services.metrics import compute_equity_metrics, compute_portfolio_metrics
from dividend_tracker.services.view_engine import derive_equity_views, merged_positions
from dividend_tracker.services.market_data_service import (
    MarketDataService,
    merge_dividends_into_positions,
    merge_quotes_into_positions,
)
from dividend_tracker.services.portfolio_library import PortfolioLibrary
from dividend_tracker.services.portfolio_store import PortfolioStore, PurchaseLotUpdate
from dividend_tracker.services.analysis_service import AnalysisService

__all__ = [
    "compute_equity_metrics",
    "compute_portfolio_metrics",
    "derive_equity_views",
    "merged_positions",
    "MarketDataService",
    "merge_dividends_into_positions",
    "merge_quotes_into_positions",
    "PortfolioLibrary",
    "PortfolioStore",
    "PurchaseLotUpdate",
    "AnalysisService",
]
