"""View models for service outputs."""

from dividend_tracker.domain.views.portfolio import (
    DividendPaymentWithShares,
    EquityWithLots,
    EquityMetrics,
    PortfolioMetrics,
    PortfolioImportResult,
)
from dividend_tracker.domain.views.market import (
    QuoteResult,
    DividendResult,
    RefreshStatus,
)
from dividend_tracker.domain.views.analysis import (
    OverviewView,
    EquityPerformanceRow,
    RecentPayout,
    RecentDividendsView,
    DividendTransaction,
    PurchaseTransaction,
    MonthlyCashFlow,
    CashFlowTotals,
    CashFlowReport,
)

__all__ = [
    "DividendPaymentWithShares",
    "EquityWithLots",
    "EquityMetrics",
    "PortfolioMetrics",
    "PortfolioImportResult",
    "QuoteResult",
    "DividendResult",
    "RefreshStatus",
    "OverviewView",
    "EquityPerformanceRow",
    "RecentPayout",
    "RecentDividendsView",
    "DividendTransaction",
    "PurchaseTransaction",
    "MonthlyCashFlow",
    "CashFlowTotals",
    "CashFlowReport",
]
