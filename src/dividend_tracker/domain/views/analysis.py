"""View models for dashboard analytics and the cash-flow report."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from dividend_tracker.domain.views.portfolio import PortfolioMetrics


@dataclass
class OverviewView:
    """Headline metrics for positions currently held."""

    metrics: PortfolioMetrics
    unrealized_pnl: Decimal


@dataclass
class EquityPerformanceRow:
    """Performance of one held position."""

    symbol: str
    name: str
    sector: str
    shares: Decimal
    market_value: Decimal
    cost_basis: Decimal
    unrealized_pnl: Decimal
    total_return: Decimal
    roi: Decimal
    nav_decay_percent: Decimal
    nav_peak: Decimal
    current_nav: Decimal


@dataclass
class RecentPayout:
    """One dividend payout valued at the currently held share count."""

    symbol: str
    name: str
    date: str
    amount_per_share: Decimal
    total_amount: Decimal


@dataclass
class RecentDividendsView:
    """Latest payouts and trailing income."""

    payouts: list[RecentPayout] = field(default_factory=list)
    trailing_income: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass
class DividendTransaction:
    """Dividend cash received, valued at shares owned on the payment date."""

    id: str
    symbol: str
    name: str
    date: str
    shares: Decimal
    amount_per_share: Decimal
    total_amount: Decimal


@dataclass
class PurchaseTransaction:
    """Cash spent on one purchase lot."""

    id: str
    symbol: str
    date: str
    shares: Decimal
    price_per_share: Decimal
    total_cost: Decimal


@dataclass
class MonthlyCashFlow:
    """Cash invested and dividends received during one calendar month."""

    month: str  # YYYY-MM
    month_label: str  # e.g. "Jan 2025"
    cash_invested: Decimal = field(default_factory=lambda: Decimal("0"))
    dividends_received: Decimal = field(default_factory=lambda: Decimal("0"))
    net_cash_flow: Decimal = field(default_factory=lambda: Decimal("0"))
    cumulative_cash_invested: Decimal = field(default_factory=lambda: Decimal("0"))
    cumulative_dividends: Decimal = field(default_factory=lambda: Decimal("0"))
    purchase_count: int = 0
    dividend_count: int = 0
    dividend_transactions: list[DividendTransaction] = field(default_factory=list)
    purchase_transactions: list[PurchaseTransaction] = field(default_factory=list)


@dataclass
class CashFlowTotals:
    """Totals across the whole cash-flow report."""

    total_cash_invested: Decimal
    total_dividends: Decimal
    net_cash_flow: Decimal
    total_purchases: int
    total_dividend_payments: int
    return_on_investment: Decimal
    dividend_roi: Decimal
    true_roi: Decimal
    current_cash_balance: Decimal


@dataclass
class CashFlowReport:
    """Month-by-month cash flow with seed-based returns."""

    seed_amount: Decimal
    seed_date: Optional[str]
    current_portfolio_value: Decimal
    months: list[MonthlyCashFlow]
    totals: CashFlowTotals
