"""Pydantic schemas for analysis endpoints."""

from typing import Optional

from pydantic import BaseModel


class OverviewResponse(BaseModel):
    """Headline metrics for held positions."""

    total_cost_basis: float
    total_market_value: float
    total_dividends: float
    total_return: float
    roi: float
    income_yield_on_cost: float
    unrealized_pnl: float


class EquityPerformanceResponse(BaseModel):
    model_config = {"from_attributes": True}

    symbol: str
    name: str
    sector: str
    shares: float
    market_value: float
    cost_basis: float
    unrealized_pnl: float
    total_return: float
    roi: float
    nav_decay_percent: float
    nav_peak: float
    current_nav: float


class RecentPayoutResponse(BaseModel):
    model_config = {"from_attributes": True}

    symbol: str
    name: str
    date: str
    amount_per_share: float
    total_amount: float


class RecentDividendsResponse(BaseModel):
    model_config = {"from_attributes": True}

    payouts: list[RecentPayoutResponse]
    trailing_income: float


class DividendTransactionResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    symbol: str
    name: str
    date: str
    shares: float
    amount_per_share: float
    total_amount: float


class PurchaseTransactionResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    symbol: str
    date: str
    shares: float
    price_per_share: float
    total_cost: float


class MonthlyCashFlowResponse(BaseModel):
    model_config = {"from_attributes": True}

    month: str
    month_label: str
    cash_invested: float
    dividends_received: float
    net_cash_flow: float
    cumulative_cash_invested: float
    cumulative_dividends: float
    purchase_count: int
    dividend_count: int
    dividend_transactions: list[DividendTransactionResponse]
    purchase_transactions: list[PurchaseTransactionResponse]


class CashFlowTotalsResponse(BaseModel):
    model_config = {"from_attributes": True}

    total_cash_invested: float
    total_dividends: float
    net_cash_flow: float
    total_purchases: int
    total_dividend_payments: int
    return_on_investment: float
    dividend_roi: float
    true_roi: float
    current_cash_balance: float


class CashFlowReportResponse(BaseModel):
    """Monthly cash flow with seed-based returns."""

    model_config = {"from_attributes": True}

    seed_amount: float
    seed_date: Optional[str] = None
    current_portfolio_value: float
    months: list[MonthlyCashFlowResponse]
    totals: CashFlowTotalsResponse
