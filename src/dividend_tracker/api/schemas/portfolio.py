"""Pydantic schemas for portfolio, lot and dividend endpoints."""

from typing import Optional

from pydantic import BaseModel, Field

ISO_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


class DividendPaymentResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    date: str
    amount_per_share: float


class DividendWithSharesResponse(DividendPaymentResponse):
    """Dividend with the shares held on its payment date."""

    shares_owned: float
    total_amount: float


class NavPointResponse(BaseModel):
    model_config = {"from_attributes": True}

    date: str
    value: float


class PurchaseLotResponse(BaseModel):
    """Response schema for a single purchase lot."""

    model_config = {"from_attributes": True}

    id: str
    symbol: str
    trade_date: str
    shares: float
    price_per_share: float


class EquityPositionResponse(BaseModel):
    model_config = {"from_attributes": True}

    symbol: str
    name: str
    sector: str
    shares: float
    average_cost: float
    current_price: float
    dividends: list[DividendPaymentResponse]
    nav_history: list[NavPointResponse]


class EquityViewResponse(BaseModel):
    """Reconciled snapshot position and lots for one symbol."""

    model_config = {"from_attributes": True}

    position: EquityPositionResponse
    manual_lots: list[PurchaseLotResponse]
    manual_total_shares: float
    manual_total_cost: float
    earliest_acquisition_date: Optional[str] = None
    dividends_with_shares: list[DividendWithSharesResponse]


class EquityMetricsResponse(BaseModel):
    """Metrics for one reconciled position."""

    model_config = {"from_attributes": True}

    position: EquityPositionResponse
    cost_basis: float
    market_value: float
    total_dividends: float
    total_return: float
    roi: float
    dividend_yield_on_cost: float
    nav_peak: float
    nav_decay_percent: float


class PortfolioStateResponse(BaseModel):
    """Snapshot header and the active saved portfolio."""

    as_of: str
    equity_count: int
    lot_count: int
    cash_position: Optional[float] = None
    last_price_update: Optional[str] = None
    last_dividend_update: Optional[str] = None
    seed_amount: Optional[float] = None
    seed_date: Optional[str] = None
    active_portfolio_id: Optional[str] = None
    active_portfolio_name: Optional[str] = None


class PurchaseLotCreate(BaseModel):
    """Request schema for recording a purchase."""

    symbol: str = Field(..., min_length=1, max_length=32, description="Ticker symbol")
    trade_date: str = Field(..., pattern=ISO_DATE_PATTERN, description="Trade date (YYYY-MM-DD)")
    shares: float = Field(..., gt=0)
    price_per_share: float = Field(..., gt=0)


class PurchaseLotUpdateRequest(BaseModel):
    """Request schema for editing a purchase lot (partial update)."""

    symbol: Optional[str] = Field(default=None, min_length=1, max_length=32)
    trade_date: Optional[str] = Field(default=None, pattern=ISO_DATE_PATTERN)
    shares: Optional[float] = Field(default=None, gt=0)
    price_per_share: Optional[float] = Field(default=None, gt=0)


class SeedUpdateRequest(BaseModel):
    """Request schema for the hypothetical starting capital."""

    amount: float = Field(..., ge=0)
    date: Optional[str] = Field(default=None, pattern=ISO_DATE_PATTERN)


class PortfolioFileRequest(BaseModel):
    """Request schema naming a portfolio JSON file on disk."""

    path: str = Field(..., min_length=1)


class PortfolioFileResponse(BaseModel):
    path: str
