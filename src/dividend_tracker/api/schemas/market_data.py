"""Pydantic schemas for market data refresh endpoints."""

from typing import Optional

from pydantic import BaseModel

from dividend_tracker.api.schemas.portfolio import DividendPaymentResponse, NavPointResponse


class RefreshStatusResponse(BaseModel):
    model_config = {"from_attributes": True}

    is_loading: bool
    last_updated: Optional[str] = None
    error: Optional[str] = None


class MarketDataStatusResponse(BaseModel):
    """Status of the latest quote and dividend refreshes."""

    quotes: RefreshStatusResponse
    dividends: RefreshStatusResponse


class QuoteResultResponse(BaseModel):
    model_config = {"from_attributes": True}

    symbol: str
    regular_market_price: Optional[float] = None
    regular_market_change_percent: Optional[float] = None
    currency: Optional[str] = None
    nav_history: Optional[list[NavPointResponse]] = None
    error: Optional[str] = None


class DividendResultResponse(BaseModel):
    model_config = {"from_attributes": True}

    symbol: str
    dividends: list[DividendPaymentResponse]
    error: Optional[str] = None


class QuoteRefreshResponse(BaseModel):
    """Per-symbol quote results plus the resulting status."""

    results: list[QuoteResultResponse]
    status: RefreshStatusResponse


class DividendRefreshResponse(BaseModel):
    """Per-symbol dividend results plus the resulting status."""

    results: list[DividendResultResponse]
    status: RefreshStatusResponse
