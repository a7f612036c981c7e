"""Market data refresh endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from dividend_tracker.api.deps import get_app_settings, get_store
from dividend_tracker.api.schemas import (
    DividendRefreshResponse,
    DividendResultResponse,
    MarketDataStatusResponse,
    QuoteRefreshResponse,
    QuoteResultResponse,
    RefreshStatusResponse,
)
from dividend_tracker.config.settings import Settings
from dividend_tracker.services import PortfolioStore

router = APIRouter(prefix="/market-data", tags=["market-data"])


@router.get("/status", response_model=MarketDataStatusResponse)
async def get_status(store: PortfolioStore = Depends(get_store)) -> MarketDataStatusResponse:
    """Get the status of the latest quote and dividend refreshes."""
    return MarketDataStatusResponse(
        quotes=RefreshStatusResponse.model_validate(store.quote_status),
        dividends=RefreshStatusResponse.model_validate(store.dividend_status),
    )


@router.post("/quotes/refresh", response_model=QuoteRefreshResponse)
async def refresh_quotes(store: PortfolioStore = Depends(get_store)) -> QuoteRefreshResponse:
    """Fetch prices for every tracked symbol. Partial failures are reported in the status."""
    results = await store.refresh_quotes()
    return QuoteRefreshResponse(
        results=[QuoteResultResponse.model_validate(r) for r in results],
        status=RefreshStatusResponse.model_validate(store.quote_status),
    )


@router.post("/dividends/refresh", response_model=DividendRefreshResponse)
async def refresh_dividends(
    months_back: Optional[int] = Query(default=None, ge=1, le=120),
    store: PortfolioStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> DividendRefreshResponse:
    """Fetch dividend histories for every tracked symbol."""
    results = await store.refresh_dividends(months_back or settings.dividend_months_back)
    return DividendRefreshResponse(
        results=[DividendResultResponse.model_validate(r) for r in results],
        status=RefreshStatusResponse.model_validate(store.dividend_status),
    )
