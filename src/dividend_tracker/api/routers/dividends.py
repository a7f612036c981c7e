"""Dividend endpoints."""

from fastapi import APIRouter, Depends

from dividend_tracker.api.deps import get_store
from dividend_tracker.core.exceptions import NotFoundError
from dividend_tracker.services import PortfolioStore

router = APIRouter(prefix="/dividends", tags=["dividends"])


@router.delete("/{symbol}/{dividend_id}", status_code=204)
async def remove_dividend(
    symbol: str,
    dividend_id: str,
    store: PortfolioStore = Depends(get_store),
) -> None:
    """Delete one dividend payment from a position's history."""
    if not store.remove_dividend(symbol, dividend_id):
        raise NotFoundError("Dividend", f"{symbol}/{dividend_id}")
