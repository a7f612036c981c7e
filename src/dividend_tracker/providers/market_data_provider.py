"""Market data provider protocol."""

from typing import Protocol

from dividend_tracker.domain.views import DividendResult, QuoteResult


class MarketDataProvider(Protocol):
    """
    Protocol for market data providers.

    Implementations return exactly one result per requested symbol and capture
    failures per item in ``error`` instead of raising. Empty input returns an
    empty list without any I/O.
    """

    async def fetch_quotes(self, symbols: list[str]) -> list[QuoteResult]:
        """Fetch the latest price and NAV history for each symbol."""
        ...

    async def fetch_dividends(self, symbols: list[str], months_back: int) -> list[DividendResult]:
        """Fetch dividends paid within the last ``months_back`` months."""
        ...
