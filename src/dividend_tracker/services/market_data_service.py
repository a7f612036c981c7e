"""Market data service: gateway access and merging fetched data into positions."""

import logging
from dataclasses import replace

from dividend_tracker.core.symbols import normalize_symbol
from dividend_tracker.domain.models import EquityPosition
from dividend_tracker.domain.views import DividendResult, QuoteResult
from dividend_tracker.providers.market_data_provider import MarketDataProvider

logger = logging.getLogger(__name__)


class MarketDataService:
    """
    Service for fetching quotes and dividend history.

    Wraps a provider with graceful degradation: a provider that raises produces
    one error result per symbol instead of an exception.
    """

    def __init__(self, provider: MarketDataProvider):
        self._provider = provider

    async def fetch_quotes(self, symbols: list[str]) -> list[QuoteResult]:
        if not symbols:
            return []
        try:
            return await self._provider.fetch_quotes(symbols)
        except Exception as exc:
            logger.warning("Quote provider failed for %d symbols: %s", len(symbols), exc)
            return [QuoteResult(symbol=s, error=str(exc) or type(exc).__name__) for s in symbols]

    async def fetch_dividends(self, symbols: list[str], months_back: int = 12) -> list[DividendResult]:
        if not symbols:
            return []
        try:
            return await self._provider.fetch_dividends(symbols, months_back)
        except Exception as exc:
            logger.warning("Dividend provider failed for %d symbols: %s", len(symbols), exc)
            return [DividendResult(symbol=s, error=str(exc) or type(exc).__name__) for s in symbols]


def merge_quotes_into_positions(
    positions: list[EquityPosition],
    quotes: list[QuoteResult],
) -> list[EquityPosition]:
    """
    Apply fetched prices to matching positions.

    A position changes only when its quote carries a price; the NAV history is
    replaced only by a non-empty fetched history.
    """
    by_symbol = {normalize_symbol(q.symbol): q for q in quotes}
    merged = []
    for position in positions:
        quote = by_symbol.get(normalize_symbol(position.symbol))
        if quote is None or quote.regular_market_price is None:
            merged.append(position)
            continue
        merged.append(
            replace(
                position,
                current_price=quote.regular_market_price,
                nav_history=quote.nav_history if quote.nav_history else position.nav_history,
            )
        )
    return merged


def merge_dividends_into_positions(
    positions: list[EquityPosition],
    results: list[DividendResult],
) -> list[EquityPosition]:
    """Replace dividend histories of positions with a non-empty fetched history."""
    by_symbol = {normalize_symbol(r.symbol): r for r in results}
    merged = []
    for position in positions:
        result = by_symbol.get(normalize_symbol(position.symbol))
        if result is None or not result.dividends:
            merged.append(position)
            continue
        merged.append(replace(position, dividends=list(result.dividends)))
    return merged
