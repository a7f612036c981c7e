"""Stub market data provider for offline/testing use."""

import random
from decimal import Decimal

from dividend_tracker.core.symbols import normalize_symbol
from dividend_tracker.core.timezone import months_before, today_eastern
from dividend_tracker.domain.models import DividendPayment, NavPoint
from dividend_tracker.domain.views import DividendResult, QuoteResult


# Deterministic fake (price, quarterly dividend) for common symbols
_STUB_DATA: dict[str, tuple[Decimal, Decimal]] = {
    "AAPL": (Decimal("188.60"), Decimal("0.25")),
    "MSFT": (Decimal("382.50"), Decimal("0.83")),
    "JNJ": (Decimal("156.40"), Decimal("1.24")),
    "KO": (Decimal("61.20"), Decimal("0.485")),
    "PEP": (Decimal("168.90"), Decimal("1.355")),
    "O": (Decimal("56.75"), Decimal("0.791")),
    "SCHD": (Decimal("27.80"), Decimal("0.25")),
    "VYM": (Decimal("124.10"), Decimal("0.86")),
    "SPY": (Decimal("485.25"), Decimal("1.80")),
    "JEPI": (Decimal("57.30"), Decimal("0.40")),
}


class StubMarketDataProvider:
    """
    Stub provider with deterministic fake data for offline operation.

    Uses predefined prices for common symbols; generates seeded random prices
    for unknown symbols. Unknown symbols pay no dividends.
    """

    def __init__(self, seed: int = 42):
        """Initialize with optional random seed for reproducibility."""
        self._rng = random.Random(seed)

    async def fetch_quotes(self, symbols: list[str]) -> list[QuoteResult]:
        """Return stub quotes with a flat twelve-month NAV history."""
        if not symbols:
            return []

        results = []
        for symbol in symbols:
            price = self._price_for(symbol)
            results.append(
                QuoteResult(
                    symbol=symbol,
                    regular_market_price=price,
                    regular_market_change_percent=Decimal("0"),
                    currency="USD",
                    nav_history=self._nav_history(price),
                )
            )
        return results

    async def fetch_dividends(self, symbols: list[str], months_back: int) -> list[DividendResult]:
        """Return quarterly stub dividends within the window."""
        if not symbols:
            return []

        results = []
        for symbol in symbols:
            data = _STUB_DATA.get(normalize_symbol(symbol))
            if data is None:
                results.append(DividendResult(symbol=symbol, dividends=[]))
                continue
            _, amount = data
            dividends = [
                DividendPayment(
                    id=f"{symbol}-{months_before(offset).isoformat()}-stub",
                    date=months_before(offset).isoformat(),
                    amount_per_share=amount,
                )
                for offset in range(months_back - 1, -1, -3)
            ]
            results.append(DividendResult(symbol=symbol, dividends=dividends))
        return results

    def _price_for(self, symbol: str) -> Decimal:
        data = _STUB_DATA.get(normalize_symbol(symbol))
        if data is not None:
            return data[0]
        base_price = Decimal(str(50 + self._rng.random() * 200))
        return base_price.quantize(Decimal("0.01"))

    @staticmethod
    def _nav_history(price: Decimal) -> list[NavPoint]:
        today = today_eastern()
        return [
            NavPoint(date=months_before(offset, today).isoformat(), value=price)
            for offset in range(12, -1, -3)
        ]
