"""Polygon.io market data provider."""

import asyncio
import logging
from contextlib import asynccontextmanager
from decimal import Decimal
from typing import AsyncIterator, Optional
from urllib.parse import quote

import httpx

from dividend_tracker.core.timezone import (
    epoch_millis_to_iso_date,
    is_iso_date,
    months_before,
    today_eastern,
)
from dividend_tracker.domain.models import DividendPayment, NavPoint, to_decimal
from dividend_tracker.domain.serialization import is_number
from dividend_tracker.domain.views import DividendResult, QuoteResult

logger = logging.getLogger(__name__)


class PolygonMarketDataProvider:
    """
    Fetches previous-close quotes, monthly NAV history and dividends from Polygon.

    Symbols are fetched concurrently. Every failure is captured on the symbol's
    result; nothing is raised to the caller. No request timeout is imposed.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.polygon.io",
        nav_history_months: int = 12,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._nav_history_months = nav_history_months
        self._client = client

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(base_url=self._base_url, timeout=None) as client:
            yield client

    async def fetch_quotes(self, symbols: list[str]) -> list[QuoteResult]:
        """Fetch the previous close and NAV history for each symbol."""
        if not symbols:
            return []
        async with self._session() as client:
            results = await asyncio.gather(*(self._fetch_quote(client, s) for s in symbols))
        return list(results)

    async def fetch_dividends(self, symbols: list[str], months_back: int = 12) -> list[DividendResult]:
        """Fetch dividends with an ex-date inside the last ``months_back`` months."""
        if not symbols:
            return []
        async with self._session() as client:
            results = await asyncio.gather(
                *(self._fetch_symbol_dividends(client, s, months_back) for s in symbols)
            )
        return list(results)

    async def _fetch_quote(self, client: httpx.AsyncClient, symbol: str) -> QuoteResult:
        try:
            response = await client.get(
                f"/v2/aggs/ticker/{quote(symbol, safe='')}/prev",
                params={"adjusted": "true", "limit": "1", "apiKey": self._api_key},
            )
            if response.is_error:
                return QuoteResult(symbol=symbol, error=f"HTTP {response.status_code}")

            results = response.json().get("results") or []
            latest = results[0] if results else None
            if not isinstance(latest, dict) or not is_number(latest.get("c")):
                return QuoteResult(symbol=symbol, error="Quote not found")

            price = to_decimal(latest["c"])
            change_percent = None
            if is_number(latest.get("o")) and latest["o"] != 0:
                open_price = to_decimal(latest["o"])
                change_percent = (price - open_price) / open_price * Decimal("100")

            nav_history = await self._fetch_nav_history(client, symbol)
            return QuoteResult(
                symbol=symbol,
                regular_market_price=price,
                regular_market_change_percent=change_percent,
                currency="USD",
                nav_history=nav_history,
            )
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Quote fetch failed for %s: %s", symbol, exc)
            return QuoteResult(symbol=symbol, error=str(exc) or "Unknown error fetching quotes")

    async def _fetch_nav_history(self, client: httpx.AsyncClient, symbol: str) -> list[NavPoint]:
        end = today_eastern()
        start = months_before(self._nav_history_months, end)
        try:
            response = await client.get(
                f"/v2/aggs/ticker/{quote(symbol, safe='')}/range/1/month/"
                f"{start.isoformat()}/{end.isoformat()}",
                params={"adjusted": "true", "sort": "asc", "limit": "50", "apiKey": self._api_key},
            )
            if response.is_error:
                return []
            bars = response.json().get("results") or []
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("NAV history fetch failed for %s: %s", symbol, exc)
            return []

        history = []
        for bar in bars:
            if not (isinstance(bar, dict) and is_number(bar.get("t")) and is_number(bar.get("c"))):
                continue
            try:
                bar_date = epoch_millis_to_iso_date(bar["t"])
            except (OverflowError, OSError, ValueError):
                logger.warning("Skipping NAV bar with bad timestamp for %s: %r", symbol, bar["t"])
                continue
            history.append(NavPoint(date=bar_date, value=to_decimal(bar["c"])))
        return history

    async def _fetch_symbol_dividends(
        self,
        client: httpx.AsyncClient,
        symbol: str,
        months_back: int,
    ) -> DividendResult:
        end = today_eastern()
        start = months_before(months_back, end)
        try:
            response = await client.get(
                "/v3/reference/dividends",
                params={
                    "ticker": symbol,
                    "ex_dividend_date.gte": start.isoformat(),
                    "ex_dividend_date.lte": end.isoformat(),
                    "limit": "100",
                    "apiKey": self._api_key,
                },
            )
            if response.is_error:
                return DividendResult(symbol=symbol, error=f"HTTP {response.status_code}")
            records = response.json().get("results") or []
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Dividend fetch failed for %s: %s", symbol, exc)
            return DividendResult(
                symbol=symbol,
                error=str(exc) or "Unknown error fetching dividends",
            )

        dividends = []
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                continue
            ex_date = record.get("ex_dividend_date")
            if not isinstance(ex_date, str) or not is_iso_date(ex_date):
                continue
            if not is_number(record.get("cash_amount")):
                continue
            dividends.append(
                DividendPayment(
                    id=record.get("id") or f"{symbol}-{ex_date}-{index}",
                    date=ex_date,
                    amount_per_share=to_decimal(record["cash_amount"]),
                )
            )
        dividends.sort(key=lambda d: d.date)
        return DividendResult(symbol=symbol, dividends=dividends)
