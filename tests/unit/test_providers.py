"""
Unit tests for market data providers.

Tests cover:
- Polygon quote, NAV history and dividend mapping (mocked HTTP transport)
- Polygon error handling per symbol
- Stub provider determinism
"""

from decimal import Decimal

import httpx

from dividend_tracker.providers import PolygonMarketDataProvider, StubMarketDataProvider

from tests.conftest import run


def _polygon_handler(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path == "/v2/aggs/ticker/AAPL/prev":
        return httpx.Response(200, json={"results": [{"o": 180.0, "c": 189.0}]})
    if path.startswith("/v2/aggs/ticker/AAPL/range/1/month/"):
        return httpx.Response(
            200,
            json={"results": [{"t": 1704067200000, "c": 185.5}, {"t": "bad", "c": 1}]},
        )
    if path == "/v2/aggs/ticker/ODD/prev":
        return httpx.Response(200, json={"results": [{"o": 10.0, "c": 10.0}]})
    if path.startswith("/v2/aggs/ticker/ODD/range/1/month/"):
        return httpx.Response(
            200,
            json={"results": [{"t": 1e20, "c": 9.0}, {"t": 1717200000000, "c": 10.0}]},
        )
    if path == "/v2/aggs/ticker/EMPTY/prev":
        return httpx.Response(200, json={"results": []})
    if path == "/v3/reference/dividends":
        ticker = request.url.params["ticker"]
        if ticker == "KO":
            return httpx.Response(
                200,
                json={
                    "results": [
                        {"id": "div-2", "ex_dividend_date": "2024-06-14", "cash_amount": 0.485},
                        {"ex_dividend_date": "2024-03-14", "cash_amount": 0.485},
                        {"ex_dividend_date": "2024-01-01"},
                        {"ex_dividend_date": "Q3 2024", "cash_amount": 0.5},
                    ]
                },
            )
    return httpx.Response(500, content=b"error")


def _with_polygon(call):
    """Run ``call(provider)`` against the mocked Polygon API and return its result."""

    async def _run():
        async with httpx.AsyncClient(
            transport=httpx.MockTransport(_polygon_handler),
            base_url="https://api.polygon.io",
        ) as client:
            provider = PolygonMarketDataProvider(api_key="test-key", client=client)
            return await call(provider)

    return run(_run())


class TestPolygonQuotes:
    """Tests for PolygonMarketDataProvider.fetch_quotes."""

    def test_previous_close_and_change_percent(self):
        """
        GIVEN a previous-day bar with open 180 and close 189
        WHEN quotes are fetched
        THEN price is 189 and change percent is 5
        """
        [quote] = _with_polygon(lambda p: p.fetch_quotes(["AAPL"]))

        assert quote.error is None
        assert quote.regular_market_price == Decimal("189.0")
        assert quote.regular_market_change_percent == Decimal("5")
        assert quote.currency == "USD"

    def test_nav_history_uses_valid_monthly_bars(self):
        [quote] = _with_polygon(lambda p: p.fetch_quotes(["AAPL"]))

        assert [(n.date, n.value) for n in quote.nav_history] == [("2024-01-01", Decimal("185.5"))]

    def test_out_of_range_bar_timestamp_is_skipped(self):
        """
        GIVEN a monthly bar whose timestamp is far outside the calendar
        WHEN quotes are fetched alongside a healthy symbol
        THEN only that bar is dropped and both quotes succeed
        """
        quotes = _with_polygon(lambda p: p.fetch_quotes(["ODD", "AAPL"]))

        assert [q.error for q in quotes] == [None, None]
        assert [(n.date, n.value) for n in quotes[0].nav_history] == [("2024-06-01", Decimal("10.0"))]

    def test_missing_close_is_quote_not_found(self):
        [quote] = _with_polygon(lambda p: p.fetch_quotes(["EMPTY"]))

        assert quote.error == "Quote not found"
        assert quote.regular_market_price is None

    def test_http_error_is_captured_per_symbol(self):
        """
        GIVEN one symbol the API rejects
        WHEN quotes for two symbols are fetched
        THEN one result per symbol is returned, in input order
        """
        quotes = _with_polygon(lambda p: p.fetch_quotes(["AAPL", "FAIL"]))

        assert [q.symbol for q in quotes] == ["AAPL", "FAIL"]
        assert quotes[1].error == "HTTP 500"

    def test_empty_input_makes_no_request(self):
        def handler(request):
            raise AssertionError("no request expected")

        async def _run():
            async with httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="https://api.polygon.io") as client:
                provider = PolygonMarketDataProvider(api_key="k", client=client)
                return await provider.fetch_quotes([]), await provider.fetch_dividends([], 12)

        assert run(_run()) == ([], [])

    def test_api_key_is_sent(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.params.get("apiKey"))
            return httpx.Response(200, json={"results": []})

        async def _run():
            async with httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="https://api.polygon.io") as client:
                await PolygonMarketDataProvider(api_key="secret", client=client).fetch_quotes(["X"])

        run(_run())

        assert seen == ["secret"]


class TestPolygonDividends:
    """Tests for PolygonMarketDataProvider.fetch_dividends."""

    def test_maps_and_sorts_dividends(self):
        """
        GIVEN four dividend records, one without a cash amount and one with a
        non-ISO ex-dividend date
        WHEN dividends are fetched
        THEN valid records map to payments sorted by date with fallback ids
        """
        [result] = _with_polygon(lambda p: p.fetch_dividends(["KO"], 12))

        assert result.error is None
        assert [(d.id, d.date) for d in result.dividends] == [
            ("KO-2024-03-14-1", "2024-03-14"),
            ("div-2", "2024-06-14"),
        ]
        assert result.dividends[0].amount_per_share == Decimal("0.485")

    def test_http_error_is_reported(self):
        [result] = _with_polygon(lambda p: p.fetch_dividends(["BAD"], 12))

        assert result.dividends == []
        assert result.error == "HTTP 500"


class TestStubProvider:
    """Tests for StubMarketDataProvider."""

    def test_known_symbol_prices_are_fixed(self, market_provider):
        [quote] = run(market_provider.fetch_quotes(["ko"]))

        assert quote.regular_market_price == Decimal("61.20")
        assert len(quote.nav_history) == 5

    def test_unknown_symbols_are_seeded(self):
        first = run(StubMarketDataProvider(seed=7).fetch_quotes(["ZZZ"]))
        second = run(StubMarketDataProvider(seed=7).fetch_quotes(["ZZZ"]))

        assert first[0].regular_market_price == second[0].regular_market_price

    def test_quarterly_dividends_within_window(self, market_provider):
        [result] = run(market_provider.fetch_dividends(["KO"], 12))

        assert len(result.dividends) == 4
        assert [d.date for d in result.dividends] == sorted(d.date for d in result.dividends)

    def test_unknown_symbol_has_no_dividends(self, market_provider):
        [result] = run(market_provider.fetch_dividends(["ZZZ"], 12))

        assert result.dividends == []
        assert result.error is None
