"""Market data providers module."""

from dividend_tracker.providers.market_data_provider import MarketDataProvider
from dividend_tracker.providers.stub_provider import StubMarketDataProvider
from dividend_tracker.providers.polygon_provider import PolygonMarketDataProvider

__all__ = [
    "MarketDataProvider",
    "StubMarketDataProvider",
    "PolygonMarketDataProvider",
]
