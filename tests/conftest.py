"""
Pytest configuration and fixtures for dividend tracker tests.

This module provides:
- In-memory SQLite database fixtures
- Factory helpers for positions, lots and snapshots
- Deterministic, failing and in-memory collaborators for the store
- Service fixtures and the API test client
"""

import asyncio
import os
import tempfile
from decimal import Decimal
from typing import Any, Callable, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from dividend_tracker.main import app
from dividend_tracker.api.deps import get_store
from dividend_tracker.repositories.sqlalchemy.database import Base
# Import ORM models to register them with Base before creating tables
from dividend_tracker.repositories.sqlalchemy import orm_models  # noqa: F401
from dividend_tracker.repositories.sqlalchemy import SqlAlchemyPortfolioStorage
from dividend_tracker.providers.stub_provider import StubMarketDataProvider
from dividend_tracker.services import (
    AnalysisService,
    MarketDataService,
    PortfolioLibrary,
    PortfolioStore,
)
from dividend_tracker.domain.models import (
    DividendPayment,
    EquityPosition,
    NavPoint,
    PortfolioSnapshot,
    PurchaseLot,
    SavedPortfolio,
)
from dividend_tracker.domain.views import DividendResult, QuoteResult
from dividend_tracker.config.settings import reset_settings


# =============================================================================
# DOMAIN HELPERS
# =============================================================================


def make_position(
    symbol: str = "AAPL",
    shares: Any = "0",
    average_cost: Any = "150",
    current_price: Any = "180",
    dividends: Optional[list[DividendPayment]] = None,
    nav_history: Optional[list[NavPoint]] = None,
    name: Optional[str] = None,
    sector: str = "Technology",
) -> EquityPosition:
    """Create an EquityPosition with Decimal fields."""
    return EquityPosition(
        symbol=symbol,
        name=name or symbol,
        sector=sector,
        shares=Decimal(str(shares)),
        average_cost=Decimal(str(average_cost)),
        current_price=Decimal(str(current_price)),
        dividends=dividends or [],
        nav_history=nav_history or [],
    )


def make_lot(
    lot_id: str,
    symbol: str,
    trade_date: str,
    shares: Any,
    price: Any,
) -> PurchaseLot:
    return PurchaseLot(
        id=lot_id,
        symbol=symbol,
        trade_date=trade_date,
        shares=Decimal(str(shares)),
        price_per_share=Decimal(str(price)),
    )


def make_dividend(dividend_id: str, date: str, amount: Any) -> DividendPayment:
    return DividendPayment(id=dividend_id, date=date, amount_per_share=Decimal(str(amount)))


def make_snapshot(equities: Optional[list[EquityPosition]] = None, **kwargs) -> PortfolioSnapshot:
    return PortfolioSnapshot(as_of=kwargs.pop("as_of", "2024-06-30"), equities=equities or [], **kwargs)


def run(coro):
    """Drive a coroutine to completion from a synchronous test."""
    return asyncio.run(coro)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    # Reset settings for clean state
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# STORAGE FIXTURES
# =============================================================================


@pytest.fixture
def storage(test_session) -> SqlAlchemyPortfolioStorage:
    """Provide SQLite-backed portfolio storage."""
    return SqlAlchemyPortfolioStorage(test_session)


class InMemoryPortfolioStorage:
    """
    Dictionary-backed storage for store unit tests.

    Keeps the persisted objects as-is and counts writes per record.
    """

    def __init__(self):
        self.lots: Optional[list[PurchaseLot]] = None
        self.snapshot: Optional[PortfolioSnapshot] = None
        self.saved: list[SavedPortfolio] = []
        self.active_id: Optional[str] = None
        self.writes: dict[str, int] = {"lots": 0, "snapshot": 0}

    def load_custom_lots(self, parser, fallback):
        return list(self.lots) if self.lots is not None else fallback

    def persist_custom_lots(self, lots):
        self.lots = list(lots)
        self.writes["lots"] += 1

    def load_snapshot(self, parser, fallback):
        return self.snapshot if self.snapshot is not None else fallback

    def persist_snapshot(self, snapshot):
        self.snapshot = snapshot
        self.writes["snapshot"] += 1

    def load_saved_portfolios(self):
        return list(self.saved)

    def save_saved_portfolios(self, portfolios):
        self.saved = list(portfolios)

    def get_active_portfolio_id(self):
        return self.active_id

    def set_active_portfolio_id(self, portfolio_id):
        self.active_id = portfolio_id


@pytest.fixture
def memory_storage() -> InMemoryPortfolioStorage:
    return InMemoryPortfolioStorage()


# =============================================================================
# MARKET DATA FIXTURES
# =============================================================================


class DeterministicMarketProvider:
    """
    Deterministic market data provider for testing.

    Returns fixed prices and dividends; unknown symbols get a per-symbol error.
    Records every call for assertions.
    """

    FIXED_PRICES = {
        "AAPL": Decimal("190.00"),
        "MSFT": Decimal("400.00"),
        "KO": Decimal("60.00"),
    }

    FIXED_DIVIDENDS = {
        "AAPL": [DividendPayment("aapl-new-1", "2024-08-15", Decimal("0.25"))],
        "KO": [
            DividendPayment("ko-1", "2024-04-01", Decimal("0.485")),
            DividendPayment("ko-2", "2024-07-01", Decimal("0.485")),
        ],
    }

    def __init__(self):
        self.quote_calls: list[list[str]] = []
        self.dividend_calls: list[tuple[list[str], int]] = []

    async def fetch_quotes(self, symbols: list[str]) -> list[QuoteResult]:
        self.quote_calls.append(list(symbols))
        results = []
        for symbol in symbols:
            price = self.FIXED_PRICES.get(symbol.upper())
            if price is None:
                results.append(QuoteResult(symbol=symbol, error="Quote not found"))
                continue
            results.append(
                QuoteResult(
                    symbol=symbol,
                    regular_market_price=price,
                    currency="USD",
                    nav_history=[NavPoint("2024-06-01", price - 10), NavPoint("2024-07-01", price)],
                )
            )
        return results

    async def fetch_dividends(self, symbols: list[str], months_back: int) -> list[DividendResult]:
        self.dividend_calls.append((list(symbols), months_back))
        results = []
        for symbol in symbols:
            dividends = self.FIXED_DIVIDENDS.get(symbol.upper())
            if dividends is None:
                results.append(DividendResult(symbol=symbol, error="HTTP 404"))
            else:
                results.append(DividendResult(symbol=symbol, dividends=list(dividends)))
        return results


class FailingMarketProvider:
    """Market provider that always raises an exception."""

    async def fetch_quotes(self, symbols: list[str]) -> list[QuoteResult]:
        raise ConnectionError("Network unavailable")

    async def fetch_dividends(self, symbols: list[str], months_back: int) -> list[DividendResult]:
        raise ConnectionError("Network unavailable")


@pytest.fixture
def deterministic_provider() -> DeterministicMarketProvider:
    """Provide deterministic market data provider."""
    return DeterministicMarketProvider()


@pytest.fixture
def failing_provider() -> FailingMarketProvider:
    """Provide a market provider that always fails."""
    return FailingMarketProvider()


@pytest.fixture
def market_provider() -> StubMarketDataProvider:
    """Provide offline stub provider with fixed seed."""
    return StubMarketDataProvider(seed=42)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def market_data_service(deterministic_provider) -> MarketDataService:
    """Provide MarketDataService with deterministic provider."""
    return MarketDataService(provider=deterministic_provider)


@pytest.fixture
def empty_store(memory_storage, market_data_service) -> PortfolioStore:
    """Store over in-memory storage with an empty snapshot and no lots."""
    memory_storage.snapshot = make_snapshot()
    return PortfolioStore(
        storage=memory_storage,
        market_data=market_data_service,
        sample_lots_factory=list,
    )


@pytest.fixture
def store_factory(memory_storage, market_data_service) -> Callable[..., PortfolioStore]:
    """Factory for stores seeded with a snapshot and lots."""

    def _create_store(
        equities: Optional[list[EquityPosition]] = None,
        lots: Optional[list[PurchaseLot]] = None,
        provider=None,
        **snapshot_fields,
    ) -> PortfolioStore:
        memory_storage.snapshot = make_snapshot(equities, **snapshot_fields)
        memory_storage.lots = list(lots or [])
        market_data = MarketDataService(provider) if provider is not None else market_data_service
        return PortfolioStore(
            storage=memory_storage,
            market_data=market_data,
            sample_lots_factory=list,
        )

    return _create_store


@pytest.fixture
def sqlite_store(storage, market_provider) -> PortfolioStore:
    """Store over SQLite storage, starting from the sample portfolio."""
    return PortfolioStore(storage=storage, market_data=MarketDataService(market_provider))


@pytest.fixture
def library(storage) -> PortfolioLibrary:
    return PortfolioLibrary(storage)


@pytest.fixture
def analysis_factory(store_factory) -> Callable[..., AnalysisService]:
    def _create(**kwargs) -> AnalysisService:
        return AnalysisService(store_factory(**kwargs))

    return _create


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def api_store(storage, deterministic_provider) -> PortfolioStore:
    """Store behind the API client: SQLite storage, sample portfolio."""
    return PortfolioStore(storage=storage, market_data=MarketDataService(deterministic_provider))


@pytest.fixture
def client(api_store) -> TestClient:
    """Provide FastAPI test client backed by the test store."""
    app.dependency_overrides[get_store] = lambda: api_store
    yield TestClient(app)
    app.dependency_overrides.clear()


# =============================================================================
# TEMP FILE FIXTURES
# =============================================================================


@pytest.fixture
def temp_json_file():
    """Provide a temporary JSON file path that is cleaned up after test."""
    with tempfile.NamedTemporaryFile(
        mode="w",
        suffix=".json",
        delete=False,
        encoding="utf-8",
    ) as f:
        tmp_path = f.name

    yield tmp_path

    # Cleanup
    if os.path.exists(tmp_path):
        os.unlink(tmp_path)


@pytest.fixture
def sample_export() -> dict:
    """A portfolio document as written by the exporter."""
    return {
        "snapshot": {
            "asOf": "2024-06-30",
            "cashPosition": 125.5,
            "seedAmount": 10000,
            "seedDate": "2024-01-01",
            "equities": [
                {
                    "symbol": "KO",
                    "name": "Coca-Cola",
                    "sector": "Consumer Staples",
                    "shares": 0,
                    "averageCost": 58.0,
                    "currentPrice": 61.0,
                    "dividends": [
                        {"id": "ko-q1", "date": "2024-04-01", "amountPerShare": 0.485},
                        {"id": "ko-q2", "date": "2024-07-01", "amount": 0.485},
                    ],
                    "navHistory": [{"date": "2024-06-01", "value": 60.0}],
                }
            ],
        },
        "customLots": [
            {
                "id": "lot-ko-1",
                "symbol": "KO",
                "tradeDate": "2024-02-01",
                "shares": 10,
                "pricePerShare": 58.0,
            }
        ],
    }
