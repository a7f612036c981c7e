"""Application context: the composition root for in-process services.

The portfolio store is stateful, so one context (and one store) is shared by
every request the HTTP surface serves.
"""

import logging
from pathlib import Path
from typing import Optional

from sqlalchemy.orm import Session

from dividend_tracker.config.settings import Settings, get_settings, set_settings
from dividend_tracker.repositories.sqlalchemy.database import (
    get_session,
    init_db,
    init_db_with_path,
    reset_database,
)
from dividend_tracker.repositories.sqlalchemy import SqlAlchemyPortfolioStorage
from dividend_tracker.providers import (
    MarketDataProvider,
    PolygonMarketDataProvider,
    StubMarketDataProvider,
)
from dividend_tracker.services import AnalysisService, MarketDataService, PortfolioStore

logger = logging.getLogger(__name__)


def create_market_data_provider(settings: Settings) -> MarketDataProvider:
    """Build the market data provider selected by settings."""
    if settings.use_polygon():
        if not settings.polygon_api_key:
            logger.warning("Polygon selected without an API key; requests will be rejected")
        return PolygonMarketDataProvider(
            api_key=settings.polygon_api_key or "",
            base_url=settings.polygon_base_url,
            nav_history_months=settings.nav_history_months,
        )
    return StubMarketDataProvider()


class AppContext:
    """
    Application context providing in-process access to all services.

    Services are created lazily on first access and share one database session.
    """

    def __init__(self, data_dir: Optional[Path] = None):
        self._data_dir = data_dir
        self._session: Optional[Session] = None
        self._initialized = False

        self._storage: Optional[SqlAlchemyPortfolioStorage] = None
        self._market_data_service: Optional[MarketDataService] = None
        self._store: Optional[PortfolioStore] = None
        self._analysis_service: Optional[AnalysisService] = None

    def initialize(self, data_dir: Optional[Path] = None) -> None:
        """
        Initialize or reinitialize the application with a data directory.

        Args:
            data_dir: Data directory path. Uses the configured one if not provided.
        """
        if data_dir:
            self._data_dir = data_dir

        settings = get_settings()
        if self._data_dir:
            settings = settings.model_copy(update={"data_dir": self._data_dir})
            set_settings(settings)

        self.close()
        reset_database()
        if settings.database_url:
            init_db()
        else:
            init_db_with_path(settings.get_data_dir() / "portfolio.db")

        self._storage = None
        self._market_data_service = None
        self._store = None
        self._analysis_service = None

        self._initialized = True
        logger.info("Application data directory: %s", settings.get_data_dir())

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def data_dir(self) -> Path:
        return get_settings().get_data_dir()

    def _get_session(self) -> Session:
        if self._session is None:
            self._session = get_session()
        return self._session

    @property
    def storage(self) -> SqlAlchemyPortfolioStorage:
        if self._storage is None:
            self._storage = SqlAlchemyPortfolioStorage(self._get_session())
        return self._storage

    @property
    def market_data(self) -> MarketDataService:
        """Get the MarketDataService instance."""
        if self._market_data_service is None:
            self._market_data_service = MarketDataService(
                provider=create_market_data_provider(get_settings())
            )
        return self._market_data_service

    @property
    def store(self) -> PortfolioStore:
        """Get the PortfolioStore instance (loads persisted state on first access)."""
        if self._store is None:
            self._store = PortfolioStore(storage=self.storage, market_data=self.market_data)
        return self._store

    @property
    def analysis(self) -> AnalysisService:
        """Get the AnalysisService instance."""
        if self._analysis_service is None:
            self._analysis_service = AnalysisService(self.store)
        return self._analysis_service

    def close(self) -> None:
        """Clean up resources."""
        if self._session:
            self._session.close()
            self._session = None


# Global application context (shared by the HTTP surface)
_app_context: Optional[AppContext] = None


def get_app_context() -> AppContext:
    """Get or create the global application context."""
    global _app_context
    if _app_context is None:
        _app_context = AppContext()
    return _app_context


def set_app_context(context: AppContext) -> None:
    """Set the global application context."""
    global _app_context
    _app_context = context
