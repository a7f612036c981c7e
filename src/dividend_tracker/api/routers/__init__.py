"""API routers package."""

from dividend_tracker.api.routers.portfolio import router as portfolio_router
from dividend_tracker.api.routers.lots import router as lots_router
from dividend_tracker.api.routers.dividends import router as dividends_router
from dividend_tracker.api.routers.market_data import router as market_data_router
from dividend_tracker.api.routers.portfolios import router as portfolios_router
from dividend_tracker.api.routers.analysis import router as analysis_router

__all__ = [
    "portfolio_router",
    "lots_router",
    "dividends_router",
    "market_data_router",
    "portfolios_router",
    "analysis_router",
]
