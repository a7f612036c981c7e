"""Dependency injection for FastAPI."""

from fastapi import Depends

from dividend_tracker.app_context import get_app_context
from dividend_tracker.config.settings import Settings, get_settings
from dividend_tracker.services import AnalysisService, PortfolioStore


def get_app_settings() -> Settings:
    """Provide the current Settings instance."""
    return get_settings()


def get_store() -> PortfolioStore:
    """Provide the shared PortfolioStore instance."""
    context = get_app_context()
    if not context.is_initialized:
        context.initialize()
    return context.store


def get_analysis_service(store: PortfolioStore = Depends(get_store)) -> AnalysisService:
    """Provide AnalysisService instance."""
    return AnalysisService(store)
