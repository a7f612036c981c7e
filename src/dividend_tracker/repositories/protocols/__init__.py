"""Repository protocol definitions (interfaces)."""

from dividend_tracker.repositories.protocols.storage_repo import PortfolioStorage

__all__ = [
    "PortfolioStorage",
]
