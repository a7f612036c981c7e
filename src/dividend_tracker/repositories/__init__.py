"""Repository layer - data access abstractions and implementations."""

from dividend_tracker.repositories.protocols import PortfolioStorage
from dividend_tracker.repositories.sqlalchemy import SqlAlchemyPortfolioStorage

__all__ = [
    "PortfolioStorage",
    "SqlAlchemyPortfolioStorage",
]
