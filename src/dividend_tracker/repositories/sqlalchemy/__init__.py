"""SQLAlchemy repository implementations."""

from dividend_tracker.repositories.sqlalchemy.database import (
    Base,
    get_engine,
    get_session,
    get_session_factory,
    init_db,
    init_db_with_path,
    reset_database,
)
from dividend_tracker.repositories.sqlalchemy.storage_repo import SqlAlchemyPortfolioStorage

__all__ = [
    "Base",
    "get_engine",
    "get_session",
    "get_session_factory",
    "init_db",
    "init_db_with_path",
    "reset_database",
    "SqlAlchemyPortfolioStorage",
]
