"""SQLAlchemy ORM model definitions."""

from sqlalchemy import Column, DateTime, Integer, String, Text

from dividend_tracker.repositories.sqlalchemy.database import Base


class StorageEntryORM(Base):
    """Key-value record holding one JSON document (lots, snapshot, active id)."""

    __tablename__ = "storage_entries"

    key = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at_est = Column(DateTime, nullable=True)


class SavedPortfolioORM(Base):
    """SQLAlchemy model for a named saved portfolio."""

    __tablename__ = "saved_portfolios"

    portfolio_id = Column(String(64), primary_key=True)
    sort_order = Column(Integer, nullable=False, default=0)
    name = Column(String(255), nullable=False)
    snapshot_json = Column(Text, nullable=False)
    lots_json = Column(Text, nullable=False)
    created_at = Column(String(40), nullable=True)
    updated_at = Column(String(40), nullable=True)
