"""SQLAlchemy implementation of PortfolioStorage."""

import logging
from typing import Any, Callable, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dividend_tracker.core.timezone import now_eastern
from dividend_tracker.domain.models import PortfolioSnapshot, PurchaseLot, SavedPortfolio
from dividend_tracker.domain.serialization import (
    decode_json,
    encode_json,
    lot_to_dict,
    parse_lots,
    parse_stored_snapshot,
    snapshot_to_dict,
)
from dividend_tracker.repositories.sqlalchemy.orm_models import SavedPortfolioORM, StorageEntryORM

logger = logging.getLogger(__name__)

T = TypeVar("T")

LOTS_KEY = "portfolio-custom-lots"
SNAPSHOT_KEY = "portfolio-snapshot"
ACTIVE_PORTFOLIO_KEY = "active-portfolio-id"


class SqlAlchemyPortfolioStorage:
    """
    SQLAlchemy-backed portfolio storage.

    The lot ledger, the active snapshot and the active portfolio id are JSON
    documents in ``storage_entries``; saved portfolios are rows of
    ``saved_portfolios`` kept in insertion order.
    """

    def __init__(self, db: Session):
        self._db = db

    def load_custom_lots(self, parser: Callable[[Any], T], fallback: T) -> T:
        return self._load(LOTS_KEY, parser, fallback)

    def persist_custom_lots(self, lots: list[PurchaseLot]) -> None:
        self._persist(LOTS_KEY, [lot_to_dict(lot) for lot in lots])

    def load_snapshot(self, parser: Callable[[Any], T], fallback: T) -> T:
        return self._load(SNAPSHOT_KEY, parser, fallback)

    def persist_snapshot(self, snapshot: PortfolioSnapshot) -> None:
        self._persist(SNAPSHOT_KEY, snapshot_to_dict(snapshot))

    def load_saved_portfolios(self) -> list[SavedPortfolio]:
        """List saved portfolios; unreadable rows are skipped."""
        try:
            rows = self._db.query(SavedPortfolioORM).order_by(SavedPortfolioORM.sort_order).all()
        except SQLAlchemyError as exc:
            logger.warning("Failed to load saved portfolios: %s", exc)
            return []

        portfolios = []
        for row in rows:
            portfolio = self._to_domain(row)
            if portfolio is None:
                logger.warning("Skipping unreadable saved portfolio %s", row.portfolio_id)
                continue
            portfolios.append(portfolio)
        return portfolios

    def save_saved_portfolios(self, portfolios: list[SavedPortfolio]) -> None:
        """Replace all saved portfolio rows with ``portfolios``, in order."""
        try:
            self._db.query(SavedPortfolioORM).delete()
            for index, portfolio in enumerate(portfolios):
                self._db.add(
                    SavedPortfolioORM(
                        portfolio_id=portfolio.id,
                        sort_order=index,
                        name=portfolio.name,
                        snapshot_json=encode_json(snapshot_to_dict(portfolio.snapshot)),
                        lots_json=encode_json([lot_to_dict(lot) for lot in portfolio.custom_lots]),
                        created_at=portfolio.created_at,
                        updated_at=portfolio.updated_at,
                    )
                )
            self._db.commit()
        except (SQLAlchemyError, TypeError, ValueError) as exc:
            self._db.rollback()
            logger.warning("Failed to save portfolios: %s", exc)

    def get_active_portfolio_id(self) -> Optional[str]:
        value = self._load(ACTIVE_PORTFOLIO_KEY, lambda data: data, None)
        return value if isinstance(value, str) else None

    def set_active_portfolio_id(self, portfolio_id: Optional[str]) -> None:
        if portfolio_id is not None:
            self._persist(ACTIVE_PORTFOLIO_KEY, portfolio_id)
            return
        try:
            self._db.query(StorageEntryORM).filter(
                StorageEntryORM.key == ACTIVE_PORTFOLIO_KEY
            ).delete()
            self._db.commit()
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.warning("Failed to clear active portfolio id: %s", exc)

    def _load(self, key: str, parser: Callable[[Any], T], fallback: T) -> T:
        try:
            entry = self._db.get(StorageEntryORM, key)
        except SQLAlchemyError as exc:
            logger.warning("Failed to load %s from storage: %s", key, exc)
            return fallback
        if entry is None or not entry.value:
            return fallback
        try:
            return parser(decode_json(entry.value))
        except Exception as exc:
            # Corrupt records fall back rather than failing startup
            logger.warning("Failed to parse %s from storage: %s", key, exc)
            return fallback

    def _persist(self, key: str, data: Any) -> None:
        try:
            raw = encode_json(data)
            entry = self._db.get(StorageEntryORM, key)
            if entry is None:
                self._db.add(StorageEntryORM(key=key, value=raw, updated_at_est=now_eastern()))
            else:
                entry.value = raw
                entry.updated_at_est = now_eastern()
            self._db.commit()
        except (SQLAlchemyError, TypeError, ValueError) as exc:
            self._db.rollback()
            logger.warning("Failed to persist %s: %s", key, exc)

    @staticmethod
    def _to_domain(orm: SavedPortfolioORM) -> Optional[SavedPortfolio]:
        """Convert ORM model to domain model (None when the JSON is unreadable)."""
        try:
            snapshot = parse_stored_snapshot(decode_json(orm.snapshot_json))
            lots = parse_lots(decode_json(orm.lots_json))
        except ValueError:
            return None
        if snapshot is None:
            return None
        return SavedPortfolio(
            id=orm.portfolio_id,
            name=orm.name,
            snapshot=snapshot,
            custom_lots=lots,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )
