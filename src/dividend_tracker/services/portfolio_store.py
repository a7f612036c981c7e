"""Reconciliation store: canonical portfolio state and its mutations."""

import logging
import uuid
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Callable, Optional

from dividend_tracker.core.symbols import normalize_symbol
from dividend_tracker.core.timezone import now_iso
from dividend_tracker.data import sample_portfolio, sample_purchase_lots
from dividend_tracker.domain.models import (
    MANUAL_ENTRY_SECTOR,
    EquityPosition,
    PortfolioMetadata,
    PortfolioSnapshot,
    PurchaseLot,
    SavedPortfolio,
)
from dividend_tracker.domain.serialization import parse_lots, parse_stored_snapshot
from dividend_tracker.domain.views import DividendResult, EquityWithLots, QuoteResult, RefreshStatus
from dividend_tracker.repositories.protocols import PortfolioStorage
from dividend_tracker.services.market_data_service import (
    MarketDataService,
    merge_dividends_into_positions,
    merge_quotes_into_positions,
)
from dividend_tracker.services.portfolio_library import PortfolioLibrary
from dividend_tracker.services.view_engine import (
    aggregate_lots,
    derive_equity_views,
    merged_positions,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass
class PurchaseLotUpdate:
    """Partial update data for editing a purchase lot."""

    symbol: Optional[str] = None
    trade_date: Optional[str] = None
    shares: Optional[Decimal] = None
    price_per_share: Optional[Decimal] = None


def new_lot_id() -> str:
    return f"lot-{uuid.uuid4()}"


def new_portfolio_id() -> str:
    return f"portfolio-{uuid.uuid4()}"


def sanitize_snapshot(snapshot: PortfolioSnapshot) -> PortfolioSnapshot:
    """Zero every equity's snapshot shares; lots are the only source of held shares."""
    return replace(
        snapshot,
        equities=[replace(equity, shares=ZERO) for equity in snapshot.equities],
    )


def seed_lots_from_snapshot(snapshot: PortfolioSnapshot) -> list[PurchaseLot]:
    """One lot per equity holding snapshot shares, dated at the snapshot's ``as_of``."""
    holding = [equity for equity in snapshot.equities if equity.shares > 0]
    return [
        PurchaseLot(
            id=f"seed-{equity.symbol}-{index}",
            symbol=equity.symbol,
            trade_date=snapshot.as_of,
            shares=equity.shares,
            price_per_share=equity.average_cost,
        )
        for index, equity in enumerate(holding)
    ]


def merge_seed_lots(existing: list[PurchaseLot], seeds: list[PurchaseLot]) -> list[PurchaseLot]:
    """Append seed lots for symbols that have no existing lot."""
    existing_symbols = {normalize_symbol(lot.symbol) for lot in existing}
    missing = [seed for seed in seeds if normalize_symbol(seed.symbol) not in existing_symbols]
    return [*existing, *missing]


def _is_valid_lot(lot: object) -> bool:
    return (
        isinstance(lot, PurchaseLot)
        and isinstance(lot.id, str)
        and isinstance(lot.symbol, str)
        and isinstance(lot.trade_date, str)
    )


def _symbol_union(snapshot: PortfolioSnapshot, lots: list[PurchaseLot]) -> list[str]:
    """Snapshot symbols first, then lot symbols; normalized, de-duplicated, blanks dropped."""
    symbols: list[str] = []
    seen: set[str] = set()
    for raw in [*(e.symbol for e in snapshot.equities), *(lot.symbol for lot in lots)]:
        symbol = normalize_symbol(raw)
        if symbol and symbol not in seen:
            seen.add(symbol)
            symbols.append(symbol)
    return symbols


def _lots_for(lots: list[PurchaseLot], symbol: str) -> list[PurchaseLot]:
    key = normalize_symbol(symbol)
    return [lot for lot in lots if normalize_symbol(lot.symbol) == key]


def _error_summary(prefix: str, results: list) -> Optional[str]:
    failed = [r for r in results if r.error]
    if not failed:
        return None
    return prefix + ", ".join(f"{r.symbol} ({r.error})" for r in failed)


class PortfolioStore:
    """
    Canonical portfolio state: a snapshot plus the purchase-lot ledger.

    Every mutation replaces state and persists it through the storage gateway.
    Reads go through the view engine (``equity_views``/``merged_positions``).
    Refreshes are coroutines; two in-flight refreshes are not serialized and the
    last one to complete wins.
    """

    def __init__(
        self,
        storage: PortfolioStorage,
        market_data: MarketDataService,
        library: Optional[PortfolioLibrary] = None,
        sample_snapshot_factory: Callable[[], PortfolioSnapshot] = sample_portfolio,
        sample_lots_factory: Callable[[], list[PurchaseLot]] = sample_purchase_lots,
    ):
        self._storage = storage
        self._market_data = market_data
        self._library = library or PortfolioLibrary(storage)
        self._sample_snapshot_factory = sample_snapshot_factory

        stored_lots = storage.load_custom_lots(parse_lots, [])
        stored_snapshot = storage.load_snapshot(parse_stored_snapshot, None)

        if stored_snapshot is not None:
            self.snapshot = sanitize_snapshot(stored_snapshot)
        else:
            self.snapshot = sanitize_snapshot(sample_snapshot_factory())
            storage.persist_snapshot(self.snapshot)

        if stored_lots:
            self.custom_lots = stored_lots
        else:
            self.custom_lots = sample_lots_factory()
            if self.custom_lots:
                storage.persist_custom_lots(self.custom_lots)

        self.active_portfolio_id: Optional[str] = storage.get_active_portfolio_id()
        self.active_portfolio_name: Optional[str] = None
        self.quote_status = RefreshStatus()
        self.dividend_status = RefreshStatus()

    # Read side

    def equity_views(self) -> list[EquityWithLots]:
        return derive_equity_views(self.snapshot, self.custom_lots)

    def merged_positions(self) -> list[EquityPosition]:
        return merged_positions(self.snapshot, self.custom_lots)

    # Snapshot and lot mutations

    def set_snapshot(self, snapshot: PortfolioSnapshot) -> None:
        sanitized = sanitize_snapshot(snapshot)
        self._storage.persist_snapshot(sanitized)
        self.snapshot = sanitized

    def load_portfolio(self, snapshot: PortfolioSnapshot, lots: list[PurchaseLot]) -> None:
        """
        Replace state with an imported snapshot and lot ledger.

        Shares held directly by the incoming snapshot become seed lots dated at
        its ``as_of``, unless the ledger already has lots for that symbol.
        """
        sanitized = sanitize_snapshot(snapshot)
        seeds = seed_lots_from_snapshot(snapshot)
        merged = merge_seed_lots([lot for lot in lots if _is_valid_lot(lot)], seeds)

        self._storage.persist_custom_lots(merged)
        self._storage.persist_snapshot(sanitized)
        self.snapshot = sanitized
        self.custom_lots = merged

    def add_purchase_lot(self, lot: PurchaseLot) -> PurchaseLot:
        updated = [*self.custom_lots, lot]
        self._storage.persist_custom_lots(updated)
        self.custom_lots = updated
        return lot

    def update_purchase_lot(self, lot_id: str, updates: PurchaseLotUpdate) -> Optional[PurchaseLot]:
        """Apply the non-None fields of ``updates``; returns None for an unknown id."""
        changes = {key: value for key, value in vars(updates).items() if value is not None}
        updated_lot = None
        updated = []
        for lot in self.custom_lots:
            if lot.id == lot_id:
                lot = replace(lot, **changes)
                updated_lot = lot
            updated.append(lot)

        self._storage.persist_custom_lots(updated)
        self.custom_lots = updated
        return updated_lot

    def remove_purchase_lot(self, lot_id: str) -> bool:
        """
        Remove a lot and prune snapshot equities left with nothing to track.

        An equity is dropped when it has zero snapshot shares and no remaining
        lot for its symbol.
        """
        updated_lots = [lot for lot in self.custom_lots if lot.id != lot_id]
        removed = len(updated_lots) != len(self.custom_lots)
        self._storage.persist_custom_lots(updated_lots)

        symbols_with_lots = {normalize_symbol(lot.symbol) for lot in updated_lots}
        kept = [
            equity
            for equity in self.snapshot.equities
            if equity.shares > 0 or normalize_symbol(equity.symbol) in symbols_with_lots
        ]
        updated_snapshot = replace(self.snapshot, equities=kept)
        self._storage.persist_snapshot(updated_snapshot)

        self.custom_lots = updated_lots
        self.snapshot = updated_snapshot
        return removed

    def remove_dividend(self, symbol: str, dividend_id: str) -> bool:
        key = normalize_symbol(symbol)
        removed = False
        equities = []
        for equity in self.snapshot.equities:
            if normalize_symbol(equity.symbol) == key:
                kept = [d for d in equity.dividends if d.id != dividend_id]
                removed = removed or len(kept) != len(equity.dividends)
                equity = replace(equity, dividends=kept)
            equities.append(equity)

        updated_snapshot = replace(self.snapshot, equities=equities)
        self._storage.persist_snapshot(updated_snapshot)
        self.snapshot = updated_snapshot
        return removed

    # Market data refreshes

    async def refresh_quotes(self) -> list[QuoteResult]:
        """
        Fetch prices for every tracked symbol and merge them into the snapshot.

        Symbols with a price but no snapshot entry get a new "Manual Entry"
        position. Per-symbol failures end up in ``quote_status.error``.
        """
        snapshot = self.snapshot
        lots = self.custom_lots
        symbols = _symbol_union(snapshot, lots)
        if not symbols:
            return []

        self.quote_status = replace(self.quote_status, is_loading=True, error=None)
        try:
            quotes = await self._market_data.fetch_quotes(symbols)

            equities = merge_quotes_into_positions(snapshot.equities, quotes)
            existing = {normalize_symbol(e.symbol) for e in equities}
            for quote in quotes:
                key = normalize_symbol(quote.symbol)
                if key in existing or not quote.regular_market_price:
                    continue
                total_shares, total_cost = aggregate_lots(_lots_for(lots, key))
                price = quote.regular_market_price
                equities.append(
                    EquityPosition(
                        symbol=quote.symbol,
                        name=quote.symbol,
                        sector=MANUAL_ENTRY_SECTOR,
                        shares=ZERO,
                        average_cost=total_cost / total_shares if total_shares > 0 else price,
                        current_price=price,
                        dividends=[],
                        nav_history=list(quote.nav_history or []),
                    )
                )
                existing.add(key)

            error = _error_summary("Failed to refresh: ", quotes)
            now = now_iso()
            updated_snapshot = replace(snapshot, equities=equities, last_price_update=now)
            self._storage.persist_snapshot(updated_snapshot)
            self.snapshot = updated_snapshot
            self.quote_status = RefreshStatus(is_loading=False, last_updated=now, error=error)
        finally:
            self.quote_status.is_loading = False

        if error:
            logger.warning(error)
        logger.info("Refreshed quotes for %d symbols", len(symbols))
        return quotes

    async def refresh_dividends(self, months_back: int = 12) -> list[DividendResult]:
        """Fetch dividend histories for every tracked symbol and merge them."""
        snapshot = self.snapshot
        lots = self.custom_lots
        symbols = _symbol_union(snapshot, lots)
        if not symbols:
            return []

        self.dividend_status = replace(self.dividend_status, is_loading=True, error=None)
        try:
            results = await self._market_data.fetch_dividends(symbols, months_back)

            equities = merge_dividends_into_positions(snapshot.equities, results)
            existing = {normalize_symbol(e.symbol) for e in equities}
            for result in results:
                key = normalize_symbol(result.symbol)
                if key in existing or not result.dividends:
                    continue
                total_shares, total_cost = aggregate_lots(_lots_for(lots, key))
                average_cost = total_cost / total_shares if total_shares > 0 else ZERO
                # Placeholder price until the next quote refresh
                equities.append(
                    EquityPosition(
                        symbol=result.symbol,
                        name=result.symbol,
                        sector=MANUAL_ENTRY_SECTOR,
                        shares=ZERO,
                        average_cost=average_cost,
                        current_price=average_cost,
                        dividends=list(result.dividends),
                        nav_history=[],
                    )
                )
                existing.add(key)

            error = _error_summary("Failed to refresh dividends: ", results)
            now = now_iso()
            updated_snapshot = replace(snapshot, equities=equities, last_dividend_update=now)
            self._storage.persist_snapshot(updated_snapshot)
            self.snapshot = updated_snapshot
            self.dividend_status = RefreshStatus(is_loading=False, last_updated=now, error=error)
        finally:
            self.dividend_status.is_loading = False

        if error:
            logger.warning(error)
        logger.info("Refreshed dividends for %d symbols (%d months)", len(symbols), months_back)
        return results

    # Saved portfolios

    def save_current_portfolio(self, name: str) -> SavedPortfolio:
        portfolio_id = self.active_portfolio_id or new_portfolio_id()
        saved = self._library.save_portfolio(portfolio_id, name, self.snapshot, self.custom_lots)
        self._storage.set_active_portfolio_id(portfolio_id)
        self.active_portfolio_id = portfolio_id
        self.active_portfolio_name = name
        return saved

    def load_saved_portfolio(self, portfolio_id: str) -> bool:
        portfolio = self._library.load_portfolio_by_id(portfolio_id)
        if portfolio is None:
            return False

        sanitized = sanitize_snapshot(portfolio.snapshot)
        self._storage.persist_snapshot(sanitized)
        self._storage.persist_custom_lots(portfolio.custom_lots)
        self._storage.set_active_portfolio_id(portfolio_id)

        self.snapshot = sanitized
        self.custom_lots = list(portfolio.custom_lots)
        self.active_portfolio_id = portfolio_id
        self.active_portfolio_name = portfolio.name
        return True

    def delete_saved_portfolio(self, portfolio_id: str) -> bool:
        deleted = self._library.delete_portfolio(portfolio_id)
        if deleted and self.active_portfolio_id == portfolio_id:
            self.active_portfolio_id = None
            self.active_portfolio_name = None
        return deleted

    def rename_saved_portfolio(self, portfolio_id: str, new_name: str) -> bool:
        renamed = self._library.rename_portfolio(portfolio_id, new_name)
        if renamed and self.active_portfolio_id == portfolio_id:
            self.active_portfolio_name = new_name
        return renamed

    def get_saved_portfolios(self) -> list[PortfolioMetadata]:
        return self._library.list_metadata()

    def create_new_portfolio(self, name: str) -> SavedPortfolio:
        """Start a fresh portfolio from the sample snapshot with an empty ledger."""
        portfolio_id = new_portfolio_id()
        snapshot = sanitize_snapshot(self._sample_snapshot_factory())
        lots: list[PurchaseLot] = []

        self._storage.persist_snapshot(snapshot)
        self._storage.persist_custom_lots(lots)
        self._storage.set_active_portfolio_id(portfolio_id)

        self.snapshot = snapshot
        self.custom_lots = lots
        self.active_portfolio_id = portfolio_id
        self.active_portfolio_name = name

        return self._library.save_portfolio(portfolio_id, name, snapshot, lots)
