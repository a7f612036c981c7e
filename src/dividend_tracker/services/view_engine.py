"""View derivation: reconcile the snapshot with the purchase-lot ledger.

Every read of holdings, dividends and cash flow goes through
``derive_equity_views`` so that tables and reports agree with each other.
"""

from dataclasses import replace
from decimal import Decimal
from typing import Optional

from dividend_tracker.core.symbols import normalize_symbol
from dividend_tracker.domain.models import (
    MANUAL_ENTRY_SECTOR,
    DividendPayment,
    EquityPosition,
    PortfolioSnapshot,
    PurchaseLot,
)
from dividend_tracker.domain.views import DividendPaymentWithShares, EquityWithLots


def group_lots_by_symbol(lots: list[PurchaseLot]) -> dict[str, list[PurchaseLot]]:
    """Group lots by normalized symbol, preserving ledger order within a group."""
    groups: dict[str, list[PurchaseLot]] = {}
    for lot in lots:
        symbol = normalize_symbol(lot.symbol)
        groups.setdefault(symbol, []).append(replace(lot, symbol=symbol))
    return groups


def aggregate_lots(lots: list[PurchaseLot]) -> tuple[Decimal, Decimal]:
    """Return ``(total_shares, total_cost)`` across lots."""
    total_shares = Decimal("0")
    total_cost = Decimal("0")
    for lot in lots:
        total_shares += lot.shares
        total_cost += lot.shares * lot.price_per_share
    return total_shares, total_cost


def earliest_acquisition_date(lots: list[PurchaseLot]) -> Optional[str]:
    if not lots:
        return None
    return min(lot.trade_date for lot in lots)


def filter_dividends_by_acquisition_date(
    dividends: list[DividendPayment],
    acquisition_date: Optional[str],
) -> list[DividendPayment]:
    """Keep dividends paid on or after the acquisition date (all if unknown)."""
    if not acquisition_date:
        return list(dividends)
    return [d for d in dividends if d.date >= acquisition_date]


def shares_at_date(lots: list[PurchaseLot], date: str) -> Decimal:
    """Lot shares acquired on or before ``date``."""
    return sum((lot.shares for lot in lots if lot.trade_date <= date), Decimal("0"))


def _view_for_snapshot_equity(
    equity: EquityPosition,
    lots: list[PurchaseLot],
) -> EquityWithLots:
    total_shares, total_cost = aggregate_lots(lots)
    acquired = earliest_acquisition_date(lots)
    dividends = filter_dividends_by_acquisition_date(equity.dividends, acquired)

    dividends_with_shares = [
        DividendPaymentWithShares(
            id=d.id,
            date=d.date,
            amount_per_share=d.amount_per_share,
            shares_owned=equity.shares + shares_at_date(lots, d.date),
        )
        for d in dividends
    ]

    if total_shares > 0:
        combined_shares = equity.shares + total_shares
        combined_cost = equity.shares * equity.average_cost + total_cost
        position = replace(
            equity,
            shares=combined_shares,
            average_cost=equity.average_cost if combined_shares == 0 else combined_cost / combined_shares,
            dividends=dividends,
        )
    else:
        position = replace(equity, dividends=dividends)

    return EquityWithLots(
        position=position,
        manual_lots=lots,
        manual_total_shares=total_shares,
        manual_total_cost=total_cost,
        earliest_acquisition_date=acquired,
        dividends_with_shares=dividends_with_shares,
    )


def _view_for_lots_only(symbol: str, lots: list[PurchaseLot]) -> EquityWithLots:
    total_shares, total_cost = aggregate_lots(lots)
    average_cost = Decimal("0") if total_shares == 0 else total_cost / total_shares
    position = EquityPosition(
        symbol=symbol,
        name=symbol,
        sector=MANUAL_ENTRY_SECTOR,
        shares=total_shares,
        average_cost=average_cost,
        current_price=lots[-1].price_per_share if lots else average_cost,
        dividends=[],
        nav_history=[],
    )
    # No dividend history until a refresh creates a snapshot entry
    return EquityWithLots(
        position=position,
        manual_lots=lots,
        manual_total_shares=total_shares,
        manual_total_cost=total_cost,
        earliest_acquisition_date=earliest_acquisition_date(lots),
        dividends_with_shares=[],
    )


def derive_equity_views(
    snapshot: PortfolioSnapshot,
    lots: list[PurchaseLot],
) -> list[EquityWithLots]:
    """
    Merge snapshot equities with lots into one view per symbol.

    Snapshot equities are blended with their lots; symbols that only appear in
    lots get a synthesized "Manual Entry" position. Views are sorted by symbol
    in code-point order.
    """
    lots_by_symbol = group_lots_by_symbol(lots)
    views: list[EquityWithLots] = []

    for equity in snapshot.equities:
        key = normalize_symbol(equity.symbol)
        views.append(_view_for_snapshot_equity(equity, lots_by_symbol.get(key, [])))
        lots_by_symbol.pop(key, None)

    for symbol, symbol_lots in lots_by_symbol.items():
        views.append(_view_for_lots_only(symbol, symbol_lots))

    return sorted(views, key=lambda view: view.position.symbol)


def merged_positions(snapshot: PortfolioSnapshot, lots: list[PurchaseLot]) -> list[EquityPosition]:
    """Blended positions of every view."""
    return [view.position for view in derive_equity_views(snapshot, lots)]
