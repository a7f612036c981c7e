"""
Unit tests for the view derivation engine.

Tests cover:
- Blending snapshot positions with lots
- Dividend eligibility and shares owned per payment
- Lots-only symbols
- Case-insensitive symbol grouping and sort order
"""

from decimal import Decimal

from dividend_tracker.domain.models import MANUAL_ENTRY_SECTOR
from dividend_tracker.services.metrics import compute_equity_metrics
from dividend_tracker.services.view_engine import (
    aggregate_lots,
    derive_equity_views,
    earliest_acquisition_date,
    filter_dividends_by_acquisition_date,
    group_lots_by_symbol,
    merged_positions,
    shares_at_date,
)

from tests.conftest import make_dividend, make_lot, make_position, make_snapshot


def _aapl_scenario():
    snapshot = make_snapshot(
        [
            make_position(
                "AAPL",
                shares="0",
                average_cost="150",
                dividends=[
                    make_dividend("d1", "2024-02-01", "0.25"),
                    make_dividend("d2", "2024-05-01", "0.25"),
                ],
            )
        ]
    )
    lots = [
        make_lot("l1", "AAPL", "2024-01-01", "50", "150"),
        make_lot("l2", "AAPL", "2024-03-01", "50", "160"),
    ]
    return snapshot, lots


class TestLotHelpers:
    """Tests for the lot aggregation helpers."""

    def test_group_lots_normalizes_symbols(self):
        lots = [make_lot("a", " aapl ", "2024-01-01", 1, 10), make_lot("b", "AAPL", "2024-02-01", 2, 10)]

        groups = group_lots_by_symbol(lots)

        assert list(groups) == ["AAPL"]
        assert [lot.id for lot in groups["AAPL"]] == ["a", "b"]
        assert all(lot.symbol == "AAPL" for lot in groups["AAPL"])

    def test_aggregate_lots(self):
        shares, cost = aggregate_lots(
            [make_lot("a", "X", "2024-01-01", 2, "10.5"), make_lot("b", "X", "2024-01-02", 3, 20)]
        )

        assert shares == Decimal("5")
        assert cost == Decimal("81.0")

    def test_earliest_acquisition_date(self):
        lots = [make_lot("a", "X", "2024-03-01", 1, 1), make_lot("b", "X", "2024-01-15", 1, 1)]

        assert earliest_acquisition_date(lots) == "2024-01-15"
        assert earliest_acquisition_date([]) is None

    def test_filter_dividends_keeps_payment_on_acquisition_date(self):
        """
        GIVEN dividends before, on and after the acquisition date
        WHEN filtered
        THEN only the one strictly before is dropped
        """
        dividends = [
            make_dividend("before", "2023-12-31", "1"),
            make_dividend("on", "2024-01-01", "1"),
            make_dividend("after", "2024-02-01", "1"),
        ]

        kept = filter_dividends_by_acquisition_date(dividends, "2024-01-01")

        assert [d.id for d in kept] == ["on", "after"]
        assert filter_dividends_by_acquisition_date(dividends, None) == dividends

    def test_shares_at_date_includes_same_day_lots(self):
        lots = [make_lot("a", "X", "2024-01-01", 5, 1), make_lot("b", "X", "2024-02-01", 7, 1)]

        assert shares_at_date(lots, "2024-01-31") == Decimal("5")
        assert shares_at_date(lots, "2024-02-01") == Decimal("12")
        assert shares_at_date(lots, "2023-12-31") == Decimal("0")


class TestDeriveEquityViews:
    """Tests for derive_equity_views."""

    def test_blends_lots_into_snapshot_position(self):
        """
        GIVEN AAPL with zero snapshot shares and lots 50@150 and 50@160
        WHEN views are derived
        THEN shares are 100 and average cost is 155
        """
        snapshot, lots = _aapl_scenario()

        [view] = derive_equity_views(snapshot, lots)

        assert view.position.shares == Decimal("100")
        assert view.position.average_cost == Decimal("155")
        assert view.manual_total_shares == Decimal("100")
        assert view.manual_total_cost == Decimal("15500")
        assert view.earliest_acquisition_date == "2024-01-01"

    def test_shares_owned_counts_lots_held_at_payment(self):
        """
        GIVEN lots on 2024-01-01 and 2024-03-01 of 50 shares each
        WHEN dividends on 2024-02-01 and 2024-05-01 are annotated
        THEN shares owned are 50 and 100
        """
        snapshot, lots = _aapl_scenario()

        [view] = derive_equity_views(snapshot, lots)

        assert [d.shares_owned for d in view.dividends_with_shares] == [Decimal("50"), Decimal("100")]
        assert view.dividends_with_shares[1].total_amount == Decimal("25.00")

    def test_flat_dividend_total_differs_from_per_payment_total(self):
        """
        GIVEN the blended AAPL position
        WHEN metrics are computed
        THEN flat dividends are 100 * 0.5 = 50 while per-payment totals are 37.5
        """
        snapshot, lots = _aapl_scenario()

        [view] = derive_equity_views(snapshot, lots)

        assert compute_equity_metrics(view.position).total_dividends == Decimal("50")
        assert sum(d.total_amount for d in view.dividends_with_shares) == Decimal("37.50")

    def test_dividends_before_first_lot_are_dropped(self):
        snapshot = make_snapshot(
            [make_position("KO", dividends=[make_dividend("old", "2023-12-01", "1"), make_dividend("new", "2024-01-01", "1")])]
        )
        lots = [make_lot("l1", "KO", "2024-01-01", 10, 50)]

        [view] = derive_equity_views(snapshot, lots)

        assert [d.id for d in view.position.dividends] == ["new"]
        assert [d.id for d in view.dividends_with_shares] == ["new"]

    def test_zero_lot_shares_leave_snapshot_values_unchanged(self):
        """
        GIVEN lots summing to zero shares
        WHEN views are derived
        THEN snapshot shares and average cost are untouched
        """
        snapshot = make_snapshot([make_position("MSFT", shares="5", average_cost="300")])
        lots = [make_lot("l1", "MSFT", "2024-01-01", "0", "250")]

        [view] = derive_equity_views(snapshot, lots)

        assert view.position.shares == Decimal("5")
        assert view.position.average_cost == Decimal("300")

    def test_snapshot_shares_count_towards_shares_owned(self):
        snapshot = make_snapshot(
            [make_position("KO", shares="10", dividends=[make_dividend("d", "2024-06-01", "1")])]
        )

        [view] = derive_equity_views(snapshot, [])

        assert view.dividends_with_shares[0].shares_owned == Decimal("10")
        assert view.earliest_acquisition_date is None

    def test_lots_only_symbol_synthesizes_manual_entry(self):
        """
        GIVEN lots for a symbol absent from the snapshot
        WHEN views are derived
        THEN one "Manual Entry" view exists with summed shares and last lot price
        """
        lots = [
            make_lot("l1", "jepi", "2024-01-01", "10", "50"),
            make_lot("l2", "JEPI", "2024-02-01", "30", "60"),
        ]

        [view] = derive_equity_views(make_snapshot(), lots)

        assert view.position.symbol == "JEPI"
        assert view.position.sector == MANUAL_ENTRY_SECTOR
        assert view.position.shares == Decimal("40")
        assert view.position.average_cost == Decimal("57.5")
        assert view.position.current_price == Decimal("60")
        assert view.position.dividends == []
        assert view.dividends_with_shares == []

    def test_case_insensitive_lookup_and_single_view_per_symbol(self):
        snapshot = make_snapshot([make_position("AAPL")])
        lots = [make_lot("l1", "aapl", "2024-01-01", "5", "100")]

        views = derive_equity_views(snapshot, lots)

        assert len(views) == 1
        assert views[0].position.shares == Decimal("5")

    def test_views_sorted_by_symbol_code_point(self):
        snapshot = make_snapshot([make_position("MSFT"), make_position("Ab"), make_position("AAPL")])
        lots = [make_lot("l1", "KO", "2024-01-01", 1, 1)]

        views = derive_equity_views(snapshot, lots)

        assert [v.position.symbol for v in views] == ["AAPL", "Ab", "KO", "MSFT"]

    def test_derivation_is_repeatable(self):
        snapshot, lots = _aapl_scenario()

        assert derive_equity_views(snapshot, lots) == derive_equity_views(snapshot, lots)

    def test_merged_positions_are_view_positions(self):
        snapshot, lots = _aapl_scenario()

        positions = merged_positions(snapshot, lots)

        assert [p.shares for p in positions] == [Decimal("100")]
