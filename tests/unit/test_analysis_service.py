"""
Unit tests for AnalysisService.

Tests cover:
- Overview and performance restricted to held positions
- Recent payouts ordering and limit
- Month-by-month cash flow with per-payment share counts
- Seed capital updates
"""

from decimal import Decimal

import pytest

from dividend_tracker.services import AnalysisService

from tests.conftest import make_dividend, make_lot, make_position


@pytest.fixture
def analysis(analysis_factory) -> AnalysisService:
    """
    KO held through two lots (10 @ 50 in March, 10 @ 55 in May) with two
    dividends of 0.50, plus an AAPL entry with no shares at all.
    """
    return analysis_factory(
        equities=[
            make_position(
                "KO",
                shares=0,
                average_cost=0,
                current_price=60,
                dividends=[
                    make_dividend("ko-1", "2024-04-01", "0.5"),
                    make_dividend("ko-2", "2024-07-01", "0.5"),
                ],
            ),
            make_position("AAPL", shares=0, dividends=[make_dividend("aapl-1", "2024-05-15", "0.25")]),
        ],
        lots=[
            make_lot("l1", "KO", "2024-03-15", 10, 50),
            make_lot("l2", "KO", "2024-05-10", 10, 55),
        ],
        seed_amount=Decimal("2000"),
        seed_date="2024-03-01",
    )


# =============================================================================
# HEADLINE FIGURES
# =============================================================================


class TestOverview:
    """Tests for overview and performance rows."""

    def test_overview_counts_only_held_positions(self, analysis):
        """
        GIVEN KO held with 20 shares and AAPL with none
        WHEN the overview is computed
        THEN only KO contributes, with dividends valued at current shares
        """
        overview = analysis.overview()

        assert overview.metrics.total_cost_basis == Decimal("1050")
        assert overview.metrics.total_market_value == Decimal("1200")
        assert overview.metrics.total_dividends == Decimal("20")
        assert overview.metrics.total_return == Decimal("170")
        assert overview.unrealized_pnl == Decimal("150")

    def test_empty_portfolio_overview_is_zero(self, analysis_factory):
        overview = analysis_factory().overview()

        assert overview.metrics.total_market_value == 0
        assert overview.metrics.roi == 0
        assert overview.unrealized_pnl == 0

    def test_performance_rows(self, analysis):
        [row] = analysis.equity_performance()

        assert row.symbol == "KO"
        assert row.shares == Decimal("20")
        assert row.unrealized_pnl == Decimal("150")
        assert row.current_nav == Decimal("60")
        assert row.nav_decay_percent == 0


class TestRecentDividends:
    """Tests for recent payouts."""

    def test_newest_first_and_limited(self, analysis):
        recent = analysis.recent_dividends(limit=1)

        assert [(p.symbol, p.date) for p in recent.payouts] == [("KO", "2024-07-01")]
        assert recent.payouts[0].total_amount == Decimal("10.0")

    def test_trailing_income_covers_all_payouts(self, analysis):
        recent = analysis.recent_dividends()

        assert len(recent.payouts) == 2
        assert recent.trailing_income == Decimal("20")


# =============================================================================
# CASH FLOW
# =============================================================================


class TestCashFlowReport:
    """Tests for the month-by-month cash flow report."""

    def test_months_are_sorted_and_labelled(self, analysis):
        report = analysis.cash_flow_report()

        assert [(m.month, m.month_label) for m in report.months] == [
            ("2024-03", "Mar 2024"),
            ("2024-04", "Apr 2024"),
            ("2024-05", "May 2024"),
            ("2024-07", "Jul 2024"),
        ]

    def test_dividends_use_shares_held_on_payment_date(self, analysis):
        """
        GIVEN 10 shares on the April payment and 20 on the July payment
        WHEN the report is built
        THEN April receives 5.00 and July 10.00
        """
        months = {m.month: m for m in analysis.cash_flow_report().months}

        assert months["2024-04"].dividends_received == Decimal("5.0")
        assert months["2024-04"].dividend_transactions[0].shares == Decimal("10")
        assert months["2024-07"].dividends_received == Decimal("10.0")

    def test_positions_without_lots_contribute_no_dividends(self, analysis):
        report = analysis.cash_flow_report()

        symbols = {t.symbol for m in report.months for t in m.dividend_transactions}
        assert symbols == {"KO"}

    def test_purchases_and_cumulative_figures(self, analysis):
        months = analysis.cash_flow_report().months

        assert months[0].cash_invested == Decimal("500")
        assert months[0].net_cash_flow == Decimal("-500")
        assert months[0].purchase_transactions[0].id == "l1"
        assert months[-1].cumulative_cash_invested == Decimal("1050")
        assert months[-1].cumulative_dividends == Decimal("15.0")

    def test_totals(self, analysis):
        report = analysis.cash_flow_report()
        totals = report.totals

        assert report.current_portfolio_value == Decimal("1200")
        assert totals.total_cash_invested == Decimal("1050")
        assert totals.total_dividends == Decimal("15.0")
        assert totals.net_cash_flow == Decimal("-1035.0")
        assert totals.total_purchases == 2
        assert totals.total_dividend_payments == 2
        assert totals.dividend_roi == Decimal("0.75")
        assert totals.true_roi == Decimal("-40")
        assert totals.current_cash_balance == Decimal("965.0")

    def test_without_seed_ratios_are_zero(self, analysis_factory):
        report = analysis_factory(lots=[make_lot("l1", "KO", "2024-03-15", 1, 10)]).cash_flow_report()

        assert report.seed_amount == 0
        assert report.totals.dividend_roi == 0
        assert report.totals.true_roi == 0
        assert report.totals.return_on_investment == 0


class TestUpdateSeed:
    """Tests for updating seed capital."""

    def test_update_seed_persists_snapshot(self, analysis, memory_storage):
        analysis.update_seed(Decimal("5000"), "2024-02-01")

        assert memory_storage.snapshot.seed_amount == Decimal("5000")
        assert memory_storage.snapshot.seed_date == "2024-02-01"
        assert analysis.cash_flow_report().seed_amount == Decimal("5000")
