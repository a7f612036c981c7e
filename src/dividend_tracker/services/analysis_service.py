"""Dashboard analytics over the reconciled portfolio views."""

from dataclasses import replace
from decimal import Decimal
from typing import Optional

from dividend_tracker.core.timezone import month_key, month_label
from dividend_tracker.domain.models import to_decimal
from dividend_tracker.domain.views import (
    CashFlowReport,
    CashFlowTotals,
    DividendTransaction,
    EquityPerformanceRow,
    EquityWithLots,
    MonthlyCashFlow,
    OverviewView,
    PurchaseTransaction,
    RecentDividendsView,
    RecentPayout,
)
from dividend_tracker.services.metrics import compute_equity_metrics, compute_portfolio_metrics
from dividend_tracker.services.portfolio_store import PortfolioStore

ZERO = Decimal("0")
HUNDRED = Decimal("100")


class AnalysisService:
    """
    Read-only analytics for the active portfolio.

    Headline figures (overview, performance, recent payouts) only consider
    positions with blended shares above zero, and value dividends with the
    current share count. The cash-flow report instead values each dividend with
    the shares owned on its payment date.
    """

    def __init__(self, store: PortfolioStore):
        self._store = store

    def _active_views(self) -> list[EquityWithLots]:
        return [view for view in self._store.equity_views() if view.position.shares > 0]

    def overview(self) -> OverviewView:
        positions = [view.position for view in self._active_views()]
        metrics = compute_portfolio_metrics(positions)
        return OverviewView(
            metrics=metrics,
            unrealized_pnl=metrics.total_return - metrics.total_dividends,
        )

    def equity_performance(self) -> list[EquityPerformanceRow]:
        rows = []
        for view in self._active_views():
            metrics = compute_equity_metrics(view.position)
            position = view.position
            current_nav = position.nav_history[-1].value if position.nav_history else position.current_price
            rows.append(
                EquityPerformanceRow(
                    symbol=position.symbol,
                    name=position.name,
                    sector=position.sector,
                    shares=position.shares,
                    market_value=metrics.market_value,
                    cost_basis=metrics.cost_basis,
                    unrealized_pnl=metrics.market_value - metrics.cost_basis,
                    total_return=metrics.total_return,
                    roi=metrics.roi,
                    nav_decay_percent=metrics.nav_decay_percent,
                    nav_peak=metrics.nav_peak,
                    current_nav=current_nav,
                )
            )
        return rows

    def recent_dividends(self, limit: int = 8) -> RecentDividendsView:
        """Newest payouts first, plus trailing income across held positions."""
        views = self._active_views()
        payouts = [
            RecentPayout(
                symbol=view.position.symbol,
                name=view.position.name,
                date=dividend.date,
                amount_per_share=dividend.amount_per_share,
                total_amount=dividend.amount_per_share * view.position.shares,
            )
            for view in views
            for dividend in view.position.dividends
        ]
        payouts.sort(key=lambda payout: payout.date, reverse=True)
        trailing_income = sum(
            (compute_equity_metrics(view.position).total_dividends for view in views),
            ZERO,
        )
        return RecentDividendsView(payouts=payouts[:limit], trailing_income=trailing_income)

    def cash_flow_report(self) -> CashFlowReport:
        """
        Month-by-month purchases and dividends received.

        Purchases come from the lot ledger; dividends come from each view's
        per-payment share counts, counted only on or after the first lot.
        """
        snapshot = self._store.snapshot
        views = self._store.equity_views()
        seed_amount = snapshot.seed_amount if snapshot.seed_amount is not None else ZERO
        current_value = compute_portfolio_metrics(
            [view.position for view in views if view.position.shares > 0]
        ).total_market_value

        buckets: dict[str, MonthlyCashFlow] = {}

        def bucket_for(iso_date: str) -> MonthlyCashFlow:
            key = month_key(iso_date)
            if key not in buckets:
                buckets[key] = MonthlyCashFlow(month=key, month_label=month_label(iso_date))
            return buckets[key]

        for lot in self._store.custom_lots:
            month = bucket_for(lot.trade_date)
            month.cash_invested += lot.total_cost
            month.purchase_count += 1
            month.purchase_transactions.append(
                PurchaseTransaction(
                    id=lot.id,
                    symbol=lot.symbol,
                    date=lot.trade_date,
                    shares=lot.shares,
                    price_per_share=lot.price_per_share,
                    total_cost=lot.total_cost,
                )
            )

        for view in views:
            earliest = view.earliest_acquisition_date
            if not earliest:
                continue
            for dividend in view.dividends_with_shares:
                if dividend.date < earliest:
                    continue
                month = bucket_for(dividend.date)
                month.dividends_received += dividend.total_amount
                month.dividend_count += 1
                month.dividend_transactions.append(
                    DividendTransaction(
                        id=dividend.id,
                        symbol=view.position.symbol,
                        name=view.position.name,
                        date=dividend.date,
                        shares=dividend.shares_owned,
                        amount_per_share=dividend.amount_per_share,
                        total_amount=dividend.total_amount,
                    )
                )

        months = [buckets[key] for key in sorted(buckets)]
        cumulative_cash = ZERO
        cumulative_dividends = ZERO
        for month in months:
            cumulative_cash += month.cash_invested
            cumulative_dividends += month.dividends_received
            month.cumulative_cash_invested = cumulative_cash
            month.cumulative_dividends = cumulative_dividends
            month.net_cash_flow = month.dividends_received - month.cash_invested

        return CashFlowReport(
            seed_amount=seed_amount,
            seed_date=snapshot.seed_date,
            current_portfolio_value=current_value,
            months=months,
            totals=self._cash_flow_totals(months, seed_amount, current_value),
        )

    @staticmethod
    def _cash_flow_totals(
        months: list[MonthlyCashFlow],
        seed_amount: Decimal,
        current_value: Decimal,
    ) -> CashFlowTotals:
        invested = sum((m.cash_invested for m in months), ZERO)
        dividends = sum((m.dividends_received for m in months), ZERO)
        return CashFlowTotals(
            total_cash_invested=invested,
            total_dividends=dividends,
            net_cash_flow=dividends - invested,
            total_purchases=sum(m.purchase_count for m in months),
            total_dividend_payments=sum(m.dividend_count for m in months),
            return_on_investment=dividends / invested * HUNDRED if invested > 0 else ZERO,
            dividend_roi=dividends / seed_amount * HUNDRED if seed_amount > 0 else ZERO,
            true_roi=(current_value - seed_amount) / seed_amount * HUNDRED if seed_amount > 0 else ZERO,
            current_cash_balance=seed_amount - invested + dividends,
        )

    def update_seed(self, amount: Decimal, seed_date: Optional[str]) -> None:
        """Set the hypothetical starting capital used for seed-based returns."""
        snapshot = self._store.snapshot
        self._store.set_snapshot(
            replace(snapshot, seed_amount=to_decimal(amount), seed_date=seed_date)
        )
