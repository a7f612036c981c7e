"""Per-equity and portfolio-wide financial metrics.

Pure functions over fully resolved positions. Division by a zero cost basis or a
zero NAV peak yields 0; NaN and infinities propagate arithmetically.
"""

from decimal import Decimal, InvalidOperation, localcontext

from dividend_tracker.domain.models import DividendPayment, EquityPosition
from dividend_tracker.domain.views import EquityMetrics, PortfolioMetrics

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def _percent_of(part: Decimal, whole: Decimal) -> Decimal:
    if whole == 0:
        return ZERO
    return part / whole * HUNDRED


def sum_dividends(dividends: list[DividendPayment], shares: Decimal) -> Decimal:
    """Dividend income assuming ``shares`` were held for every payment."""
    return sum((d.amount_per_share * shares for d in dividends), ZERO)


def compute_equity_metrics(position: EquityPosition) -> EquityMetrics:
    """
    Compute cost basis, value, income and NAV decay for one position.

    Dividend income uses the position's current share count for every payment,
    not the share count held on each payment date.
    """
    with localcontext() as ctx:
        # NaN comparisons and Infinity * 0 yield NaN instead of raising
        ctx.traps[InvalidOperation] = False

        cost_basis = position.shares * position.average_cost
        market_value = position.shares * position.current_price
        total_dividends = sum_dividends(position.dividends, position.shares)
        total_return = market_value + total_dividends - cost_basis

        history = position.nav_history
        nav_peak = history[0].value if history else position.current_price
        for point in history:
            if point.value > nav_peak:
                nav_peak = point.value
        latest_nav = history[-1].value if history else position.current_price
        # Peak comes from history only, so a price above it reports negative decay
        nav_decay_percent = ZERO if nav_peak == 0 else (nav_peak - latest_nav) / nav_peak * HUNDRED

        roi = _percent_of(total_return, cost_basis)
        dividend_yield_on_cost = _percent_of(total_dividends, cost_basis)

    return EquityMetrics(
        position=position,
        cost_basis=cost_basis,
        market_value=market_value,
        total_dividends=total_dividends,
        total_return=total_return,
        roi=roi,
        dividend_yield_on_cost=dividend_yield_on_cost,
        nav_peak=nav_peak,
        nav_decay_percent=nav_decay_percent,
    )


def compute_portfolio_metrics(positions: list[EquityPosition]) -> PortfolioMetrics:
    """Aggregate metrics across positions; empty input gives all zeros."""
    result = PortfolioMetrics()
    with localcontext() as ctx:
        ctx.traps[InvalidOperation] = False
        for position in positions:
            metrics = compute_equity_metrics(position)
            result.total_cost_basis += metrics.cost_basis
            result.total_market_value += metrics.market_value
            result.total_dividends += metrics.total_dividends
            result.total_return += metrics.total_return

        result.roi = _percent_of(result.total_return, result.total_cost_basis)
        result.income_yield_on_cost = _percent_of(result.total_dividends, result.total_cost_basis)
    return result
