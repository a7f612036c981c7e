"""Sample snapshot and purchase lots.

Factories return fresh objects on every call so callers may mutate them freely.
"""

from decimal import Decimal

from dividend_tracker.domain.models import (
    DividendPayment,
    EquityPosition,
    NavPoint,
    PortfolioSnapshot,
    PurchaseLot,
)


def _nav(values: list[str]) -> list[NavPoint]:
    dates = ["2024-01-01", "2024-04-01", "2024-07-01", "2024-10-01", "2025-01-01"]
    return [NavPoint(date=d, value=Decimal(v)) for d, v in zip(dates, values)]


def sample_portfolio() -> PortfolioSnapshot:
    """Two-position sample portfolio as of 2025-01-15; shares are held in lots."""
    return PortfolioSnapshot(
        as_of="2025-01-15",
        cash_position=Decimal("0"),
        seed_amount=Decimal("90000"),
        seed_date="2025-02-10",
        equities=[
            EquityPosition(
                symbol="AAPL",
                name="Apple Inc.",
                sector="Technology",
                shares=Decimal("0"),
                average_cost=Decimal("142.3"),
                current_price=Decimal("188.6"),
                dividends=[
                    DividendPayment("aapl-2024-q1", "2024-02-15", Decimal("0.2")),
                    DividendPayment("aapl-2024-q2", "2024-05-15", Decimal("0.205")),
                    DividendPayment("aapl-2024-q3", "2024-08-15", Decimal("0.22")),
                    DividendPayment("aapl-2024-q4", "2024-11-15", Decimal("0.22")),
                ],
                nav_history=_nav(["179.45", "172.12", "195.50", "168.92", "188.6"]),
            ),
            EquityPosition(
                symbol="MSFT",
                name="Microsoft Corporation",
                sector="Technology",
                shares=Decimal("0"),
                average_cost=Decimal("256.15"),
                current_price=Decimal("382.5"),
                dividends=[
                    DividendPayment("msft-2024-q1", "2024-03-09", Decimal("0.62")),
                    DividendPayment("msft-2024-q2", "2024-06-09", Decimal("0.62")),
                    DividendPayment("msft-2024-q3", "2024-09-09", Decimal("0.67")),
                    DividendPayment("msft-2024-q4", "2024-12-09", Decimal("0.67")),
                ],
                nav_history=_nav(["328.32", "420.50", "309.75", "340.15", "382.5"]),
            ),
        ],
    )


def sample_purchase_lots() -> list[PurchaseLot]:
    return [
        PurchaseLot(
            id="lot-aapl-1",
            symbol="AAPL",
            trade_date="2024-01-15",
            shares=Decimal("120"),
            price_per_share=Decimal("142.3"),
        ),
        PurchaseLot(
            id="lot-msft-1",
            symbol="MSFT",
            trade_date="2024-05-20",
            shares=Decimal("80"),
            price_per_share=Decimal("256.15"),
        ),
    ]
