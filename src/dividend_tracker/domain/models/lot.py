"""Purchase lot domain model."""

from dataclasses import dataclass
from decimal import Decimal

from dividend_tracker.domain.models.position import to_decimal


@dataclass
class PurchaseLot:
    """
    One discrete acquisition event (source of truth for held shares).

    Lots only accumulate; the tracker never models disposals.
    """

    id: str
    symbol: str
    trade_date: str  # ISO date
    shares: Decimal
    price_per_share: Decimal

    def __post_init__(self) -> None:
        self.shares = to_decimal(self.shares)
        self.price_per_share = to_decimal(self.price_per_share)

    @property
    def total_cost(self) -> Decimal:
        """Cash spent on this lot."""
        return self.shares * self.price_per_share
