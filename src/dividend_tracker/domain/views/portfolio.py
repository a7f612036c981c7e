"""View models derived from the snapshot and the lot ledger."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from dividend_tracker.domain.models import (
    DividendPayment,
    EquityPosition,
    PortfolioSnapshot,
    PurchaseLot,
    to_decimal,
)


@dataclass
class DividendPaymentWithShares(DividendPayment):
    """Dividend annotated with the shares held when it was paid."""

    shares_owned: Decimal = field(default_factory=lambda: Decimal("0"))

    def __post_init__(self) -> None:
        super().__post_init__()
        self.shares_owned = to_decimal(self.shares_owned)

    @property
    def total_amount(self) -> Decimal:
        """Cash received for this payment."""
        return self.amount_per_share * self.shares_owned


@dataclass
class EquityWithLots:
    """
    Reconciled read model for one symbol.

    ``position`` carries shares and average cost blended across snapshot-held
    shares and every lot for the symbol. Never persisted.
    """

    position: EquityPosition
    manual_lots: list[PurchaseLot] = field(default_factory=list)
    manual_total_shares: Decimal = field(default_factory=lambda: Decimal("0"))
    manual_total_cost: Decimal = field(default_factory=lambda: Decimal("0"))
    earliest_acquisition_date: Optional[str] = None
    dividends_with_shares: list[DividendPaymentWithShares] = field(default_factory=list)


@dataclass
class EquityMetrics:
    """Financial metrics for a single position."""

    position: EquityPosition
    cost_basis: Decimal
    market_value: Decimal
    total_dividends: Decimal
    total_return: Decimal
    roi: Decimal
    dividend_yield_on_cost: Decimal
    nav_peak: Decimal
    nav_decay_percent: Decimal


@dataclass
class PortfolioMetrics:
    """Aggregated metrics across positions."""

    total_cost_basis: Decimal = field(default_factory=lambda: Decimal("0"))
    total_market_value: Decimal = field(default_factory=lambda: Decimal("0"))
    total_dividends: Decimal = field(default_factory=lambda: Decimal("0"))
    total_return: Decimal = field(default_factory=lambda: Decimal("0"))
    roi: Decimal = field(default_factory=lambda: Decimal("0"))
    income_yield_on_cost: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass
class PortfolioImportResult:
    """Snapshot and lots read from an import file."""

    snapshot: PortfolioSnapshot
    custom_lots: list[PurchaseLot] = field(default_factory=list)
