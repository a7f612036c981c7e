"""Portfolio snapshot and saved portfolio domain models."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from dividend_tracker.domain.models.lot import PurchaseLot
from dividend_tracker.domain.models.position import EquityPosition, to_decimal


@dataclass
class PortfolioSnapshot:
    """Point-in-time baseline of all tracked equities."""

    as_of: str
    equities: list[EquityPosition] = field(default_factory=list)
    cash_position: Optional[Decimal] = None
    last_price_update: Optional[str] = None
    last_dividend_update: Optional[str] = None
    seed_amount: Optional[Decimal] = None  # Hypothetical starting capital
    seed_date: Optional[str] = None

    def __post_init__(self) -> None:
        if self.cash_position is not None:
            self.cash_position = to_decimal(self.cash_position)
        if self.seed_amount is not None:
            self.seed_amount = to_decimal(self.seed_amount)


@dataclass
class SavedPortfolio:
    """A named, retrievable copy of a snapshot and its lot ledger."""

    id: str
    name: str
    snapshot: PortfolioSnapshot
    custom_lots: list[PurchaseLot] = field(default_factory=list)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class PortfolioMetadata:
    """Listing entry for a saved portfolio."""

    id: str
    name: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
