"""Equity position domain models."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Union

Number = Union[Decimal, int, float, str]

# Sector assigned to positions that exist only because of manually entered lots
MANUAL_ENTRY_SECTOR = "Manual Entry"


def to_decimal(value: Number) -> Decimal:
    """Coerce a numeric value to Decimal without binary float artifacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass
class DividendPayment:
    """A single dividend distribution for an equity."""

    id: str
    date: str  # ISO date
    amount_per_share: Decimal

    def __post_init__(self) -> None:
        self.amount_per_share = to_decimal(self.amount_per_share)


@dataclass
class NavPoint:
    """Per-share net asset value sampled at a date."""

    date: str
    value: Decimal

    def __post_init__(self) -> None:
        self.value = to_decimal(self.value)


@dataclass
class EquityPosition:
    """
    Canonical record of one tracked instrument inside a snapshot.

    ``shares`` are held directly by the snapshot, separate from lot-tracked shares.
    Positions are replaced, never edited in place, by store operations.
    """

    symbol: str
    name: str
    sector: str
    shares: Decimal
    average_cost: Decimal
    current_price: Decimal
    dividends: list[DividendPayment] = field(default_factory=list)
    nav_history: list[NavPoint] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.shares = to_decimal(self.shares)
        self.average_cost = to_decimal(self.average_cost)
        self.current_price = to_decimal(self.current_price)
