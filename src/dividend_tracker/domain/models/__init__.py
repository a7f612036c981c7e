"""Domain models package."""

from dividend_tracker.domain.models.position import (
    MANUAL_ENTRY_SECTOR,
    DividendPayment,
    NavPoint,
    EquityPosition,
    to_decimal,
)
from dividend_tracker.domain.models.lot import PurchaseLot
from dividend_tracker.domain.models.snapshot import (
    PortfolioSnapshot,
    SavedPortfolio,
    PortfolioMetadata,
)

__all__ = [
    "MANUAL_ENTRY_SECTOR",
    "DividendPayment",
    "NavPoint",
    "EquityPosition",
    "to_decimal",
    "PurchaseLot",
    "PortfolioSnapshot",
    "SavedPortfolio",
    "PortfolioMetadata",
]
