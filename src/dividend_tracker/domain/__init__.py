"""Domain layer - pure business models with no external dependencies."""

from dividend_tracker.domain.models import (
    MANUAL_ENTRY_SECTOR,
    DividendPayment,
    NavPoint,
    EquityPosition,
    PurchaseLot,
    PortfolioSnapshot,
    SavedPortfolio,
    PortfolioMetadata,
)

__all__ = [
    "MANUAL_ENTRY_SECTOR",
    "DividendPayment",
    "NavPoint",
    "EquityPosition",
    "PurchaseLot",
    "PortfolioSnapshot",
    "SavedPortfolio",
    "PortfolioMetadata",
]
