"""Portfolio storage protocol (persistence gateway)."""

from typing import Any, Callable, Optional, Protocol, TypeVar

from dividend_tracker.domain.models import PortfolioSnapshot, PurchaseLot, SavedPortfolio

T = TypeVar("T")


class PortfolioStorage(Protocol):
    """
    Interface for durable key-value storage of the working portfolio.

    Reads tolerate missing or corrupt data by returning the fallback; writes are
    best-effort and never raise.
    """

    def load_custom_lots(self, parser: Callable[[Any], T], fallback: T) -> T:
        """Load the lot ledger, decoded by ``parser``."""
        ...

    def persist_custom_lots(self, lots: list[PurchaseLot]) -> None:
        """Persist the lot ledger."""
        ...

    def load_snapshot(self, parser: Callable[[Any], T], fallback: T) -> T:
        """Load the active snapshot, decoded by ``parser``."""
        ...

    def persist_snapshot(self, snapshot: PortfolioSnapshot) -> None:
        """Persist the active snapshot."""
        ...

    def load_saved_portfolios(self) -> list[SavedPortfolio]:
        """List saved portfolios in insertion order."""
        ...

    def save_saved_portfolios(self, portfolios: list[SavedPortfolio]) -> None:
        """Replace the saved portfolio collection."""
        ...

    def get_active_portfolio_id(self) -> Optional[str]:
        """Return the persisted active portfolio id."""
        ...

    def set_active_portfolio_id(self, portfolio_id: Optional[str]) -> None:
        """Persist (or clear, with None) the active portfolio id."""
        ...
