"""View models for market data refreshes."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from dividend_tracker.domain.models import DividendPayment, NavPoint


@dataclass
class QuoteResult:
    """Quote fetched for one symbol; ``error`` is set when the fetch failed."""

    symbol: str
    regular_market_price: Optional[Decimal] = None
    regular_market_change_percent: Optional[Decimal] = None
    currency: Optional[str] = None
    nav_history: Optional[list[NavPoint]] = None
    error: Optional[str] = None


@dataclass
class DividendResult:
    """Dividend history fetched for one symbol."""

    symbol: str
    dividends: list[DividendPayment] = field(default_factory=list)
    error: Optional[str] = None


@dataclass
class RefreshStatus:
    """Progress of the latest quote or dividend refresh."""

    is_loading: bool = False
    last_updated: Optional[str] = None
    error: Optional[str] = None
