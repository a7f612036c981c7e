"""Ticker symbol normalization.

Every case-insensitive comparison of symbols (lot grouping, quote and dividend
merges, dividend removal, lot pruning) goes through ``normalize_symbol``.
"""


def normalize_symbol(symbol: str) -> str:
    """Return the canonical lookup key for a ticker symbol."""
    return symbol.strip().upper()

