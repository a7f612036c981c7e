"""Dividend portfolio tracker: holdings, dividends and reconciliation engine."""

__version__ = "0.1.0"
