"""Bundled sample portfolio used on first start and for new portfolios."""

from dividend_tracker.data.sample_portfolio import sample_portfolio, sample_purchase_lots

__all__ = ["sample_portfolio", "sample_purchase_lots"]
