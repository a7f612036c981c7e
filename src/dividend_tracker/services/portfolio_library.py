"""Saved-portfolio library built on the storage gateway."""

from dataclasses import replace
from typing import Optional

from dividend_tracker.core.timezone import now_iso
from dividend_tracker.domain.models import (
    PortfolioMetadata,
    PortfolioSnapshot,
    PurchaseLot,
    SavedPortfolio,
)
from dividend_tracker.repositories.protocols import PortfolioStorage


class PortfolioLibrary:
    """
    Named, retrievable copies of a snapshot and its lot ledger.

    Portfolios are listed in the order they were first saved.
    """

    def __init__(self, storage: PortfolioStorage):
        self._storage = storage

    def save_portfolio(
        self,
        portfolio_id: str,
        name: str,
        snapshot: PortfolioSnapshot,
        lots: list[PurchaseLot],
    ) -> SavedPortfolio:
        """
        Insert or replace a saved portfolio.

        Replacing keeps the original ``created_at`` and the list position.
        """
        portfolios = self._storage.load_saved_portfolios()
        now = now_iso()
        index = next((i for i, p in enumerate(portfolios) if p.id == portfolio_id), None)

        saved = SavedPortfolio(
            id=portfolio_id,
            name=name,
            snapshot=snapshot,
            custom_lots=list(lots),
            created_at=portfolios[index].created_at if index is not None else now,
            updated_at=now,
        )
        if index is not None:
            portfolios[index] = saved
        else:
            portfolios.append(saved)

        self._storage.save_saved_portfolios(portfolios)
        return saved

    def load_portfolio_by_id(self, portfolio_id: str) -> Optional[SavedPortfolio]:
        for portfolio in self._storage.load_saved_portfolios():
            if portfolio.id == portfolio_id:
                return portfolio
        return None

    def delete_portfolio(self, portfolio_id: str) -> bool:
        """Delete a saved portfolio; clears the persisted active id if it matches."""
        portfolios = self._storage.load_saved_portfolios()
        remaining = [p for p in portfolios if p.id != portfolio_id]
        if len(remaining) == len(portfolios):
            return False

        self._storage.save_saved_portfolios(remaining)
        if self._storage.get_active_portfolio_id() == portfolio_id:
            self._storage.set_active_portfolio_id(None)
        return True

    def rename_portfolio(self, portfolio_id: str, name: str) -> bool:
        portfolios = self._storage.load_saved_portfolios()
        for index, portfolio in enumerate(portfolios):
            if portfolio.id == portfolio_id:
                portfolios[index] = replace(portfolio, name=name, updated_at=now_iso())
                self._storage.save_saved_portfolios(portfolios)
                return True
        return False

    def list_metadata(self) -> list[PortfolioMetadata]:
        return [
            PortfolioMetadata(
                id=p.id,
                name=p.name,
                created_at=p.created_at,
                updated_at=p.updated_at,
            )
            for p in self._storage.load_saved_portfolios()
        ]
