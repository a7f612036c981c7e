"""Saved portfolio endpoints."""

from fastapi import APIRouter, Depends

from dividend_tracker.api.deps import get_store
from dividend_tracker.api.routers.portfolio import build_state_response
from dividend_tracker.api.schemas import (
    PortfolioListResponse,
    PortfolioMetadataResponse,
    PortfolioNameRequest,
    PortfolioStateResponse,
)
from dividend_tracker.core.exceptions import NotFoundError
from dividend_tracker.services import PortfolioStore

router = APIRouter(prefix="/portfolios", tags=["portfolios"])


def _metadata(saved) -> PortfolioMetadataResponse:
    return PortfolioMetadataResponse(
        id=saved.id,
        name=saved.name,
        created_at=saved.created_at,
        updated_at=saved.updated_at,
    )


@router.get("", response_model=PortfolioListResponse)
async def list_portfolios(store: PortfolioStore = Depends(get_store)) -> PortfolioListResponse:
    """List saved portfolios in the order they were created."""
    portfolios = [PortfolioMetadataResponse.model_validate(m) for m in store.get_saved_portfolios()]
    return PortfolioListResponse(
        portfolios=portfolios,
        active_portfolio_id=store.active_portfolio_id,
        count=len(portfolios),
    )


@router.post("", response_model=PortfolioMetadataResponse, status_code=201)
async def save_current_portfolio(
    request: PortfolioNameRequest,
    store: PortfolioStore = Depends(get_store),
) -> PortfolioMetadataResponse:
    """Save the working portfolio under the active id (or a new one)."""
    return _metadata(store.save_current_portfolio(request.name))


@router.post("/new", response_model=PortfolioMetadataResponse, status_code=201)
async def create_new_portfolio(
    request: PortfolioNameRequest,
    store: PortfolioStore = Depends(get_store),
) -> PortfolioMetadataResponse:
    """Start a new portfolio from the sample snapshot with no lots."""
    return _metadata(store.create_new_portfolio(request.name))


@router.post("/{portfolio_id}/load", response_model=PortfolioStateResponse)
async def load_portfolio(
    portfolio_id: str,
    store: PortfolioStore = Depends(get_store),
) -> PortfolioStateResponse:
    """Make a saved portfolio the working portfolio."""
    if not store.load_saved_portfolio(portfolio_id):
        raise NotFoundError("Portfolio", portfolio_id)
    return build_state_response(store)


@router.patch("/{portfolio_id}", status_code=204)
async def rename_portfolio(
    portfolio_id: str,
    request: PortfolioNameRequest,
    store: PortfolioStore = Depends(get_store),
) -> None:
    """Rename a saved portfolio."""
    if not store.rename_saved_portfolio(portfolio_id, request.name):
        raise NotFoundError("Portfolio", portfolio_id)


@router.delete("/{portfolio_id}", status_code=204)
async def delete_portfolio(portfolio_id: str, store: PortfolioStore = Depends(get_store)) -> None:
    """Delete a saved portfolio."""
    if not store.delete_saved_portfolio(portfolio_id):
        raise NotFoundError("Portfolio", portfolio_id)
