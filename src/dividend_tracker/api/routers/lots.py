"""Purchase lot endpoints."""

from fastapi import APIRouter, Depends

from dividend_tracker.api.deps import get_store
from dividend_tracker.api.schemas import (
    PurchaseLotCreate,
    PurchaseLotResponse,
    PurchaseLotUpdateRequest,
)
from dividend_tracker.core.exceptions import NotFoundError
from dividend_tracker.core.symbols import normalize_symbol
from dividend_tracker.domain.models import PurchaseLot, to_decimal
from dividend_tracker.services import PortfolioStore, PurchaseLotUpdate
from dividend_tracker.services.portfolio_store import new_lot_id

router = APIRouter(prefix="/lots", tags=["lots"])


@router.get("", response_model=list[PurchaseLotResponse])
async def list_lots(store: PortfolioStore = Depends(get_store)) -> list[PurchaseLotResponse]:
    """List purchase lots in ledger order."""
    return [PurchaseLotResponse.model_validate(lot) for lot in store.custom_lots]


@router.post("", response_model=PurchaseLotResponse, status_code=201)
async def add_lot(
    request: PurchaseLotCreate,
    store: PortfolioStore = Depends(get_store),
) -> PurchaseLotResponse:
    """Record a purchase."""
    lot = store.add_purchase_lot(
        PurchaseLot(
            id=new_lot_id(),
            symbol=normalize_symbol(request.symbol),
            trade_date=request.trade_date,
            shares=to_decimal(request.shares),
            price_per_share=to_decimal(request.price_per_share),
        )
    )
    return PurchaseLotResponse.model_validate(lot)


@router.patch("/{lot_id}", response_model=PurchaseLotResponse)
async def update_lot(
    lot_id: str,
    request: PurchaseLotUpdateRequest,
    store: PortfolioStore = Depends(get_store),
) -> PurchaseLotResponse:
    """Edit a purchase lot. Only provided fields change."""
    updates = PurchaseLotUpdate(
        symbol=normalize_symbol(request.symbol) if request.symbol is not None else None,
        trade_date=request.trade_date,
        shares=to_decimal(request.shares) if request.shares is not None else None,
        price_per_share=(
            to_decimal(request.price_per_share) if request.price_per_share is not None else None
        ),
    )
    lot = store.update_purchase_lot(lot_id, updates)
    if lot is None:
        raise NotFoundError("Purchase lot", lot_id)
    return PurchaseLotResponse.model_validate(lot)


@router.delete("/{lot_id}", status_code=204)
async def remove_lot(lot_id: str, store: PortfolioStore = Depends(get_store)) -> None:
    """Remove a purchase lot."""
    if not store.remove_purchase_lot(lot_id):
        raise NotFoundError("Purchase lot", lot_id)
