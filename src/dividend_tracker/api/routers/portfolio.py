"""Portfolio snapshot, import/export and view endpoints."""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Response

from dividend_tracker.api.deps import get_analysis_service, get_app_settings, get_store
from dividend_tracker.api.schemas import (
    EquityMetricsResponse,
    EquityViewResponse,
    PortfolioFileRequest,
    PortfolioFileResponse,
    PortfolioStateResponse,
    SeedUpdateRequest,
)
from dividend_tracker.config.settings import Settings
from dividend_tracker.domain.serialization import encode_json
from dividend_tracker.portfolio_file import (
    export_portfolio,
    parse_portfolio_snapshot,
    read_snapshot_file,
    to_import_result,
    write_portfolio_file,
)
from dividend_tracker.services import AnalysisService, PortfolioStore, compute_equity_metrics

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


def build_state_response(store: PortfolioStore) -> PortfolioStateResponse:
    snapshot = store.snapshot
    return PortfolioStateResponse(
        as_of=snapshot.as_of,
        equity_count=len(snapshot.equities),
        lot_count=len(store.custom_lots),
        cash_position=snapshot.cash_position,
        last_price_update=snapshot.last_price_update,
        last_dividend_update=snapshot.last_dividend_update,
        seed_amount=snapshot.seed_amount,
        seed_date=snapshot.seed_date,
        active_portfolio_id=store.active_portfolio_id,
        active_portfolio_name=store.active_portfolio_name,
    )


@router.get("", response_model=PortfolioStateResponse)
async def get_portfolio(store: PortfolioStore = Depends(get_store)) -> PortfolioStateResponse:
    """Get the snapshot header and active portfolio."""
    return build_state_response(store)


@router.get("/views", response_model=list[EquityViewResponse])
async def get_equity_views(store: PortfolioStore = Depends(get_store)) -> list[EquityViewResponse]:
    """Get the reconciled per-symbol views, sorted by symbol."""
    return [
        EquityViewResponse.model_validate(view, from_attributes=True)
        for view in store.equity_views()
    ]


@router.get("/positions", response_model=list[EquityMetricsResponse])
async def get_positions(store: PortfolioStore = Depends(get_store)) -> list[EquityMetricsResponse]:
    """Get metrics for every blended position."""
    return [
        EquityMetricsResponse.model_validate(compute_equity_metrics(p), from_attributes=True)
        for p in store.merged_positions()
    ]


@router.put("/snapshot", response_model=PortfolioStateResponse)
async def replace_snapshot(
    data: dict[str, Any] = Body(...),
    store: PortfolioStore = Depends(get_store),
) -> PortfolioStateResponse:
    """Replace the snapshot; snapshot-held shares are discarded."""
    store.set_snapshot(parse_portfolio_snapshot(data))
    return build_state_response(store)


@router.post("/import", response_model=PortfolioStateResponse)
async def import_portfolio(
    data: dict[str, Any] = Body(...),
    store: PortfolioStore = Depends(get_store),
) -> PortfolioStateResponse:
    """Import an exported portfolio document or a bare snapshot."""
    result = to_import_result(data)
    store.load_portfolio(result.snapshot, result.custom_lots)
    return build_state_response(store)


@router.post("/import/file", response_model=PortfolioStateResponse)
async def import_portfolio_file(
    request: PortfolioFileRequest,
    store: PortfolioStore = Depends(get_store),
) -> PortfolioStateResponse:
    """Import a portfolio JSON file from disk."""
    result = read_snapshot_file(request.path)
    store.load_portfolio(result.snapshot, result.custom_lots)
    return build_state_response(store)


@router.get("/export")
async def export_current_portfolio(store: PortfolioStore = Depends(get_store)) -> Response:
    """Export the snapshot and lot ledger as a portfolio document."""
    # Decimal amounts are written as JSON numbers
    document = export_portfolio(store.snapshot, store.custom_lots)
    return Response(content=encode_json(document), media_type="application/json")


@router.post("/export/file", response_model=PortfolioFileResponse)
async def export_portfolio_file(
    request: Optional[PortfolioFileRequest] = None,
    store: PortfolioStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> PortfolioFileResponse:
    """Write the portfolio document to disk (default: the export directory)."""
    if request is not None:
        path = request.path
    else:
        path = settings.get_export_dir() / f"portfolio-{store.snapshot.as_of}.json"
    written = write_portfolio_file(path, store.snapshot, store.custom_lots)
    return PortfolioFileResponse(path=str(written))


@router.put("/seed", response_model=PortfolioStateResponse)
async def update_seed(
    request: SeedUpdateRequest,
    store: PortfolioStore = Depends(get_store),
    analysis: AnalysisService = Depends(get_analysis_service),
) -> PortfolioStateResponse:
    """Set the hypothetical starting capital and its date."""
    analysis.update_seed(request.amount, request.date)
    return build_state_response(store)
