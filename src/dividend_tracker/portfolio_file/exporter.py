"""Portfolio JSON export."""

from pathlib import Path
from typing import Any, Union

from dividend_tracker.domain.models import PortfolioSnapshot, PurchaseLot
from dividend_tracker.domain.serialization import encode_json, lot_to_dict, snapshot_to_dict


def export_portfolio(snapshot: PortfolioSnapshot, lots: list[PurchaseLot]) -> dict[str, Any]:
    """Build the export document; it is accepted back by ``to_import_result``."""
    return {
        "snapshot": snapshot_to_dict(snapshot),
        "customLots": [lot_to_dict(lot) for lot in lots],
    }


def write_portfolio_file(
    path: Union[str, Path],
    snapshot: PortfolioSnapshot,
    lots: list[PurchaseLot],
) -> Path:
    """Write the export document as JSON, creating parent directories."""
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(encode_json(export_portfolio(snapshot, lots)), encoding="utf-8")
    return file_path
