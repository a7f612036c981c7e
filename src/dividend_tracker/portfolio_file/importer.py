"""Portfolio JSON import."""

from pathlib import Path
from typing import Any, Union

from dividend_tracker.core.exceptions import ValidationError
from dividend_tracker.domain.models import PortfolioSnapshot
from dividend_tracker.domain.serialization import (
    decode_json,
    normalize_equity_position,
    parse_lots,
    read_snapshot_extras,
)
from dividend_tracker.domain.views import PortfolioImportResult


def parse_portfolio_snapshot(raw: Any) -> PortfolioSnapshot:
    """
    Validate and read a snapshot record.

    Unlike stored snapshots, a single malformed equity rejects the whole import.
    Malformed dividends or NAV points inside an equity are dropped.

    Raises:
        ValidationError: If the record does not have the snapshot shape
    """
    if not isinstance(raw, dict):
        raise ValidationError("Snapshot must be an object")
    if not isinstance(raw.get("asOf"), str):
        raise ValidationError('Snapshot requires an "asOf" ISO date string')
    if not isinstance(raw.get("equities"), list):
        raise ValidationError("Snapshot requires an array of equities with valid fields")

    equities = [normalize_equity_position(value) for value in raw["equities"]]
    if any(equity is None for equity in equities):
        raise ValidationError("One or more equities contain invalid fields")

    return PortfolioSnapshot(as_of=raw["asOf"], equities=equities, **read_snapshot_extras(raw))


def to_import_result(raw: Any) -> PortfolioImportResult:
    """Read either an exported ``{snapshot, customLots}`` wrapper or a bare snapshot."""
    if not isinstance(raw, dict):
        raise ValidationError("Snapshot must be an object")

    if isinstance(raw.get("snapshot"), dict):
        return PortfolioImportResult(
            snapshot=parse_portfolio_snapshot(raw["snapshot"]),
            custom_lots=parse_lots(raw.get("customLots")),
        )
    return PortfolioImportResult(snapshot=parse_portfolio_snapshot(raw), custom_lots=[])


def read_snapshot_file(path: Union[str, Path]) -> PortfolioImportResult:
    file_path = Path(path)
    if not file_path.exists():
        raise ValidationError(f"File not found: {path}")

    try:
        data = decode_json(file_path.read_text(encoding="utf-8"))
    except OSError:
        raise ValidationError(f"Could not read file: {path}")
    except ValueError:
        # Also covers bytes that are not UTF-8
        raise ValidationError("File is not valid JSON")
    return to_import_result(data)
