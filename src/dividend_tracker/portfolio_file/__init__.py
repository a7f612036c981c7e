"""Portfolio JSON import/export."""

from dividend_tracker.portfolio_file.importer import (
    parse_portfolio_snapshot,
    read_snapshot_file,
    to_import_result,
)
from dividend_tracker.portfolio_file.exporter import export_portfolio, write_portfolio_file

__all__ = [
    "parse_portfolio_snapshot",
    "read_snapshot_file",
    "to_import_result",
    "export_portfolio",
    "write_portfolio_file",
]
