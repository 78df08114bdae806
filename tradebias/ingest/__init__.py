"""Loading and validating trade logs."""

from tradebias.ingest.csv_loader import (
    REQUIRED_COLUMNS,
    IngestResult,
    RowError,
    load_trades_csv,
    parse_rows,
)

__all__ = [
    "REQUIRED_COLUMNS",
    "IngestResult",
    "RowError",
    "load_trades_csv",
    "parse_rows",
]
