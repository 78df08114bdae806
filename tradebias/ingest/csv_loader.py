"""CSV ingestion for trade logs.

Rows are validated one at a time into Trade models. A row that fails
validation is reported as a RowError and left out of the trade list, so
bad numbers never reach the engine as NaN.
"""

import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Union

import pandas as pd
from pydantic import BaseModel, Field, ValidationError

from tradebias.errors import IngestError
from tradebias.models import Trade

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("date", "symbol", "action", "quantity", "price")
KNOWN_ACTIONS = ("buy", "sell")

# Data rows start on line 2, after the header
FIRST_DATA_ROW = 2

# Stands in for a line with more fields than the header
BAD_LINE_MARKER = "\x00bad-line:"


class RowError(BaseModel):
    """A row that could not be turned into a Trade."""

    row_number: int = Field(..., ge=1, description="Line number in the file (header is line 1)")
    message: str = Field(..., description="Why the row was rejected")

    model_config = {"frozen": True}


class IngestResult(BaseModel):
    """Valid trades in file order plus the rows that were rejected."""

    trades: list[Trade] = Field(default_factory=list)
    errors: list[RowError] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def row_count(self) -> int:
        return len(self.trades) + len(self.errors)


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        field = ".".join(str(loc) for loc in item["loc"]) or "row"
        parts.append(f"{field}: {item['msg']}")
    return "; ".join(parts)


def _validate(numbered_rows: Iterable[tuple[int, Mapping[str, Any]]]) -> IngestResult:
    trades: list[Trade] = []
    errors: list[RowError] = []
    unknown_actions: set[str] = set()

    for row_number, row in numbered_rows:
        values = {column: row.get(column) for column in REQUIRED_COLUMNS}
        try:
            trade = Trade.model_validate(values)
        except ValidationError as e:
            errors.append(RowError(row_number=row_number, message=_format_validation_error(e)))
            continue

        if trade.action not in KNOWN_ACTIONS and trade.action not in unknown_actions:
            unknown_actions.add(trade.action)
            logger.warning(
                "Row %d: unrecognized action %r; counted but not matched for P&L",
                row_number,
                trade.action,
            )
        trades.append(trade)

    if errors:
        logger.warning("Rejected %d of %d rows", len(errors), len(trades) + len(errors))

    return IngestResult(trades=trades, errors=errors)


def parse_rows(rows: Iterable[Mapping[str, Any]], start: int = FIRST_DATA_ROW) -> IngestResult:
    """Validate raw rows into trades.

    Args:
        rows: Mappings with at least the REQUIRED_COLUMNS keys.
        start: Row number of the first row, for error reporting.

    Returns:
        IngestResult with valid trades and per-row errors.
    """
    return _validate(enumerate(rows, start=start))


def _flag_bad_line(fields: list[str]) -> list[str]:
    # Keeps the ragged line in place so later line numbers stay aligned
    return [f"{BAD_LINE_MARKER}{len(fields)}"]


def _split_rows(
    frame: pd.DataFrame, width: int
) -> tuple[list[tuple[int, Mapping[str, Any]]], list[RowError]]:
    """Number the data rows by file line and pull out ragged lines.

    Blank lines are dropped without an error.
    """
    first_column = frame.columns[0]
    rows: list[tuple[int, Mapping[str, Any]]] = []
    errors: list[RowError] = []

    for index, row in zip(frame.index, frame.to_dict(orient="records")):
        # Frame row 0 is the header on line 1
        line_number = int(index) + 1
        first = row[first_column]

        if isinstance(first, str) and first.startswith(BAD_LINE_MARKER):
            seen = first[len(BAD_LINE_MARKER):]
            errors.append(RowError(
                row_number=line_number,
                message=f"row: expected {width} fields, saw {seen}",
            ))
            continue

        if all(str(value).strip() == "" for value in row.values()):
            continue

        rows.append((line_number, row))

    return rows, errors


def load_trades_csv(path: Union[str, Path]) -> IngestResult:
    """Read and validate a trade log CSV.

    The file needs a header row on its first line naming the columns date,
    symbol, action, quantity and price (any case, any order, extra columns
    ignored). Blank lines are skipped. A line with more fields than the
    header is reported as a RowError rather than aborting the read.

    Row numbers in errors are physical line numbers as long as no quoted
    field spans several lines.

    Args:
        path: CSV file path.

    Returns:
        IngestResult for the file's rows.

    Raises:
        IngestError: If the file cannot be read or a column is missing.
    """
    csv_path = Path(path)

    try:
        raw = pd.read_csv(
            csv_path,
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=False,
            skipinitialspace=True,
            engine="python",
            on_bad_lines=_flag_bad_line,
        )
    except FileNotFoundError as e:
        raise IngestError(f"File not found: {csv_path}") from e
    except pd.errors.EmptyDataError as e:
        raise IngestError(f"File is empty: {csv_path}") from e
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise IngestError(f"Cannot parse {csv_path}: {e}") from e

    if raw.empty:
        raise IngestError(f"File is empty: {csv_path}")

    header = [str(value).strip().lower() for value in raw.iloc[0].fillna("")]
    missing = [column for column in REQUIRED_COLUMNS if column not in header]
    if missing:
        raise IngestError(f"Missing required column(s) in {csv_path}: {', '.join(missing)}")

    data = raw.iloc[1:].fillna("")
    data.columns = header
    logger.info("Read %d lines from %s", len(data), csv_path)

    rows, errors = _split_rows(data, width=len(header))

    result = _validate(rows)
    if not errors:
        return result

    logger.warning("Rejected %d ragged line(s) in %s", len(errors), csv_path)
    merged = sorted(result.errors + errors, key=lambda error: error.row_number)
    return IngestResult(trades=result.trades, errors=merged)
