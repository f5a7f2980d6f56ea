"""Excel input helpers for booking tables."""

# Module responsibilities:
# - Provide a thin wrapper around pandas.read_excel that yields read-only booking rows.
# - Keep native cell types (text, numbers, dates, times) and turn blank cells into None.

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, List, Mapping, Union

import pandas as pd

logger = logging.getLogger(__name__)

SheetType = Union[str, int, None]


def _clean(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, str):
        return value if value.strip() else None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        return value
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    return value


def frame_to_bookings(df: pd.DataFrame) -> List[Mapping[str, Any]]:
    """Convert a DataFrame into immutable booking rows, dropping blank rows."""

    headers = [str(col).strip() for col in df.columns]
    rows: List[Mapping[str, Any]] = []
    for values in df.itertuples(index=False, name=None):
        record = {
            header: _clean(value)
            for header, value in zip(headers, values)
            if header and not header.startswith("Unnamed:")
        }
        record = {key: value for key, value in record.items() if value is not None}
        if record:
            rows.append(MappingProxyType(record))
    return rows


def read_bookings(path: Path, sheet: SheetType = 0) -> List[Mapping[str, Any]]:
    """Load booking rows from the first (or given) sheet of a workbook.

    Args:
        path: Path to the workbook; row 1 holds the headers.
        sheet: Sheet name or index; defaults to the first sheet.

    Returns:
        One read-only mapping per non-blank data row.

    Raises:
        FileNotFoundError: When the Excel file does not exist.
        ValueError: When pandas fails to parse the sheet or it has no data rows.
    """

    if not path.exists():
        raise FileNotFoundError(f"Booking workbook not found: {path}")

    logger.info("Reading booking workbook %s (sheet=%s)", path, sheet)

    try:
        df = pd.read_excel(path, sheet_name=sheet, dtype=object)
    except ValueError as exc:
        logger.error("Failed to read booking workbook: %s", exc)
        raise

    if isinstance(df, dict):
        raise ValueError("read_bookings expects a single sheet; received multiple sheets")

    rows = frame_to_bookings(df)
    if not rows:
        raise ValueError(f"No booking rows found in {path.name} (after header row)")
    logger.info("Booking workbook loaded: %d rows, columns=%s", len(rows), list(df.columns))
    return rows
