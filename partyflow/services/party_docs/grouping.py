"""Partitioning of bookings by calendar date."""

from __future__ import annotations

import numbers
from datetime import date, datetime, time
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd
from openpyxl.utils.datetime import from_excel

from .fields import BookingRow
from .times import is_missing


def parse_booking_date(value: Any) -> Optional[date]:
    """Return the calendar date of ``value``; time-of-day is discarded.

    Numbers are spreadsheet serial dates; text goes through pandas parsing.
    """

    if is_missing(value):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, time):
        return None
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        try:
            converted = from_excel(value)
        except (ValueError, OverflowError, TypeError):
            return None
        return converted.date() if isinstance(converted, datetime) else None
    parsed = pd.to_datetime(str(value).strip(), errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.date()


def group_by_date(rows: Sequence[BookingRow], date_key: Optional[str]) -> Dict[date, List[BookingRow]]:
    """Group rows by the date found under ``date_key``.

    Rows without a parseable date are left out. Groups and the rows inside
    them keep their order of first appearance.
    """

    groups: Dict[date, List[BookingRow]] = {}
    if date_key is None:
        return groups
    for row in rows:
        day = parse_booking_date(row.get(date_key))
        if day is None:
            continue
        groups.setdefault(day, []).append(row)
    return groups
