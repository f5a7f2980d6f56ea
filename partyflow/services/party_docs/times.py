"""Time-of-day normalisation for booking and template cells."""

from __future__ import annotations

import numbers
import re
from datetime import date, datetime, time
from typing import Any

import pandas as pd

MINUTES_PER_DAY = 24 * 60

_NON_TIME_CHARS = re.compile(r"[^0-9:]")


def is_missing(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and value.strip() == "":
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def canonical_minutes(value: Any) -> int | None:
    """Return minutes since midnight for ``value`` or ``None`` when unparseable.

    Accepts ``datetime``/``time`` objects (including pandas timestamps),
    spreadsheet day fractions and free text such as ``"2:30pm"``,
    ``"14.30"`` or ``"2pm"``.
    """

    if is_missing(value):
        return None
    if isinstance(value, (datetime, time)):
        return value.hour * 60 + value.minute
    if isinstance(value, date):
        return None
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        if 0 <= value < 1:
            return int(round(value * MINUTES_PER_DAY)) % MINUTES_PER_DAY
    return _minutes_from_text(str(value))


def _minutes_from_text(raw: str) -> int | None:
    text = raw.strip().lower().replace(".", ":")
    if not text:
        return None
    is_am = "am" in text
    is_pm = "pm" in text
    text = text.replace("am", "").replace("pm", "")
    text = _NON_TIME_CHARS.sub("", text)
    if not any(ch.isdigit() for ch in text):
        return None

    parts = text.split(":")
    hour = int(parts[0]) if parts[0] else 0
    minute = int(parts[1]) if len(parts) > 1 and parts[1] else 0

    if is_pm and hour < 12:
        hour += 12
    if is_am and hour == 12:
        hour = 0
    if hour > 23 or minute > 59:
        return None
    return hour * 60 + minute


def format_minutes(minutes: int) -> str:
    """Render canonical minutes as ``HH:MM`` for logs and reports."""

    return f"{minutes // 60:02d}:{minutes % 60:02d}"
