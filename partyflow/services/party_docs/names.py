"""First-name extraction from child details text."""

from __future__ import annotations

import re
from typing import Any

from .times import is_missing

# A "(" or a hyphen touching whitespace starts the trailing notes.
_NOTES_START = re.compile(r"\(|\s-|-\s")
_NAME_PARTS = re.compile(r"([-'])")


def _title_case(name: str) -> str:
    pieces = _NAME_PARTS.split(name)
    return "".join(piece[:1].upper() + piece[1:].lower() for piece in pieces)


def extract_first_name(value: Any, *, upper: bool = False) -> str | None:
    """Extract a case-normalised first name from free text.

    ``"Amelia (age 6) - nut allergy"`` gives ``"Amelia"`` (or ``"AMELIA"``
    with ``upper=True``). Apostrophes and in-word hyphens survive, so
    ``"o'brien-smith - allergic"`` gives ``"O'Brien-Smith"``.
    """

    if is_missing(value):
        return None
    text = _NOTES_START.split(str(value).strip(), maxsplit=1)[0].strip()
    if not text:
        return None
    first = text.split()[0]
    first = "".join(ch for ch in first if ch.isalpha() or ch in "'-").strip("'-")
    if not first:
        return None
    if upper:
        return first.upper()
    return _title_case(first)
