"""Party category classification and catering quantities."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .times import is_missing

_DIGITS = re.compile(r"(\d+)")

STOMP_MARKERS = ("stomp",)
TAGX_MARKERS = ("tag x", "tagx")

# (inclusive upper bound, margherita, pepperoni, chips); counts above the last bound use _TOP_TIER.
_SUPPLY_TIERS = (
    (10, 3, 2, 4),
    (15, 3, 3, 5),
    (20, 4, 3, 8),
    (25, 4, 4, 9),
)
_TOP_TIER = (5, 5, 10)


class PartyCategory(str, Enum):
    """Business category of a booking."""

    STOMP = "stomp"
    TAGX = "tagx"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class SupplyQuantities:
    """Catering quantities written onto a party sheet row."""

    margherita: int
    pepperoni: int
    chips: int
    cans: int


def _as_text(value: Any) -> str:
    if is_missing(value):
        return ""
    return str(value)


def classify_party(party_type: Any) -> PartyCategory:
    """Classify free-text party type; Stomp is checked before TagX."""

    text = _as_text(party_type).lower()
    if any(marker in text for marker in STOMP_MARKERS):
        return PartyCategory.STOMP
    if any(marker in text for marker in TAGX_MARKERS):
        return PartyCategory.TAGX
    return PartyCategory.UNKNOWN


def attendee_count(party_type: Any) -> int | None:
    """Return the first run of digits in the party type text, if any."""

    match = _DIGITS.search(_as_text(party_type))
    if match is None:
        return None
    return int(match.group(1))


def supplies_for(count: int) -> SupplyQuantities:
    """Map an attendee count onto the catering step function."""

    if count < 0:
        raise ValueError(f"attendee count must be non-negative: {count}")
    for upper, margherita, pepperoni, chips in _SUPPLY_TIERS:
        if count <= upper:
            return SupplyQuantities(margherita, pepperoni, chips, count)
    margherita, pepperoni, chips = _TOP_TIER
    return SupplyQuantities(margherita, pepperoni, chips, count)


def supplies_for_booking(party_type: Any) -> SupplyQuantities | None:
    """Quantities for a booking, only for TagX parties with a known headcount."""

    if classify_party(party_type) is not PartyCategory.TAGX:
        return None
    count = attendee_count(party_type)
    if count is None:
        return None
    return supplies_for(count)
