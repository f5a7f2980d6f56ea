"""Data models used by the party documents service."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .fields import FieldMap


@dataclass(frozen=True, slots=True)
class NamedDocument:
    """A finished output artifact ready for archiving."""

    name: str
    content: bytes


@dataclass(frozen=True, slots=True)
class SkippedRow:
    """A booking left off a party sheet, with the reason why."""

    source_row: Optional[int]
    reason: str
    detail: str = ""


@dataclass(slots=True)
class SignNames:
    """Deduplicated sign names per category, in order of first appearance."""

    tagx: List[str] = field(default_factory=list)
    stomp: List[str] = field(default_factory=list)


@dataclass(slots=True)
class SignBundle:
    """Sign documents per category."""

    tagx: List[NamedDocument] = field(default_factory=list)
    stomp: List[NamedDocument] = field(default_factory=list)


@dataclass(slots=True)
class SheetBatch:
    """Party sheets plus the rows that could not be placed."""

    documents: List[NamedDocument] = field(default_factory=list)
    skipped: List[SkippedRow] = field(default_factory=list)


@dataclass(slots=True)
class GenerationResult:
    """Everything produced from one booking table."""

    party_sheets: List[NamedDocument]
    signs: SignBundle
    skipped: List[SkippedRow]
    fields: FieldMap

    def documents(self) -> List[NamedDocument]:
        """All documents in delivery order: sheets, TagX signs, Stomp signs."""

        return [*self.party_sheets, *self.signs.tagx, *self.signs.stomp]


__all__ = [
    "GenerationResult",
    "NamedDocument",
    "SheetBatch",
    "SignBundle",
    "SignNames",
    "SkippedRow",
]
