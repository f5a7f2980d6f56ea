"""Resolution of logical booking fields against heterogeneous column names."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from .times import is_missing

BookingRow = Mapping[str, Any]


def _normalize(label: str) -> str:
    return str(label).strip().lower().replace(" ", "")


@dataclass(slots=True)
class FieldMap:
    """Outcome of matching logical fields to the columns present in a batch."""

    matched: Dict[str, str] = field(default_factory=dict)
    missing: List[str] = field(default_factory=list)
    unmatched_columns: List[str] = field(default_factory=list)

    def key(self, name: str) -> Optional[str]:
        """Column key for a logical field, or ``None`` when absent."""

        return self.matched.get(name)

    def value(self, row: BookingRow, name: str) -> Any:
        """Raw value of a logical field; missing cells come back as ``None``."""

        key = self.matched.get(name)
        if key is None:
            return None
        value = row.get(key)
        return None if is_missing(value) else value

    def text(self, row: BookingRow, name: str) -> str:
        """Trimmed text of a logical field; ``""`` when absent."""

        value = self.value(row, name)
        if value is None:
            return ""
        return str(value).strip()


def _present_columns(rows: Sequence[BookingRow]) -> List[str]:
    seen: Dict[str, None] = {}
    for row in rows:
        for column in row.keys():
            seen.setdefault(column, None)
    return list(seen)


def resolve_column(rows: Sequence[BookingRow], candidates: Iterable[str]) -> Optional[str]:
    """Pick the first candidate column that appears in any row.

    Candidates are tried in order; matching ignores case and spaces. The
    returned key is the column name exactly as it appears in the rows.
    """

    normalized_map: Dict[str, str] = {}
    for column in _present_columns(rows):
        normalized_map.setdefault(_normalize(column), column)
    for candidate in candidates:
        found = normalized_map.get(_normalize(candidate))
        if found is not None:
            return found
    return None


def resolve_fields(rows: Sequence[BookingRow], synonyms: Mapping[str, Iterable[str]]) -> FieldMap:
    """Resolve every logical field in ``synonyms`` against the batch columns."""

    result = FieldMap()
    for name, candidates in synonyms.items():
        found = resolve_column(rows, candidates)
        if found is None:
            result.missing.append(name)
        else:
            result.matched[name] = found
    used = set(result.matched.values())
    result.unmatched_columns = [col for col in _present_columns(rows) if col not in used]
    return result
