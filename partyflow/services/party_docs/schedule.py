"""Party sheet generation: time slot matching and row population."""

from __future__ import annotations

import io
import logging
from typing import Dict, List, Mapping, Optional, Sequence

from openpyxl import load_workbook
from openpyxl.utils import column_index_from_string
from openpyxl.worksheet.worksheet import Worksheet

from partyflow.config import PartyDocsConfig, SheetLayout
from partyflow.core.errors import TemplateLoadError

from .classify import attendee_count, supplies_for_booking
from .fields import BookingRow, FieldMap, resolve_fields
from .grouping import group_by_date, parse_booking_date
from .models import NamedDocument, SheetBatch, SkippedRow
from .templates import PARTY_SHEET, TemplateSource
from .times import canonical_minutes, format_minutes

LOGGER = logging.getLogger(__name__)

_INFO_FIELDS = ("allergies", "notes", "telephone", "email")


def load_template_sheet(template: bytes) -> Worksheet:
    """Load a fresh workbook from template bytes and return its first sheet."""

    try:
        workbook = load_workbook(io.BytesIO(template))
    except Exception as exc:  # noqa: BLE001 - openpyxl raises a wide range of parse errors
        raise TemplateLoadError(PARTY_SHEET, "parse", str(exc)) from exc
    if not workbook.worksheets:
        raise TemplateLoadError(PARTY_SHEET, "parse", "workbook has no worksheets")
    return workbook.worksheets[0]


def build_time_slot_index(ws: Worksheet, layout: SheetLayout) -> Dict[int, int]:
    """Map canonical minutes to template row numbers for the time slot range."""

    column = column_index_from_string(layout.time_column)
    index: Dict[int, int] = {}
    for row in range(layout.first_time_row, layout.last_time_row + 1):
        minutes = canonical_minutes(ws.cell(row=row, column=column).value)
        if minutes is not None:
            index[minutes] = row
    LOGGER.debug("Time slot index: %s", {format_minutes(k): v for k, v in index.items()})
    return index


def additional_info(row: BookingRow, fields: FieldMap, layout: SheetLayout) -> str:
    """Join labelled allergy/notes/telephone/email values present on the row."""

    parts: List[str] = []
    for name in _INFO_FIELDS:
        text = fields.text(row, name)
        if text:
            label = layout.info_labels.get(name, name.title())
            parts.append(f"{label}: {text}")
    return layout.info_separator.join(parts)


def _set(ws: Worksheet, row: int, letter: str, value: object) -> None:
    ws.cell(row=row, column=column_index_from_string(letter)).value = value


def populate_sheet(
    ws: Worksheet,
    rows: Sequence[BookingRow],
    fields: FieldMap,
    index: Dict[int, int],
    layout: SheetLayout,
    row_numbers: Optional[Mapping[int, int]] = None,
) -> List[SkippedRow]:
    """Write each booking into its matching time slot row.

    Rows are applied in order, so a later booking sharing a slot overwrites
    the cells it writes. Rows without a usable time or slot are returned as
    skipped rather than raising. ``row_numbers`` maps ``id(row)`` to the
    booking number reported in diagnostics.
    """

    cols = layout.columns
    skipped: List[SkippedRow] = []
    for position, row in enumerate(rows, start=1):
        source_row = row_numbers.get(id(row), position) if row_numbers else position
        raw_time = fields.value(row, "time")
        minutes = canonical_minutes(raw_time)
        if minutes is None:
            skipped.append(SkippedRow(source_row, "invalid_time", "" if raw_time is None else str(raw_time)))
            continue
        slot = index.get(minutes)
        if slot is None:
            skipped.append(SkippedRow(source_row, "no_slot", format_minutes(minutes)))
            continue

        party_type = fields.text(row, "party_type")
        count = attendee_count(party_type)

        _set(ws, slot, cols.additional_info, additional_info(row, fields, layout))
        _set(ws, slot, cols.party_type, party_type)
        _set(ws, slot, cols.name, fields.text(row, "name"))
        _set(ws, slot, cols.child_details, fields.text(row, "child_details"))
        _set(ws, slot, cols.attendees, count if count is not None else "")
        _set(ws, slot, cols.location, fields.text(row, "location"))

        supplies = supplies_for_booking(party_type)
        if supplies is not None:
            _set(ws, slot, cols.margherita, supplies.margherita)
            _set(ws, slot, cols.pepperoni, supplies.pepperoni)
            _set(ws, slot, cols.chips, supplies.chips)
            _set(ws, slot, cols.cans, supplies.cans)
    return skipped


def _to_bytes(ws: Worksheet) -> bytes:
    buffer = io.BytesIO()
    ws.parent.save(buffer)
    return buffer.getvalue()


def build_party_sheets(
    rows: Sequence[BookingRow],
    source: TemplateSource,
    config: PartyDocsConfig,
    fields: FieldMap | None = None,
) -> SheetBatch:
    """Produce one party sheet per booking date, plus skipped-row diagnostics."""

    if fields is None:
        fields = resolve_fields(rows, config.columns)
    layout = config.sheet
    batch = SheetBatch()

    template = source.read_bytes(PARTY_SHEET)
    index = build_time_slot_index(load_template_sheet(template), layout)
    if not index:
        LOGGER.warning("Party sheet template has no readable time slots in %s%d:%s%d",
                       layout.time_column, layout.first_time_row,
                       layout.time_column, layout.last_time_row)

    date_key = fields.key("date")
    row_numbers = {id(row): number for number, row in enumerate(rows, start=1)}
    for number, row in enumerate(rows, start=1):
        if date_key is None or parse_booking_date(row.get(date_key)) is None:
            batch.skipped.append(SkippedRow(number, "missing_date"))

    for day, day_rows in group_by_date(rows, date_key).items():
        ws = load_template_sheet(template)
        batch.skipped.extend(populate_sheet(ws, day_rows, fields, index, layout, row_numbers))
        name = layout.output_name.format(date=day.isoformat())
        batch.documents.append(NamedDocument(name=name, content=_to_bytes(ws)))
        LOGGER.info("Party sheet %s built from %d bookings", name, len(day_rows))
    return batch


def generate_party_sheets(
    rows: Sequence[BookingRow],
    source: TemplateSource,
    config: PartyDocsConfig | None = None,
) -> List[NamedDocument]:
    """Return the named party sheet workbooks, one per distinct booking date."""

    return build_party_sheets(rows, source, config or PartyDocsConfig()).documents
