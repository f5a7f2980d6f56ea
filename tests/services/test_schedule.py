"""Unit tests for party sheet generation."""

from __future__ import annotations

import io
from datetime import datetime, time

import pytest
from openpyxl import load_workbook

from partyflow.config import PartyDocsConfig
from partyflow.core.errors import TemplateLoadError
from partyflow.services.party_docs.fields import resolve_fields
from partyflow.services.party_docs.schedule import (
    additional_info,
    build_party_sheets,
    build_time_slot_index,
    generate_party_sheets,
    load_template_sheet,
)
from partyflow.services.party_docs.templates import PARTY_SHEET, InMemoryTemplateSource

ROW_10AM = 4
ROW_11AM = 5
ROW_2_30PM = 9
ROW_5PM = 12


def _sheet(content: bytes):
    return load_workbook(io.BytesIO(content)).worksheets[0]


def _row_values(ws, row: int) -> dict[str, object]:
    return {letter: ws[f"{letter}{row}"].value for letter in "BEFGHIJKLP"}


def test_time_slot_index_skips_blank_and_label_rows(party_sheet_template, slot_rows) -> None:
    ws = load_template_sheet(party_sheet_template)
    index = build_time_slot_index(ws, PartyDocsConfig().sheet)
    assert index == slot_rows


def test_one_sheet_per_date_named_from_date(template_source, booking) -> None:
    rows = [
        booking(date="2025-06-15", start="11am"),
        booking(date="2025-06-14"),
        booking(date=datetime(2025, 6, 15, 0, 0), start="5pm"),
    ]
    documents = generate_party_sheets(rows, template_source)
    assert [doc.name for doc in documents] == ["PartySheet_2025-06-15.xlsx", "PartySheet_2025-06-14.xlsx"]


def test_tagx_and_stomp_rows_populated(template_source, booking) -> None:
    rows = [
        booking(
            start="2:30pm",
            party_type="TagX Party - 12 kids",
            extra={"Food Any Allergies": "nuts", "Telephone": "07700 900123", "Email": " a@b.c "},
        ),
        booking(start=time(10, 0), party_type="Stomp Party", child="Leo (4)"),
    ]
    [document] = generate_party_sheets(rows, template_source)
    ws = _sheet(document.content)

    tagx = _row_values(ws, ROW_2_30PM)
    assert tagx["B"] == "TagX Party - 12 kids"
    assert tagx["E"] == "Jane Parent"
    assert tagx["F"] == "Amelia (age 6)"
    assert tagx["G"] == 12
    assert tagx["H"] == "Arena 1"
    assert (tagx["I"], tagx["J"], tagx["K"], tagx["L"]) == (3, 3, 5, 12)
    assert tagx["P"] == "Food: nuts | Tel: 07700 900123 | Email: a@b.c"

    stomp = _row_values(ws, ROW_10AM)
    assert stomp["B"] == "Stomp Party"
    assert stomp["F"] == "Leo (4)"
    assert stomp["G"] in (None, "")
    assert (stomp["I"], stomp["J"], stomp["K"], stomp["L"]) == (None, None, None, None)


def test_unknown_category_still_fills_generic_fields(template_source, booking) -> None:
    [document] = generate_party_sheets([booking(party_type="Disco 15", start="17:00")], template_source)
    values = _row_values(_sheet(document.content), ROW_5PM)
    assert values["B"] == "Disco 15"
    assert values["G"] == 15
    assert values["I"] is None


def test_unmatched_rows_are_skipped_not_fatal(template_source, booking) -> None:
    rows = [
        booking(start="TBC"),
        booking(start="7pm"),
        booking(date="someday"),
        booking(start="11am", child="Kept (5)"),
    ]
    batch = build_party_sheets(rows, template_source, PartyDocsConfig())

    assert len(batch.documents) == 1
    ws = _sheet(batch.documents[0].content)
    assert ws[f"F{ROW_11AM}"].value == "Kept (5)"
    reasons = sorted((item.source_row, item.reason) for item in batch.skipped)
    assert reasons == [(1, "invalid_time"), (2, "no_slot"), (3, "missing_date")]


def test_later_booking_wins_shared_slot(template_source, booking) -> None:
    rows = [
        booking(party_type="TagX 20", child="First"),
        booking(party_type="Stomp", child="Second"),
    ]
    [document] = generate_party_sheets(rows, template_source)
    values = _row_values(_sheet(document.content), ROW_10AM)
    assert values["F"] == "Second"
    assert values["B"] == "Stomp"
    # Supply cells are only written for TagX, so the earlier values remain.
    assert values["I"] == 4


def test_each_date_starts_from_clean_template(template_source, booking) -> None:
    rows = [
        booking(date="2025-06-14", child="Only Saturday"),
        booking(date="2025-06-15", start="12pm"),
    ]
    first, second = generate_party_sheets(rows, template_source)
    ws_second = _sheet(second.content)
    assert ws_second[f"F{ROW_10AM}"].value is None
    assert _sheet(first.content)[f"F{ROW_10AM}"].value == "Only Saturday"


def test_additional_info_empty_when_no_contact_fields(booking) -> None:
    row = booking()
    fields = resolve_fields([row], PartyDocsConfig().columns)
    assert additional_info(row, fields, PartyDocsConfig().sheet) == ""


def test_unreadable_template_is_fatal(booking) -> None:
    source = InMemoryTemplateSource(templates={PARTY_SHEET: b"not a workbook"})
    with pytest.raises(TemplateLoadError) as excinfo:
        generate_party_sheets([booking()], source)
    assert excinfo.value.artifact == PARTY_SHEET
    assert excinfo.value.stage == "parse"


def test_missing_template_is_fatal(booking) -> None:
    with pytest.raises(TemplateLoadError) as excinfo:
        generate_party_sheets([booking()], InMemoryTemplateSource(templates={}))
    assert excinfo.value.stage == "read"
