"""End-to-end tests for the party documents API."""

from __future__ import annotations

import io

from openpyxl import load_workbook

from partyflow.services.party_docs import generate_documents
from partyflow.services.party_docs.report import render_report
from partyflow_io.docx_package import read_part


def test_tagx_and_stomp_bookings_on_one_date(template_source, booking) -> None:
    rows = [
        booking(start="10am", party_type="TagX Party - 16 kids", child="Amelia (age 6)"),
        booking(start="2:30pm", party_type="Stomp Party", child="Leo (4) - shy"),
    ]

    result = generate_documents(rows, template_source)

    [sheet] = result.party_sheets
    ws = load_workbook(io.BytesIO(sheet.content)).worksheets[0]
    assert [ws[f"{col}4"].value for col in "IJKL"] == [4, 3, 8, 16]
    assert [ws[f"{col}9"].value for col in "IJKL"] == [None, None, None, None]

    assert ">LEO<" in read_part(result.signs.stomp[0].content)
    assert ">Amelia<" in read_part(result.signs.tagx[0].content)
    assert result.skipped == []
    assert [doc.name for doc in result.documents()] == [
        "PartySheet_2025-06-14.xlsx",
        "TagX_Signs_1.docx",
        "Stompers_Signs_1.docx",
    ]


def test_skipped_rows_reported_in_source_order(template_source, booking) -> None:
    rows = [
        booking(),
        booking(date=None),
        booking(start="TBC"),
    ]
    result = generate_documents(rows, template_source)

    assert [(item.source_row, item.reason) for item in result.skipped] == [
        (2, "missing_date"),
        (3, "invalid_time"),
    ]
    report = render_report(result)
    assert "Skipped bookings: 2" in report
    assert "No readable party date: 1" in report


def test_alternative_column_names(template_source) -> None:
    rows = [
        {
            "Party Date": "2025-07-01",
            "Time": "11:00",
            "Party Type": "tagx 9",
            "Child Details Name/Age": "Ivy",
        }
    ]
    result = generate_documents(rows, template_source)

    assert [doc.name for doc in result.party_sheets] == ["PartySheet_2025-07-01.xlsx"]
    ws = load_workbook(io.BytesIO(result.party_sheets[0].content)).worksheets[0]
    assert [ws[f"{col}5"].value for col in "GIJKL"] == [9, 3, 2, 4, 9]
    assert "email" in result.fields.missing
