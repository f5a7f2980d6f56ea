from __future__ import annotations

import io
import sys
import zipfile
from datetime import time
from pathlib import Path
from typing import Callable, Dict

import pytest
from openpyxl import Workbook

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from partyflow.config import PartyDocsConfig
from partyflow.services.party_docs.templates import (
    PARTY_SHEET,
    STOMP_SIGN,
    TAGX_SIGN,
    InMemoryTemplateSource,
)

# Slot rows of the test party sheet; rows 7 and 8 hold no readable time.
SLOT_ROWS = {
    10 * 60: 4,
    11 * 60: 5,
    12 * 60: 6,
    14 * 60 + 30: 9,
    15 * 60 + 30: 10,
    16 * 60 + 30: 11,
    17 * 60: 12,
    18 * 60: 13,
}

CONTENT_TYPES = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
    '<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">'
    '<Default Extension="xml" ContentType="application/xml"/>'
    "</Types>"
)
STYLES = '<?xml version="1.0" encoding="UTF-8"?><w:styles xmlns:w="urn:w"><w:style w:styleId="Title"/></w:styles>'
MEDIA = bytes(range(256)) * 4


def _document_xml(slots: int) -> str:
    paragraphs = "".join(
        f'<w:p><w:r><w:rPr><w:b/></w:rPr><w:t xml:space="preserve">NAME {i}</w:t></w:r></w:p>'
        for i in range(1, slots + 1)
    )
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        f'<w:document xmlns:w="urn:w"><w:body>{paragraphs}<w:sectPr/></w:body></w:document>'
    )


def build_sign_template(slots: int) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr("[Content_Types].xml", CONTENT_TYPES)
        archive.writestr("word/document.xml", _document_xml(slots))
        archive.writestr("word/styles.xml", STYLES)
        archive.writestr(zipfile.ZipInfo("word/media/image1.png"), MEDIA)
    return buffer.getvalue()


def build_party_sheet_template() -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = "Party Sheet"
    ws["A1"] = "PARTY SHEET"
    ws["D3"] = "Time"
    ws["D4"] = time(10, 0)
    ws["D5"] = "11am"
    ws["D6"] = "12pm"
    ws["D7"] = None
    ws["D8"] = "LUNCH BREAK"
    ws["D9"] = "2:30pm"
    ws["D10"] = "3.30pm"
    ws["D11"] = time(16, 30)
    ws["D12"] = "5pm"
    ws["D13"] = "18:00"
    ws["D14"] = "7pm"
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


@pytest.fixture()
def party_sheet_template() -> bytes:
    return build_party_sheet_template()


@pytest.fixture()
def tagx_sign_template() -> bytes:
    return build_sign_template(4)


@pytest.fixture()
def stomp_sign_template() -> bytes:
    return build_sign_template(2)


@pytest.fixture()
def template_bytes(party_sheet_template, tagx_sign_template, stomp_sign_template) -> Dict[str, bytes]:
    return {
        PARTY_SHEET: party_sheet_template,
        TAGX_SIGN: tagx_sign_template,
        STOMP_SIGN: stomp_sign_template,
    }


@pytest.fixture()
def template_source(template_bytes) -> InMemoryTemplateSource:
    return InMemoryTemplateSource(templates=dict(template_bytes))


@pytest.fixture()
def templates_dir(tmp_path: Path, template_bytes) -> Path:
    names = PartyDocsConfig().templates
    directory = tmp_path / "templates"
    directory.mkdir()
    for kind, content in template_bytes.items():
        (directory / getattr(names, kind)).write_bytes(content)
    return directory


@pytest.fixture()
def booking() -> Callable[..., Dict[str, object]]:
    """Factory for booking rows using the standard column headers."""

    def _booking(
        date: object = "2025-06-14",
        start: object = "10am",
        party_type: object = "Tag X Party - 12 kids",
        child: object = "Amelia (age 6)",
        extra: Dict[str, object] | None = None,
    ) -> Dict[str, object]:
        row: Dict[str, object] = {
            "Date of Party": date,
            "Party Start Time": start,
            "Party Type": party_type,
            "Name": "Jane Parent",
            "Child Details Name/Age": child,
            "PartyLocation": "Arena 1",
        }
        row.update(extra or {})
        return {key: value for key, value in row.items() if value is not None}

    return _booking


@pytest.fixture()
def slot_rows() -> Dict[int, int]:
    return dict(SLOT_ROWS)
