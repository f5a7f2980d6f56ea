"""Name sign collection, pagination and rendering."""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence, Tuple

from partyflow.config import PartyDocsConfig
from partyflow.core.errors import TemplateLoadError
from partyflow_io.docx_package import PackageError, replace_placeholders

from .classify import PartyCategory, classify_party
from .fields import BookingRow, FieldMap, resolve_fields
from .models import NamedDocument, SignBundle, SignNames
from .names import extract_first_name
from .templates import STOMP_SIGN, TAGX_SIGN, TemplateSource

LOGGER = logging.getLogger(__name__)

Page = Tuple[str, ...]


def collect_sign_names(rows: Sequence[BookingRow], fields: FieldMap) -> SignNames:
    """Collect unique first names per category in order of first appearance.

    Stomp names are uppercased, TagX names title-cased; other bookings are
    ignored.
    """

    names = SignNames()
    for row in rows:
        category = classify_party(fields.value(row, "party_type"))
        if category is PartyCategory.STOMP:
            target, upper = names.stomp, True
        elif category is PartyCategory.TAGX:
            target, upper = names.tagx, False
        else:
            continue
        name = extract_first_name(fields.value(row, "child_details"), upper=upper)
        if name and name not in target:
            target.append(name)
    return names


def paginate(names: Sequence[str], capacity: int) -> List[Page]:
    """Split names into pages of ``capacity``; no names still yields one empty page."""

    if capacity < 1:
        raise ValueError("page capacity must be at least 1")
    if not names:
        return [()]
    return [tuple(names[start : start + capacity]) for start in range(0, len(names), capacity)]


def page_mapping(page: Page, capacity: int, token_format: str = "NAME {index}") -> Dict[str, str]:
    """Placeholder token -> name for every slot on a page; unfilled slots map to ``""``."""

    return {
        token_format.format(index=slot): page[slot - 1] if slot <= len(page) else ""
        for slot in range(1, capacity + 1)
    }


def render_pages(
    template: bytes,
    pages: Sequence[Page],
    *,
    kind: str,
    capacity: int,
    config: PartyDocsConfig,
    name_format: str,
) -> List[NamedDocument]:
    documents: List[NamedDocument] = []
    for number, page in enumerate(pages, start=1):
        mapping = page_mapping(page, capacity, config.signs.token_format)
        try:
            content = replace_placeholders(template, mapping, part=config.signs.markup_part)
        except PackageError as exc:
            raise TemplateLoadError(kind, "parse", str(exc)) from exc
        documents.append(NamedDocument(name=name_format.format(page=number), content=content))
    return documents


def generate_signs(
    rows: Sequence[BookingRow],
    source: TemplateSource,
    config: PartyDocsConfig | None = None,
    fields: FieldMap | None = None,
) -> SignBundle:
    """Build TagX and Stomp sign pages from the bookings."""

    config = config or PartyDocsConfig()
    if fields is None:
        fields = resolve_fields(rows, config.columns)
    names = collect_sign_names(rows, fields)
    layout = config.signs

    bundle = SignBundle()
    bundle.tagx = render_pages(
        source.read_bytes(TAGX_SIGN),
        paginate(names.tagx, layout.tagx_capacity),
        kind=TAGX_SIGN,
        capacity=layout.tagx_capacity,
        config=config,
        name_format=layout.tagx_output_name,
    )
    bundle.stomp = render_pages(
        source.read_bytes(STOMP_SIGN),
        paginate(names.stomp, layout.stomp_capacity),
        kind=STOMP_SIGN,
        capacity=layout.stomp_capacity,
        config=config,
        name_format=layout.stomp_output_name,
    )
    LOGGER.info(
        "Signs built: %d TagX names on %d pages, %d Stomp names on %d pages",
        len(names.tagx),
        len(bundle.tagx),
        len(names.stomp),
        len(bundle.stomp),
    )
    return bundle
