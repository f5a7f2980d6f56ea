"""Public API for the party documents service."""

from __future__ import annotations

import logging
from typing import Sequence

from partyflow.config import PartyDocsConfig

from .fields import BookingRow, resolve_fields
from .models import GenerationResult
from .schedule import build_party_sheets
from .signs import generate_signs
from .templates import TemplateSource

LOGGER = logging.getLogger(__name__)


def generate_documents(
    rows: Sequence[BookingRow],
    source: TemplateSource,
    config: PartyDocsConfig | None = None,
) -> GenerationResult:
    """Build party sheets and name signs from one booking table.

    Template problems raise :class:`~partyflow.core.errors.TemplateLoadError`
    and abort the run; bookings that cannot be placed are only reported in
    ``GenerationResult.skipped``.
    """

    config = config or PartyDocsConfig()
    fields = resolve_fields(rows, config.columns)
    if fields.missing:
        LOGGER.warning("Columns not found for fields: %s", ", ".join(fields.missing))

    sheets = build_party_sheets(rows, source, config, fields=fields)
    signs = generate_signs(rows, source, config, fields=fields)
    skipped = sorted(sheets.skipped, key=lambda item: item.source_row or 0)

    LOGGER.info(
        "Processed %s bookings (%s party sheets / %s TagX pages / %s Stomp pages / %s skipped)",
        len(rows),
        len(sheets.documents),
        len(signs.tagx),
        len(signs.stomp),
        len(skipped),
    )
    for item in skipped:
        LOGGER.debug("Skipped booking %s: %s %s", item.source_row, item.reason, item.detail)

    return GenerationResult(
        party_sheets=sheets.documents,
        signs=signs,
        skipped=skipped,
        fields=fields,
    )
