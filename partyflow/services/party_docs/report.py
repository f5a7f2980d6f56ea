"""Reporting utilities for party document generation."""

from __future__ import annotations

from collections import Counter
from pathlib import Path

from .models import GenerationResult

REPORT_NAME = "party_docs_report.md"

_REASON_LABELS = {
    "missing_date": "No readable party date",
    "invalid_time": "No readable start time",
    "no_slot": "Start time has no slot on the party sheet",
}


def render_report(result: GenerationResult) -> str:
    """Render a Markdown summary of produced documents and skipped bookings."""

    lines = ["# Party Documents Report", ""]
    lines.append(f"- Party sheets: {len(result.party_sheets)}")
    lines.append(f"- TagX sign pages: {len(result.signs.tagx)}")
    lines.append(f"- Stomp sign pages: {len(result.signs.stomp)}")
    lines.append(f"- Skipped bookings: {len(result.skipped)}")
    lines.append("")

    if result.fields.missing or result.fields.unmatched_columns:
        lines.append("## Column diagnostics")
        if result.fields.missing:
            lines.append(f"- Missing fields: {', '.join(result.fields.missing)}")
        if result.fields.unmatched_columns:
            lines.append(f"- Unused source columns: {', '.join(result.fields.unmatched_columns)}")
        lines.append("")

    if result.skipped:
        counts = Counter(item.reason for item in result.skipped)
        lines.append("## Skipped bookings")
        for reason, count in counts.items():
            lines.append(f"- {_REASON_LABELS.get(reason, reason)}: {count}")
        lines.append("")
        lines.append("| Booking | Reason | Detail |")
        lines.append("|---|---|---|")
        for item in result.skipped:
            booking = "" if item.source_row is None else str(item.source_row)
            lines.append(f"| {booking} | {item.reason} | {item.detail} |")
        lines.append("")

    return "\n".join(lines)


def write_report(result: GenerationResult, output_dir: Path) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / REPORT_NAME
    path.write_text(render_report(result), encoding="utf-8")
    return path
