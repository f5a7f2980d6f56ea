"""`partyflow_io` top-level package exports the file and package I/O helpers."""

# Module responsibilities:
# - Re-export booking table reading, DOCX placeholder substitution and bundle writers.

from __future__ import annotations

from .bundle import write_bundle, write_documents
from .docx_package import PackageError, read_part, replace_placeholders, substitute_text
from .excel_reader import frame_to_bookings, read_bookings

__all__ = [
    "PackageError",
    "frame_to_bookings",
    "read_bookings",
    "read_part",
    "replace_placeholders",
    "substitute_text",
    "write_bundle",
    "write_documents",
]
