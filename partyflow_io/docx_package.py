"""Literal placeholder substitution inside packaged (zipped XML) documents."""

# Module responsibilities:
# - Rewrite a single markup part of a DOCX-style package with find-and-replace.
# - Copy every other package entry through byte-for-byte, keeping entry order and metadata.

from __future__ import annotations

import io
import logging
import zipfile
from typing import Mapping
from xml.sax.saxutils import escape

logger = logging.getLogger(__name__)

DOCUMENT_PART = "word/document.xml"


class PackageError(RuntimeError):
    """Raised when a package is malformed or lacks the markup part."""


def substitute_text(markup: str, mapping: Mapping[str, str]) -> str:
    """Replace every occurrence of each token, in mapping order, over the whole text."""

    out = markup
    for token, replacement in mapping.items():
        out = out.replace(token, escape(replacement))
    return out


def _read_entries(package: bytes) -> tuple[list[zipfile.ZipInfo], dict[str, bytes]]:
    try:
        with zipfile.ZipFile(io.BytesIO(package)) as archive:
            infos = archive.infolist()
            files = {info.filename: archive.read(info.filename) for info in infos}
    except (zipfile.BadZipFile, zipfile.LargeZipFile, EOFError) as exc:
        raise PackageError(f"Not a readable package: {exc}") from exc
    return infos, files


def replace_placeholders(
    package: bytes,
    mapping: Mapping[str, str],
    part: str = DOCUMENT_PART,
) -> bytes:
    """Return a new package with ``mapping`` applied to ``part``.

    Args:
        package: Bytes of the source package (e.g. a ``.docx`` template).
        mapping: Token -> replacement text. Replacement text is XML-escaped.
        part: Name of the markup entry to rewrite.

    Returns:
        Bytes of the rebuilt package.

    Raises:
        PackageError: When the package cannot be opened, lacks ``part`` or the
            part is not UTF-8 text.
    """

    infos, files = _read_entries(package)
    if part not in files:
        raise PackageError(f"Package has no '{part}' entry")
    try:
        markup = files[part].decode("utf-8")
    except UnicodeDecodeError as exc:
        raise PackageError(f"'{part}' is not UTF-8 text") from exc

    rendered = substitute_text(markup, mapping).encode("utf-8")
    logger.debug("Substituted %d placeholders in %s", len(mapping), part)

    output = io.BytesIO()
    with zipfile.ZipFile(output, "w") as archive:
        for info in infos:
            content = rendered if info.filename == part else files[info.filename]
            new_info = zipfile.ZipInfo(info.filename)
            new_info.date_time = info.date_time
            new_info.external_attr = info.external_attr
            new_info.internal_attr = info.internal_attr
            new_info.compress_type = info.compress_type
            new_info.flag_bits = info.flag_bits
            archive.writestr(new_info, content)
    return output.getvalue()


def read_part(package: bytes, part: str = DOCUMENT_PART) -> str:
    """Return a package entry decoded as UTF-8 text."""

    _, files = _read_entries(package)
    if part not in files:
        raise PackageError(f"Package has no '{part}' entry")
    return files[part].decode("utf-8")
