"""Writers that deliver generated documents to disk."""

# Module responsibilities:
# - Bundle named document buffers into a single ZIP archive.
# - Optionally write the documents as loose files for manual review.

from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import Iterable, List, Protocol

logger = logging.getLogger(__name__)


class NamedContent(Protocol):
    name: str
    content: bytes


def write_bundle(documents: Iterable[NamedContent], zip_path: Path) -> Path:
    """Write documents into a deflated ZIP archive in the given order."""

    zip_path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with zipfile.ZipFile(zip_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for document in documents:
            zf.writestr(document.name, document.content)
            count += 1
    logger.info("Bundle written: %s (%d documents)", zip_path, count)
    return zip_path


def write_documents(documents: Iterable[NamedContent], output_dir: Path) -> List[Path]:
    """Write every document as its own file under ``output_dir``."""

    output_dir.mkdir(parents=True, exist_ok=True)
    paths: List[Path] = []
    for document in documents:
        path = output_dir / document.name
        path.write_bytes(document.content)
        paths.append(path)
    logger.info("Wrote %d documents to %s", len(paths), output_dir)
    return paths
