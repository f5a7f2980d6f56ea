"""Template sources for party sheets and name signs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Protocol

from partyflow.config import TemplateNames
from partyflow.core.errors import TemplateLoadError

LOGGER = logging.getLogger(__name__)

PARTY_SHEET = "party_sheet"
TAGX_SIGN = "tagx_sign"
STOMP_SIGN = "stomp_sign"
TEMPLATE_KINDS = (PARTY_SHEET, TAGX_SIGN, STOMP_SIGN)


class TemplateSource(Protocol):
    """Byte access to the templates; every call returns an independent copy."""

    def read_bytes(self, kind: str) -> bytes:  # pragma: no cover - interface definition
        ...


@dataclass(slots=True)
class DirectoryTemplateSource:
    """Reads templates from a directory using the configured file names."""

    root: Path
    names: TemplateNames = field(default_factory=TemplateNames)

    def path_for(self, kind: str) -> Path:
        if kind not in TEMPLATE_KINDS:
            raise KeyError(f"unknown template kind: {kind}")
        return Path(self.root) / getattr(self.names, kind)

    def read_bytes(self, kind: str) -> bytes:
        path = self.path_for(kind)
        LOGGER.debug("Reading %s template from %s", kind, path)
        try:
            return path.read_bytes()
        except OSError as exc:
            raise TemplateLoadError(kind, "read", f"{path}: {exc}") from exc


@dataclass(slots=True)
class InMemoryTemplateSource:
    """Holds template bytes in memory; used by tests and embedding callers."""

    templates: Dict[str, bytes]

    def read_bytes(self, kind: str) -> bytes:
        try:
            return bytes(self.templates[kind])
        except KeyError as exc:
            raise TemplateLoadError(kind, "read", "template not provided") from exc
