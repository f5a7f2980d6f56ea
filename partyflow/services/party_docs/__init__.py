"""Party documents service package."""

from .api import generate_documents
from .models import GenerationResult, NamedDocument, SignBundle, SkippedRow
from .schedule import generate_party_sheets
from .signs import generate_signs
from .templates import DirectoryTemplateSource, InMemoryTemplateSource, TemplateSource

__all__ = [
    "DirectoryTemplateSource",
    "GenerationResult",
    "InMemoryTemplateSource",
    "NamedDocument",
    "SignBundle",
    "SkippedRow",
    "TemplateSource",
    "generate_documents",
    "generate_party_sheets",
    "generate_signs",
]
