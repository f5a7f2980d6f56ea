"""PartyFlow turns party booking tables into party sheets and name signs."""

__version__ = "0.1.0"
