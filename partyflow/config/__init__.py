"""Configuration helpers for PartyFlow document generation.

Provides the pydantic models describing column synonyms, the party sheet
layout and the sign templates, plus a loader for the YAML file shipped
next to this module so layouts can be adjusted without touching code.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from partyflow.core.errors import ConfigError


load_dotenv(override=False)

CONFIG_DIR = Path(__file__).resolve().parent
DEFAULT_CONFIG_PATH = CONFIG_DIR / "party_docs.yaml"


def _default_columns() -> Dict[str, List[str]]:
    return {
        "date": ["Date of Party", "Party Date", "Date"],
        "time": ["Party Start Time", "Party Time", "Time"],
        "party_type": ["Party Type"],
        "name": ["Name"],
        "child_details": ["Child Details Name/Age"],
        "location": ["PartyLocation", "Party Location"],
        "allergies": ["Food Any Allergies"],
        "notes": ["Food Notes (inc Allergies)"],
        "telephone": ["Telephone"],
        "email": ["Email"],
    }


class SheetColumns(BaseModel):
    """Column letters written for each booking on the party sheet."""

    model_config = ConfigDict(extra="forbid")

    party_type: str = "B"
    name: str = "E"
    child_details: str = "F"
    attendees: str = "G"
    location: str = "H"
    margherita: str = "I"
    pepperoni: str = "J"
    chips: str = "K"
    cans: str = "L"
    additional_info: str = "P"

    @field_validator("*")
    @classmethod
    def _upper_letters(cls, value: str) -> str:
        letters = str(value).strip().upper()
        if not letters.isalpha():
            raise ValueError(f"invalid column letter: {value!r}")
        return letters


class SheetLayout(BaseModel):
    """Fixed layout of the party sheet template."""

    model_config = ConfigDict(extra="forbid")

    time_column: str = "D"
    first_time_row: int = 4
    last_time_row: int = 13
    columns: SheetColumns = Field(default_factory=SheetColumns)
    info_labels: Dict[str, str] = Field(
        default_factory=lambda: {
            "allergies": "Food",
            "notes": "Notes",
            "telephone": "Tel",
            "email": "Email",
        }
    )
    info_separator: str = " | "
    output_name: str = "PartySheet_{date}.xlsx"

    @field_validator("last_time_row")
    @classmethod
    def _ordered_rows(cls, value: int, info) -> int:
        first = info.data.get("first_time_row", 1)
        if value < first:
            raise ValueError("last_time_row must not precede first_time_row")
        return value


class SignLayout(BaseModel):
    """Sign template paging and placeholder conventions."""

    model_config = ConfigDict(extra="forbid")

    tagx_capacity: int = Field(default=4, ge=1)
    stomp_capacity: int = Field(default=2, ge=1)
    token_format: str = "NAME {index}"
    markup_part: str = "word/document.xml"
    tagx_output_name: str = "TagX_Signs_{page}.docx"
    stomp_output_name: str = "Stompers_Signs_{page}.docx"


class TemplateNames(BaseModel):
    """File names of the three templates inside a templates directory."""

    model_config = ConfigDict(extra="forbid")

    party_sheet: str = "PARTY SHEET TEMPLATE.xlsx"
    tagx_sign: str = "New Tag X Name Sign 2025.docx"
    stomp_sign: str = "Stompers_Template_2PP.docx"


class PartyDocsConfig(BaseModel):
    """Complete configuration for party document generation."""

    model_config = ConfigDict(extra="forbid")

    columns: Dict[str, List[str]] = Field(default_factory=_default_columns)
    sheet: SheetLayout = Field(default_factory=SheetLayout)
    signs: SignLayout = Field(default_factory=SignLayout)
    templates: TemplateNames = Field(default_factory=TemplateNames)
    bundle_name: str = "TagX_Output.zip"

    def synonyms(self, field: str) -> List[str]:
        """Return accepted column names for a logical field (may be empty)."""

        return list(self.columns.get(field, []))


def default_templates_dir() -> Path:
    """Templates directory from ``PARTYFLOW_TEMPLATES_DIR`` or ``./templates``."""

    env = os.getenv("PARTYFLOW_TEMPLATES_DIR")
    if env:
        return Path(env)
    return Path.cwd() / "templates"


def load_party_docs_config(path: str | Path | None = None) -> PartyDocsConfig:
    """Load and validate the party documents configuration.

    Without ``path`` the packaged ``party_docs.yaml`` is used. Sections left
    out of the YAML keep their built-in defaults; column synonym lists given
    in the YAML replace the defaults for that field only.
    """

    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    raw = _load_yaml(config_path)
    columns = _default_columns()
    overrides = raw.pop("columns", None) or {}
    if not isinstance(overrides, dict):
        raise ConfigError("columns must be a mapping of field -> column names")
    for field, names in overrides.items():
        if isinstance(names, str):
            names = [names]
        if not isinstance(names, list) or not names:
            raise ConfigError(f"columns.{field} must list at least one column name")
        columns[str(field)] = [str(name) for name in names]
    try:
        return PartyDocsConfig.model_validate({**raw, "columns": columns})
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {config_path}: {exc}") from exc


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Configuration file is not valid YAML: {path}") from exc
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")
    return data


__all__ = [
    "PartyDocsConfig",
    "SheetColumns",
    "SheetLayout",
    "SignLayout",
    "TemplateNames",
    "default_templates_dir",
    "load_party_docs_config",
]
