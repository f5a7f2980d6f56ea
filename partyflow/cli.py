"""Typer based command line entry points for PartyFlow."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer

from partyflow.config import PartyDocsConfig, default_templates_dir, load_party_docs_config
from partyflow.core.errors import ConfigError, InputError, TemplateLoadError
from partyflow.core.logger import get_logger, set_level
from partyflow.services.party_docs import DirectoryTemplateSource, generate_documents
from partyflow.services.party_docs.fields import BookingRow
from partyflow.services.party_docs.report import write_report
from partyflow_io import read_bookings, write_bundle, write_documents

app = typer.Typer(help="Generate party sheets and name signs from a booking table.")


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        help="Set global logging level (e.g. DEBUG/INFO/WARNING).",
    ),
) -> None:
    """Configure global CLI behaviour before executing commands."""

    level_value = getattr(logging, log_level.upper(), None)
    if not isinstance(level_value, int):
        raise typer.BadParameter(f"Unknown log level: {log_level}")

    get_logger()
    set_level(level_value)


def _read_rows(path: Path) -> List[BookingRow]:
    try:
        return read_bookings(path)
    except (ValueError, OSError) as exc:
        raise InputError(f"Cannot read bookings from {path.name}: {exc}") from exc


def _load_config(path: Optional[Path]) -> PartyDocsConfig:
    try:
        return load_party_docs_config(path)
    except ConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command("generate")
def cli_generate(
    input_file: Path = typer.Option(
        ...,
        "--input",
        "-i",
        help="Booking workbook (.xlsx) with headers in row 1",
        exists=True,
        readable=True,
        resolve_path=True,
        file_okay=True,
        dir_okay=False,
    ),
    output: Path = typer.Option(..., "--output", "-o", help="Directory for generated files", resolve_path=True),
    templates: Optional[Path] = typer.Option(
        None,
        "--templates",
        help="Templates directory (defaults to PARTYFLOW_TEMPLATES_DIR or ./templates)",
        file_okay=False,
        resolve_path=True,
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", help="Party documents YAML configuration", exists=True, readable=True, resolve_path=True
    ),
    zip_output: bool = typer.Option(True, "--zip/--no-zip", help="Bundle documents into a single ZIP"),
    report: bool = typer.Option(True, "--report/--no-report", help="Write a Markdown report of skipped bookings"),
) -> None:
    """Generate party sheets (per date) and TagX/Stomp name signs."""

    logger = get_logger()
    config = _load_config(config_path)
    templates_dir = templates or default_templates_dir()
    source = DirectoryTemplateSource(root=templates_dir, names=config.templates)

    try:
        rows = _read_rows(input_file)
        result = generate_documents(rows, source, config)
    except (InputError, TemplateLoadError) as exc:
        logger.error("Generation failed: %s", exc)
        typer.secho(f"Generation failed: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1) from exc

    documents = result.documents()
    if zip_output:
        bundle_path = write_bundle(documents, output / config.bundle_name)
        typer.echo(f"Bundle: {bundle_path}")
    else:
        write_documents(documents, output)
        typer.echo(f"Documents written to: {output}")

    typer.echo(f"Party sheets: {len(result.party_sheets)}")
    typer.echo(f"TagX sign pages: {len(result.signs.tagx)}")
    typer.echo(f"Stomp sign pages: {len(result.signs.stomp)}")
    typer.echo(f"Skipped bookings: {len(result.skipped)}")
    if report:
        report_path = write_report(result, output)
        typer.echo(f"Report: {report_path}")
    logger.info("CLI generation completed: output=%s", output)


if __name__ == "__main__":
    app()
