"""Helpers shared by the layout CLI commands."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import typer

from drawerzen.application import LayoutCommand, LayoutOutput
from drawerzen.application.config import (
    ConfigError,
    LayoutConfiguration,
    config_to_domain,
    layout_to_config,
    load_config,
    save_config,
)
from drawerzen.domain import Bin, CatalogEntry, Drawer
from drawerzen.infrastructure import (
    GridDiagramFormatter,
    JsonExporter,
    LayoutSummaryFormatter,
)


class OutputFormat(str, Enum):
    """How command results are printed."""

    TEXT = "text"
    JSON = "json"


@dataclass
class LoadedLayout:
    """A layout file converted to domain objects."""

    path: Path
    config: LayoutConfiguration
    drawer: Drawer
    bins: list[Bin]
    catalog: list[CatalogEntry]
    command: LayoutCommand


def load_layout_or_exit(path: Path) -> LoadedLayout:
    """Load a layout file, printing the error and exiting 1 on failure."""
    try:
        config = load_config(path)
        drawer, layout_config, bins, catalog = config_to_domain(config)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    return LoadedLayout(
        path=path,
        config=config,
        drawer=drawer,
        bins=bins,
        catalog=catalog,
        command=LayoutCommand(layout_config),
    )


def display_load_error(error: ConfigError) -> None:
    """Display a layout loading error."""
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            line = detail.get("line", "?")
            column = detail.get("column", "?")
            message = detail.get("message", "Unknown error")
            typer.echo(f"    Line {line}, Column {column}: {message}", err=True)
    elif error.error_type == "validation":
        for detail in error.details:
            path = detail.get("path", "unknown")
            message = detail.get("message", "Unknown error")
            value = detail.get("value")
            typer.echo(f"  {path}: {message}", err=True)
            if value is not None and not isinstance(value, (dict, list)):
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)


def emit_output(
    output: LayoutOutput,
    output_format: OutputFormat,
    diagram: bool = False,
) -> None:
    """Print a layout result in the requested format."""
    if output_format == OutputFormat.JSON:
        typer.echo(JsonExporter().export(output))
        return
    if diagram:
        typer.echo(GridDiagramFormatter().format(output))
        typer.echo()
    typer.echo(LayoutSummaryFormatter().format(output))


def write_layout_or_exit(loaded: LoadedLayout, output: LayoutOutput, path: Path) -> None:
    """Save a processed layout, printing the error and exiting 1 on failure."""
    try:
        save_config(layout_to_config(loaded.config, output), path)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)
    typer.echo(f"Layout written to {path}", err=True)
