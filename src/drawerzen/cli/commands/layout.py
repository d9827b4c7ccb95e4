"""Layout commands: auto-sort, gap fill and display."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .common import (
    OutputFormat,
    emit_output,
    load_layout_or_exit,
    write_layout_or_exit,
)

__all__ = ["fill_command", "show_command", "sort_command"]


def sort_command(
    layout_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON layout file"),
    ],
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the sorted layout to this file"),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format: text or json"),
    ] = OutputFormat.TEXT,
) -> None:
    """Repack placed bins to minimize wasted space.

    Bins that no longer fit are moved back to the catalog.
    """
    loaded = load_layout_or_exit(layout_file)
    output = loaded.command.sort(loaded.drawer, loaded.bins, loaded.catalog)

    if output_file is not None:
        write_layout_or_exit(loaded, output, output_file)
    emit_output(output, output_format, diagram=True)


def fill_command(
    layout_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON layout file"),
    ],
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the filled layout to this file"),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format: text or json"),
    ] = OutputFormat.TEXT,
) -> None:
    """Fill free space with standard-size bins.

    Exits with code 2 without changing anything when the placed bins
    already break a layout invariant.
    """
    loaded = load_layout_or_exit(layout_file)
    output = loaded.command.fill(loaded.drawer, loaded.bins, loaded.catalog)

    if not output.is_valid:
        emit_output(output, output_format)
        if output_format == OutputFormat.TEXT:
            typer.echo("Fix the layout issues before filling.", err=True)
        raise typer.Exit(code=2)

    if output_file is not None:
        write_layout_or_exit(loaded, output, output_file)
    emit_output(output, output_format, diagram=True)


def show_command(
    layout_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON layout file"),
    ],
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format: text or json"),
    ] = OutputFormat.TEXT,
) -> None:
    """Show an ASCII diagram of a layout."""
    loaded = load_layout_or_exit(layout_file)
    output = loaded.command.validate(loaded.drawer, loaded.bins, loaded.catalog)
    emit_output(output, output_format, diagram=True)
