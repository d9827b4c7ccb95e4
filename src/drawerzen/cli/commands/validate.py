"""Validate command for checking layout files.

This module provides the `validate` command that checks a JSON layout
file for syntax and schema errors and checks the placed bins against
the layout invariants (size, bounds, no overlap).
"""

from pathlib import Path
from typing import Annotated

import typer

from .common import OutputFormat, emit_output, load_layout_or_exit


def validate_command(
    layout_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON layout file to validate"),
    ],
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format: text or json"),
    ] = OutputFormat.TEXT,
) -> None:
    """Validate a drawer layout file.

    Exit codes:
        0 - Layout is valid
        1 - File has errors (cannot be used)
        2 - File is well formed but placed bins break layout invariants

    Example:
        drawerzen validate my-drawer.json
    """
    loaded = load_layout_or_exit(layout_file)
    output = loaded.command.validate(loaded.drawer, loaded.bins, loaded.catalog)

    emit_output(output, output_format)

    if not output.is_valid:
        if output_format == OutputFormat.TEXT:
            typer.echo(
                f"Validation failed: {len(output.issues)} layout issue(s)", err=True
            )
        raise typer.Exit(code=2)

    if output_format == OutputFormat.TEXT:
        typer.echo("Validation passed. Layout is valid.")
