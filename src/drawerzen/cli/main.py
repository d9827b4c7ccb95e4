"""Typer CLI for drawer layouts."""

import logging
from typing import Annotated

import typer

from drawerzen.cli.commands import (
    fill_command,
    show_command,
    sort_command,
    validate_command,
)

app = typer.Typer(
    name="drawerzen",
    help="Lay out gridded storage bins inside a drawer.",
)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug details to stderr"),
    ] = False,
) -> None:
    """Lay out gridded storage bins inside a drawer."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


app.command(name="validate")(validate_command)
app.command(name="sort")(sort_command)
app.command(name="fill")(fill_command)
app.command(name="show")(show_command)


if __name__ == "__main__":
    app()
