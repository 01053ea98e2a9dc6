"""Command: run the text pipeline over a single file."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from bookctl.commands._base import BookCommand

if TYPE_CHECKING:
    from bookctl.commands._context import AppContext


@click.command(
    cls=BookCommand,
    examples="""\
  bookctl preprocess src/book/latex/actors.tex
  bookctl preprocess src/book/latex/book.latex --output book.tmp.latex""",
)
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output",
    "output_name",
    default=None,
    help="File name inside the target directory (default: same as SOURCE).",
)
@click.pass_obj
def preprocess(app: AppContext, source: Path, output_name: str | None) -> None:
    """Expand inclusion directives in SOURCE into the target directory."""
    app.emit(app.service.preprocess_file(source, output_name))
