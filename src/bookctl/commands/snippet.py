"""Command: print a snippet as the book would include it."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from bookctl.commands._base import BookCommand

if TYPE_CHECKING:
    from bookctl.commands._context import AppContext


@click.command(
    cls=BookCommand,
    examples="""\
  bookctl snippet main:core/Actor.scala
  bookctl snippet chapter-3:core/Actor.scala --section receive""",
)
@click.argument("location")
@click.option("--section", default=None, help="Only the named FILE_SECTION.")
@click.pass_obj
def snippet(app: AppContext, location: str, section: str | None) -> None:
    """Resolve LOCATION (branch:path) against the source repository."""
    app.emit(app.service.extract_snippet(location, section))
