"""Command: render graphviz diagrams only."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from bookctl.commands._base import BookCommand

if TYPE_CHECKING:
    from bookctl.commands._context import AppContext


@click.command(
    cls=BookCommand,
    examples="""\
  bookctl diagrams
  bookctl -q diagrams""",
)
@click.pass_obj
def diagrams(app: AppContext) -> None:
    """Render stale .dot and .neato diagrams to PDF."""
    app.emit(app.service.render_diagrams())
