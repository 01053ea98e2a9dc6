"""Command: full book build."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from bookctl.commands._base import BookCommand

if TYPE_CHECKING:
    from bookctl.commands._context import AppContext


@click.command(
    cls=BookCommand,
    examples="""\
  bookctl build
  bookctl -v build
  bookctl --json build
  BOOKCTL_LATEX__BUILDER=xelatex bookctl build""",
)
@click.pass_obj
def build(app: AppContext) -> None:
    """Render diagrams, preprocess fragments, and typeset every document."""
    app.emit(app.service.build())
