"""Subcommand modules for bookctl.

Provides register_commands(), importing command modules lazily so
``bookctl --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register every standalone command on the root CLI group."""
    from bookctl.commands.build import build
    from bookctl.commands.diagrams import diagrams
    from bookctl.commands.preprocess import preprocess
    from bookctl.commands.snippet import snippet

    cli.add_command(build)
    cli.add_command(diagrams)
    cli.add_command(preprocess)
    cli.add_command(snippet)
