"""Root CLI group for bookctl with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from bookctl import __version__
from bookctl.commands import register_commands
from bookctl.commands._context import AppContext
from bookctl.config.settings import BookSettings

_DIRECTORY = click.Path(exists=True, file_okay=False, path_type=Path)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="bookctl")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="One status line per command.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and phase timings.")
@click.option("--log-json", is_flag=True, help="Emit log events as JSON lines on stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Use this bookctl.toml.")
@click.option(
    "-C",
    "--directory",
    "project_root",
    type=_DIRECTORY,
    default=None,
    help="Book project root (default: where bookctl.toml is found, else cwd).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: str | None,
    project_root: Path | None,
    **flags: bool,
) -> None:
    """bookctl — build a book from LaTeX, graphviz, and live code excerpts."""
    settings = BookSettings.from_cli(
        config_path=config_path,
        project_root=project_root.resolve() if project_root else None,
        **flags,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
