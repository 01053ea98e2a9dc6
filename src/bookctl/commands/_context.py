"""AppContext — the object every subcommand receives via ``@click.pass_obj``.

It owns logging setup, the lazily built BuildService, and the rule for
where a ServiceResult goes: results to stdout, warnings and failures to
stderr, exit code 1 on failure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from bookctl.config.logging import configure_logging
from bookctl.output.formatters import OutputSettings, format_result
from bookctl.services.telemetry import enable_telemetry

if TYPE_CHECKING:
    from bookctl.config.settings import BookSettings
    from bookctl.services.build import BuildService
    from bookctl.services.result import ServiceResult


class AppContext:
    """Per-invocation state shared by all bookctl commands.

    The service is only built when a command asks for it, so ``--help``
    and ``--examples`` never touch the project directory.
    """

    def __init__(self, settings: BookSettings) -> None:
        self.settings = settings
        self._service: BuildService | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.verbose:
            enable_telemetry()

    @property
    def service(self) -> BuildService:
        if self._service is None:
            from bookctl.services.build import BuildService

            self._service = BuildService(self.settings)
        return self._service

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; raise SystemExit(1) if it failed.

        JSON output already carries the warnings, so they are only echoed
        separately for human and quiet modes.
        """
        output_settings = self.output_settings
        text = format_result(result, settings=output_settings)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)

        click.echo(text)
        if output_settings.json_output:
            return
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)
