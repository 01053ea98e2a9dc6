"""Synchronous external command execution.

Every tool the build drives (git, dot/neato, the LaTeX engine) goes through a
:class:`CommandRunner`. A non-zero exit is reported in the returned
:class:`CommandResult`, never raised; the caller decides whether it is fatal.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel

logger = logging.getLogger(__name__)

# Shell convention for "command not found".
COMMAND_NOT_FOUND = 127


class CommandResult(BaseModel):
    """Outcome of one external command."""

    model_config = {"frozen": True}

    args: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def tail(self, lines: int = 20) -> str:
        """Last *lines* of combined output, for error reports.

        LaTeX engines print their errors on stdout, so both streams count.
        """
        combined = "\n".join(s for s in (self.stdout.strip(), self.stderr.strip()) if s)
        return "\n".join(combined.splitlines()[-lines:])


class CommandRunner(Protocol):
    """Anything that can run a command line and report its outcome."""

    def run(self, args: Sequence[str], *, cwd: Path | None = None) -> CommandResult: ...


class SubprocessRunner:
    """Run commands with :func:`subprocess.run`, capturing output as text.

    There is no timeout: a hung tool hangs the build.
    """

    def run(self, args: Sequence[str], *, cwd: Path | None = None) -> CommandResult:
        argv = [str(a) for a in args]
        logger.debug("Running %s (cwd=%s)", " ".join(argv), cwd)
        try:
            proc = subprocess.run(
                argv,
                cwd=cwd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as exc:
            # Missing binary or missing cwd surface as an ordinary failure.
            logger.debug("Could not start %s: %s", argv[0], exc)
            return CommandResult(args=argv, returncode=COMMAND_NOT_FOUND, stderr=str(exc))
        return CommandResult(
            args=argv,
            returncode=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )

