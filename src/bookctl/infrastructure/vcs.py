"""Version-control access for snippet extraction.

The build only ever needs three things from the repository: which branch is
checked out, the working-tree copy of a file, and a file as committed on some
other branch. :class:`GitRepository` answers them by shelling out to ``git``
inside the source root.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from bookctl.infrastructure.runner import CommandResult, CommandRunner, SubprocessRunner

logger = logging.getLogger(__name__)


class VersionControl(Protocol):
    """Read-only view of the source repository."""

    def current_branch(self) -> str | None: ...

    def read_working_file(self, path: str) -> str: ...

    def show_historical(self, branch: str, path: str) -> str: ...


class GitRepository:
    """:class:`VersionControl` backed by the ``git`` CLI.

    Failures never raise: an unreadable branch list means "no current
    branch", and a failed ``git show`` means empty content.
    """

    def __init__(self, source_root: Path, runner: CommandRunner | None = None) -> None:
        self._source_root = source_root
        self._runner = runner or SubprocessRunner()

    @property
    def source_root(self) -> Path:
        return self._source_root

    def _run_git(self, *args: str) -> CommandResult:
        return self._runner.run(["git", *args], cwd=self._source_root)

    def current_branch(self) -> str | None:
        """Return the branch flagged ``*`` in ``git branch``, if any."""
        result = self._run_git("branch")
        if not result.ok:
            logger.debug("git branch failed: %s", result.stderr.strip())
            return None
        for line in result.stdout.splitlines():
            if line.startswith("*"):
                return line.removeprefix("*").strip()
        return None

    def read_working_file(self, path: str) -> str:
        """Read *path* relative to the source root; empty if absent.

        Undecodable bytes are replaced, as they are for ``git show`` output.
        """
        target = self._source_root / path
        if not target.is_file():
            return ""
        return target.read_text(encoding="utf-8", errors="replace")

    def show_historical(self, branch: str, path: str) -> str:
        """Return ``git show branch:path``; empty on any failure."""
        result = self._run_git("show", f"{branch}:{path}")
        if not result.ok:
            logger.debug("git show %s:%s failed: %s", branch, path, result.stderr.strip())
            return ""
        return result.stdout
