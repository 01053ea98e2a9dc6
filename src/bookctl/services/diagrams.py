"""Diagram rendering with graphviz.

The source extension is the command: ``flow.dot`` is rendered by ``dot``,
``ring.neato`` by ``neato``. Output is ``<stem>.pdf`` in the target directory.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from bookctl.domain.errors import ToolInvocationError
from bookctl.infrastructure.filesystem import is_artifact_stale
from bookctl.infrastructure.runner import CommandRunner

logger = structlog.get_logger(__name__)


class DiagramRenderer:
    def __init__(self, runner: CommandRunner, target_dir: Path) -> None:
        self._runner = runner
        self._target_dir = target_dir

    def target_for(self, source: Path) -> Path:
        return self._target_dir / f"{source.stem}.pdf"

    def render(self, source: Path) -> bool:
        """Render *source* if its PDF is stale. Returns True if it ran."""
        source = source.absolute()
        target = self.target_for(source)
        if not is_artifact_stale(source, target):
            logger.debug("diagram.current", source=str(source))
            return False

        command = source.suffix.lstrip(".")
        args = [command, "-Tpdf", "-o", str(target), str(source)]
        logger.info("diagram.render", source=str(source), target=str(target))
        result = self._runner.run(args)
        if not result.ok:
            logger.info("diagram.failed", source=str(source), returncode=result.returncode)
            raise ToolInvocationError(
                f"Error building graph file {source}",
                source=str(source),
                command=result.args,
                returncode=result.returncode,
                output=result.tail(),
            )
        return True
