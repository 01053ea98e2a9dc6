"""Typesetting of top-level ``.latex`` documents."""

from __future__ import annotations

from pathlib import Path

import structlog

from bookctl.domain.errors import ToolInvocationError
from bookctl.infrastructure.filesystem import is_artifact_stale
from bookctl.infrastructure.runner import CommandRunner
from bookctl.services.preprocess import TextPreprocessor

logger = structlog.get_logger(__name__)

TEMP_SUFFIX = ".tmp.latex"


class DocumentCompiler:
    """Preprocess a document and, when needed, run the LaTeX engine on it.

    Preprocessing always runs so the temporary file reflects the current
    state of every included snippet. The engine runs only when the build
    verdict demands it or the document's own PDF is stale.
    """

    def __init__(
        self,
        preprocessor: TextPreprocessor,
        runner: CommandRunner,
        *,
        builder: str = "pdflatex",
    ) -> None:
        self._preprocessor = preprocessor
        self._runner = runner
        self._builder = builder

    @property
    def target_dir(self) -> Path:
        return self._preprocessor.target_dir

    def target_for(self, document: Path) -> Path:
        return self.target_dir / f"{document.stem}.pdf"

    def command_for(self, job_name: str, temp_file: Path) -> list[str]:
        return [
            self._builder,
            f"-output-directory={self.target_dir}",
            f"-jobname={job_name}",
            "-halt-on-error",
            str(temp_file),
        ]

    def compile(self, document: Path, *, needs_rebuild: bool) -> bool:
        """Build ``<stem>.pdf`` for *document*. Returns True if the engine ran."""
        job_name = document.stem
        temp_file = self._preprocessor.preprocess(document, f"{job_name}{TEMP_SUFFIX}")
        target = self.target_for(document)
        if not needs_rebuild and not is_artifact_stale(document, target):
            logger.debug("document.current", source=str(document))
            return False

        logger.info("document.compile", source=str(document), target=str(target))
        result = self._runner.run(self.command_for(job_name, temp_file))
        if not result.ok:
            logger.info("document.failed", source=str(document), returncode=result.returncode)
            raise ToolInvocationError(
                f"Error building PDF file {document}",
                source=str(document),
                command=result.args,
                returncode=result.returncode,
                output=result.tail(),
            )
        return True
