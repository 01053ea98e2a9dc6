"""BuildService — orchestrates one book build.

Pipeline: DIAGRAMS → FRAGMENTS → VERDICT → DOCUMENTS

Any rebuilt diagram or fragment sets the verdict, and the verdict forces every
document to be typeset again. There is no finer dependency tracking: a
document cannot say which diagrams or fragments it uses.

INVARIANT: The first fatal error stops the run. Nothing after it executes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog

from bookctl.config.settings import BookSettings
from bookctl.domain.errors import BookBuildError
from bookctl.infrastructure.filesystem import BookSources, discover_sources
from bookctl.infrastructure.runner import CommandRunner, SubprocessRunner
from bookctl.infrastructure.vcs import GitRepository, VersionControl
from bookctl.services.compiler import DocumentCompiler
from bookctl.services.diagrams import DiagramRenderer
from bookctl.services.preprocess import TextPreprocessor
from bookctl.services.result import ServiceError, ServiceResult
from bookctl.services.snippets import SnippetExtractor
from bookctl.services.telemetry import trace_span, traced

logger = structlog.get_logger(__name__)


def _entry(source: Path, output: Path, rebuilt: bool) -> dict[str, Any]:
    return {"source": str(source), "output": str(output), "rebuilt": rebuilt}


def _failure(op: str, exc: BookBuildError) -> ServiceResult:
    return ServiceResult(ok=False, op=op, error=ServiceError.from_exception(exc))


def _io_failure(op: str, exc: OSError) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(
            code="IO_ERROR",
            message=str(exc),
            detail={"path": str(exc.filename) if exc.filename else None},
        ),
    )


class BuildService:
    """Wires settings, the command runner, and version control into the
    diagram renderer, preprocessor, and document compiler.

    *runner* and *vcs* default to real subprocesses and git in the
    configured source root; tests pass fakes.
    """

    def __init__(
        self,
        settings: BookSettings,
        *,
        runner: CommandRunner | None = None,
        vcs: VersionControl | None = None,
    ) -> None:
        self._settings = settings
        self._runner = runner or SubprocessRunner()
        self._vcs = vcs or GitRepository(settings.source_root, self._runner)
        self.extractor = SnippetExtractor(self._vcs)
        self.preprocessor = TextPreprocessor(
            self.extractor,
            target_dir=settings.target_dir,
            images_dir=settings.images_dir,
            substitutes=settings.build.substitutes,
        )
        self.renderer = DiagramRenderer(self._runner, settings.target_dir)
        self.compiler = DocumentCompiler(
            self.preprocessor,
            self._runner,
            builder=settings.latex.builder,
        )

    def discover(self) -> BookSources:
        return discover_sources(self._settings.latex_dir, self._settings.graphviz_dir)

    def _warnings(self) -> list[str]:
        return [f"Snippet not found: {loc}" for loc in self.extractor.missing]

    def _render_all(self, sources: BookSources) -> list[dict[str, Any]]:
        return [
            _entry(item.path, self.renderer.target_for(item.path), self.renderer.render(item.path))
            for item in sources.diagrams
        ]

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    @traced
    def build(self, sources: BookSources | None = None) -> ServiceResult:
        """Render diagrams, refresh fragments, then typeset every document."""
        op = "build"
        sources = sources if sources is not None else self.discover()
        target = self._settings.target_dir
        self.extractor.missing.clear()

        try:
            target.mkdir(parents=True, exist_ok=True)

            with trace_span("diagrams") as span:
                diagrams = self._render_all(sources)
                if span:
                    span.annotate("rebuilt", sum(d["rebuilt"] for d in diagrams))

            with trace_span("fragments") as span:
                fragments = [
                    _entry(
                        item.path,
                        self.preprocessor.fragment_target(item.path),
                        self.preprocessor.process_fragment(item.path),
                    )
                    for item in sources.fragments
                ]
                if span:
                    span.annotate("rebuilt", sum(f["rebuilt"] for f in fragments))

            needs_rebuild = any(entry["rebuilt"] for entry in (*diagrams, *fragments))
            logger.debug("build.verdict", needs_rebuild=needs_rebuild)

            with trace_span("documents") as span:
                documents = [
                    _entry(
                        item.path,
                        self.compiler.target_for(item.path),
                        self.compiler.compile(item.path, needs_rebuild=needs_rebuild),
                    )
                    for item in sources.documents
                ]
                if span:
                    span.annotate("rebuilt", sum(d["rebuilt"] for d in documents))
        except BookBuildError as exc:
            logger.info("build.failed", code=exc.code, message=exc.message)
            return _failure(op, exc)
        except OSError as exc:
            logger.info("build.failed", code="IO_ERROR", message=str(exc))
            return _io_failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "target": str(target),
                "needs_rebuild": needs_rebuild,
                "diagrams": diagrams,
                "fragments": fragments,
                "documents": documents,
            },
            warnings=self._warnings(),
        )

    @traced
    def render_diagrams(self, sources: BookSources | None = None) -> ServiceResult:
        """Render stale diagrams only."""
        op = "render_diagrams"
        sources = sources if sources is not None else self.discover()
        try:
            self._settings.target_dir.mkdir(parents=True, exist_ok=True)
            diagrams = self._render_all(sources)
        except BookBuildError as exc:
            return _failure(op, exc)
        except OSError as exc:
            return _io_failure(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={"target": str(self._settings.target_dir), "diagrams": diagrams},
        )

    @traced
    def preprocess_file(self, source: Path, output_name: str | None = None) -> ServiceResult:
        """Run the text pipeline over one file, ignoring staleness."""
        op = "preprocess"
        self.extractor.missing.clear()
        try:
            out = self.preprocessor.preprocess(source, output_name or source.name)
        except BookBuildError as exc:
            return _failure(op, exc)
        except OSError as exc:
            return _io_failure(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={"source": str(source), "path": str(out)},
            warnings=self._warnings(),
        )

    def extract_snippet(self, location: str, section: str | None = None) -> ServiceResult:
        """Resolve a ``branch:path`` location, optionally narrowed to a section."""
        op = "snippet"
        self.extractor.missing.clear()
        try:
            if section:
                lines = self.extractor.extract_section(location, section)
            else:
                lines = self.extractor.extract(location)
        except BookBuildError as exc:
            return _failure(op, exc)
        except OSError as exc:
            return _io_failure(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "location": location,
                "section": section,
                "line_count": len(lines),
                "content": "\n".join(lines),
            },
            warnings=self._warnings(),
        )
