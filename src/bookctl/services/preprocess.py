"""Text preprocessing — expand inclusion directives and path tokens.

The pipeline, in order:

1. ``INCLUDE_SOURCE_FILE{branch:path}``
2. ``INCLUDE_SOURCE_FILE_SECTION{branch:path,section}``
3. ``GRAPHICS_OUTPUT_DIR`` / ``TEX_PREPROCESS_DIR`` / ``IMAGES_DIR``
4. vim fold markers
5. vim modelines
6. ``FILE_SECTION_BEGIN``/``FILE_SECTION_END`` annotation lines
7. user substitutions from ``[build.substitutes]``
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import structlog

from bookctl.domain.transforms import (
    FILE_SECTION_RE,
    GRAPHICS_OUTPUT_DIR,
    IMAGES_DIR,
    TEX_PREPROCESS_DIR,
    VIM_FOLD_RE,
    VIM_MODELINE_RE,
    TextTransform,
    apply_pipeline,
    include_files,
    include_sections,
    replace_literals,
    strip_pattern,
)
from bookctl.infrastructure.filesystem import is_artifact_stale, write_text
from bookctl.services.snippets import SnippetExtractor

logger = structlog.get_logger(__name__)


class TextPreprocessor:
    """Rewrite LaTeX sources into the target directory."""

    def __init__(
        self,
        extractor: SnippetExtractor,
        *,
        target_dir: Path,
        images_dir: Path,
        substitutes: Mapping[str, str] | None = None,
    ) -> None:
        self._extractor = extractor
        self._target_dir = target_dir
        self._images_dir = images_dir
        self._substitutes = dict(substitutes or {})

    @property
    def target_dir(self) -> Path:
        return self._target_dir

    def steps(self) -> list[TextTransform]:
        target = str(self._target_dir)
        return [
            include_files(self._extractor.extract),
            include_sections(self._extractor.extract_section),
            replace_literals(
                {
                    GRAPHICS_OUTPUT_DIR: target,
                    TEX_PREPROCESS_DIR: target,
                    IMAGES_DIR: str(self._images_dir),
                }
            ),
            strip_pattern(VIM_FOLD_RE),
            strip_pattern(VIM_MODELINE_RE),
            strip_pattern(FILE_SECTION_RE),
            replace_literals(self._substitutes),
        ]

    def render_text(self, text: str) -> str:
        return apply_pipeline(text, self.steps())

    def preprocess(self, source: Path, out_name: str) -> Path:
        """Preprocess *source* into ``target_dir / out_name`` and return that path."""
        rendered = self.render_text(source.read_text(encoding="utf-8", errors="replace"))
        out = write_text(self._target_dir / out_name, rendered)
        logger.debug("preprocess.write", source=str(source), output=str(out))
        return out

    def fragment_target(self, fragment: Path) -> Path:
        """Where *fragment* is written: its own name in the target directory."""
        return self._target_dir / fragment.name

    def process_fragment(self, fragment: Path) -> bool:
        """Re-emit a ``.tex`` fragment under its own name if it is stale.

        Returns True when the fragment was rewritten.
        """
        target = self.fragment_target(fragment)
        if not is_artifact_stale(fragment, target):
            logger.debug("fragment.current", source=str(fragment))
            return False
        logger.info("fragment.preprocess", source=str(fragment), target=str(target))
        self.preprocess(fragment, fragment.name)
        return True
