"""Source discovery, staleness checks, and artifact writes.

INVARIANT: Timestamps are the only build state. An artifact is stale iff it
does not exist or is strictly older than the source it derives from.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, Field

# Diagram extensions double as the name of the renderer binary.
DIAGRAM_EXTENSIONS: tuple[str, ...] = ("dot", "neato")
FRAGMENT_SUFFIX = ".tex"
DOCUMENT_SUFFIX = ".latex"


class SourceKind(StrEnum):
    """Role of a discovered source file in the build."""

    DIAGRAM = "diagram"
    FRAGMENT = "fragment"
    DOCUMENT = "document"


class SourceItem(BaseModel):
    """A source file and its role."""

    model_config = {"frozen": True}

    path: Path
    kind: SourceKind


class BookSources(BaseModel):
    """Everything one build run operates on, in processing order."""

    model_config = {"frozen": True}

    diagrams: list[SourceItem] = Field(default_factory=list)
    fragments: list[SourceItem] = Field(default_factory=list)
    documents: list[SourceItem] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Staleness
# ---------------------------------------------------------------------------


def modified_time(path: Path) -> float:
    """Return the modification time of *path* in seconds."""
    return path.stat().st_mtime


def is_stale(source_time: float, artifact: Path) -> bool:
    """True if *artifact* is missing or older than *source_time*."""
    if not artifact.exists():
        return True
    return modified_time(artifact) < source_time


def is_artifact_stale(source: Path, artifact: Path) -> bool:
    """Staleness of *artifact* relative to the file it is built from."""
    return is_stale(modified_time(source), artifact)


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def write_text(path: Path, text: str) -> Path:
    """Write UTF-8 *text* to *path*, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def find_sources(directory: Path, suffix: str, kind: SourceKind) -> list[SourceItem]:
    """List files directly inside *directory* ending in *suffix*, sorted."""
    if not directory.is_dir():
        return []
    return [
        SourceItem(path=path, kind=kind)
        for path in sorted(directory.glob(f"*{suffix}"))
        if path.is_file()
    ]


def discover_sources(latex_dir: Path, graphviz_dir: Path) -> BookSources:
    """Collect diagrams (dot before neato), fragments, and documents."""
    diagrams: list[SourceItem] = []
    for ext in DIAGRAM_EXTENSIONS:
        diagrams.extend(find_sources(graphviz_dir, f".{ext}", SourceKind.DIAGRAM))
    return BookSources(
        diagrams=diagrams,
        fragments=find_sources(latex_dir, FRAGMENT_SUFFIX, SourceKind.FRAGMENT),
        documents=find_sources(latex_dir, DOCUMENT_SUFFIX, SourceKind.DOCUMENT),
    )
