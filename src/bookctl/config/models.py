"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, bookctl.toml only contains
overrides. The defaults reproduce the conventional book layout::

    src/book/latex/      *.latex documents and *.tex fragments
    src/book/graphviz/   *.dot and *.neato diagrams
    src/book/images/     static images
    src/                 repository the excerpts are pulled from
    target/book/         everything the build writes
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class LatexConfig(BaseModel):
    """[latex] section."""

    model_config = {"frozen": True}

    builder: str = "pdflatex"
    directory: Path = Path("src/book/latex")


class GraphvizConfig(BaseModel):
    """[graphviz] section."""

    model_config = {"frozen": True}

    directory: Path = Path("src/book/graphviz")


class BuildConfig(BaseModel):
    """[build] section.

    ``substitutes`` is applied last, in table order, as plain string
    replacement over every preprocessed file.
    """

    model_config = {"frozen": True}

    target_directory: Path = Path("target/book")
    images_directory: Path = Path("src/book/images")
    source_root: Path = Path("src")
    substitutes: dict[str, str] = Field(default_factory=dict)
