"""Pure text transforms applied to a whole document, one after another.

Each step takes the full text and returns the full rewritten text.
Later steps see (and may rewrite) whatever earlier steps inserted.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping

TextTransform = Callable[[str], str]

INCLUDE_FILE_RE = re.compile(r"INCLUDE_SOURCE_FILE\{([^}]+)\}")
INCLUDE_SECTION_RE = re.compile(r"INCLUDE_SOURCE_FILE_SECTION\{([^}]+),([^}]+)\}")

GRAPHICS_OUTPUT_DIR = "GRAPHICS_OUTPUT_DIR"
TEX_PREPROCESS_DIR = "TEX_PREPROCESS_DIR"
IMAGES_DIR = "IMAGES_DIR"

VIM_FOLD_RE = re.compile(r"//[{}]\d")
VIM_MODELINE_RE = re.compile(r"//[ \t]+vim:[^\n]*\n?")
FILE_SECTION_RE = re.compile(r" *(?://|#)[ \t]*FILE_SECTION_(?:BEGIN|END)\{[^}]*\}[^\n]*\n?")


def include_files(extract: Callable[[str], list[str]]) -> TextTransform:
    """Replace every ``INCLUDE_SOURCE_FILE{location}`` with extracted lines.

    *extract* is called once per occurrence; nothing is cached.
    """

    def step(text: str) -> str:
        return INCLUDE_FILE_RE.sub(lambda m: "\n".join(extract(m.group(1).strip())), text)

    return step


def include_sections(extract: Callable[[str, str], list[str]]) -> TextTransform:
    """Replace every ``INCLUDE_SOURCE_FILE_SECTION{location,section}``."""

    def step(text: str) -> str:
        return INCLUDE_SECTION_RE.sub(
            lambda m: "\n".join(extract(m.group(1).strip(), m.group(2).strip())),
            text,
        )

    return step


def replace_literals(replacements: Mapping[str, str]) -> TextTransform:
    """Apply literal ``old -> new`` replacements in mapping order."""
    pairs = list(replacements.items())

    def step(text: str) -> str:
        for old, new in pairs:
            if old:
                text = text.replace(old, new)
        return text

    return step


def strip_pattern(pattern: re.Pattern[str]) -> TextTransform:
    """Delete every match of *pattern*."""

    def step(text: str) -> str:
        return pattern.sub("", text)

    return step


def apply_pipeline(text: str, steps: Iterable[TextTransform]) -> str:
    """Run *text* through *steps* in order."""
    for step in steps:
        text = step(text)
    return text
