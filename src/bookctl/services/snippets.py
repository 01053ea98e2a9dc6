"""Snippet extraction from the source repository.

A location ``branch:path`` is read from the working tree when *branch* is
the one checked out, and from history (``git show``) otherwise. Content that
cannot be found anywhere becomes a single placeholder line so the book still
builds and the gap is visible in the PDF.
"""

from __future__ import annotations

import structlog

from bookctl.domain.location import Location, parse_location
from bookctl.domain.sections import pull_section
from bookctl.infrastructure.vcs import VersionControl

logger = structlog.get_logger(__name__)


def placeholder_line(path: str) -> str:
    """The single line that stands in for content that could not be found."""
    return f"{path} NOT FOUND"


def split_lines(text: str) -> list[str]:
    """Split on newlines, dropping trailing empty entries."""
    lines = text.split("\n")
    while lines and lines[-1] == "":
        lines.pop()
    return lines


class SnippetExtractor:
    """Resolve locations to lines via a :class:`VersionControl`.

    Every call goes back to the repository; results are not cached.
    Locations that resolved to nothing are remembered in :attr:`missing`.
    """

    def __init__(self, vcs: VersionControl) -> None:
        self._vcs = vcs
        self.missing: list[str] = []

    def extract(self, location: Location | str) -> list[str]:
        loc = parse_location(location) if isinstance(location, str) else location
        current = self._vcs.current_branch()
        if current is not None and current == loc.branch:
            data = self._vcs.read_working_file(loc.path)
            origin = "working_tree"
        else:
            data = self._vcs.show_historical(loc.branch, loc.path)
            origin = "history"

        if not data:
            logger.info("snippet.missing", location=str(loc), origin=origin)
            self.missing.append(str(loc))
            return [placeholder_line(loc.path)]

        logger.debug("snippet.extract", location=str(loc), origin=origin)
        return split_lines(data)

    def extract_section(self, location: Location | str, section: str) -> list[str]:
        """Extract *location* and keep only the lines of *section*."""
        loc = parse_location(location) if isinstance(location, str) else location
        return pull_section(str(loc), self.extract(loc), section)
