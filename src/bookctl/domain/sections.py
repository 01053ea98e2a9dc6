"""Named line ranges delimited by ``FILE_SECTION_BEGIN``/``FILE_SECTION_END``.

Markers live in ``//`` or ``#`` comments of the excerpted source::

    // FILE_SECTION_BEGIN{imports}
    import akka.actor._
    // FILE_SECTION_END{imports}

The marker lines themselves are never part of a section.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from bookctl.domain.errors import SectionNotFoundError


def section_marker(kind: str, section: str) -> re.Pattern[str]:
    """Compile the begin or end marker pattern for *section*.

    The section name is matched literally, never as a regex fragment.
    """
    return re.compile(rf"^\s*(?://|#)\s*FILE_SECTION_{kind}\{{{re.escape(section)}\}}")


def pull_section(file_id: str, lines: Iterable[str], section: str) -> list[str]:
    """Return the lines strictly between each begin/end pair named *section*.

    Disjoint pairs sharing a name accumulate into one result. Raises
    :class:`SectionNotFoundError` if nothing was collected.
    """
    begin = section_marker("BEGIN", section)
    end = section_marker("END", section)
    pulled: list[str] = []
    inside = False
    for line in lines:
        if begin.search(line):
            inside = True
        elif end.search(line):
            inside = False
        elif inside:
            pulled.append(line)
    if not pulled:
        raise SectionNotFoundError(file_id, section)
    return pulled
