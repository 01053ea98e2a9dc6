"""Versioned source locations (``branch:path``)."""

from __future__ import annotations

import re

from pydantic import BaseModel

from bookctl.domain.errors import InvalidLocationError

# Branch is everything up to the first colon; the path keeps any later ones.
_LOCATION_RE = re.compile(r"^([^:]+):(.*)$")


class Location(BaseModel):
    """A file inside the source repository, pinned to a branch."""

    model_config = {"frozen": True}

    branch: str
    path: str

    def __str__(self) -> str:
        return f"{self.branch}:{self.path}"


def parse_location(payload: str) -> Location:
    """Parse a directive payload such as ``main:core/Actor.scala``.

    Surrounding whitespace is ignored. Raises :class:`InvalidLocationError`
    when the payload has no branch part.
    """
    match = _LOCATION_RE.match(payload.strip())
    if match is None:
        raise InvalidLocationError(payload)
    return Location(branch=match.group(1), path=match.group(2))
