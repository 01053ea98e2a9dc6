"""Locate ``bookctl.toml`` for a book project.

The file marks the project root, the way ``.git`` marks a repository:
the nearest one at or above the starting directory wins. ``BOOKCTL_CONFIG``
names a file directly and turns the search off.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "bookctl.toml"
CONFIG_ENV_VAR = "BOOKCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file governing *start* (default: cwd), or None."""
    pinned = os.environ.get(CONFIG_ENV_VAR)
    if pinned:
        path = Path(pinned)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
