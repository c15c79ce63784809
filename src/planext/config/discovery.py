"""Locate ``planext.toml``.

The file is searched for in the start directory and each of its parents,
the way git finds ``.git/``. ``PLANEXT_CONFIG`` pins an explicit file and
disables the search.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "planext.toml"
CONFIG_ENV_VAR = "PLANEXT_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest planext.toml at or above *start* (default: cwd).

    When ``PLANEXT_CONFIG`` is set, returns that path if it is a file and
    None otherwise.
    """
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
