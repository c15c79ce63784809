"""Absolute Unix path helpers for in-image destinations.

Destinations inside the container are always POSIX, independent of the
host OS, so these helpers work on :class:`~pathlib.PurePosixPath` only.
"""

from __future__ import annotations

from pathlib import PurePosixPath


def absolute_unix_path(value: str) -> str:
    """Validate and normalize an absolute Unix path.

    Redundant separators and ``.`` segments are collapsed; a trailing
    slash is dropped. Raises ``ValueError`` for relative paths.
    """
    if not value.startswith("/"):
        msg = f"Path must be absolute: {value!r}"
        raise ValueError(msg)
    return str(PurePosixPath(value))


def resolve_unix_path(root: str, relative: str) -> str:
    """Append *relative* to the absolute *root*."""
    if relative.startswith("/"):
        msg = f"Cannot resolve absolute path {relative!r} against {root!r}"
        raise ValueError(msg)
    return str(PurePosixPath(absolute_unix_path(root)) / relative)
