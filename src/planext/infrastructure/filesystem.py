"""Filesystem operations for build plans and build artifacts.

Pure value objects live in :mod:`planext.domain.buildplan` (correct
dependency direction: infrastructure -> domain). This module handles the
actual file I/O.
"""

from __future__ import annotations

from pathlib import Path

from planext.domain.buildplan import BuildPlan


def is_regular_file(path: Path) -> bool:
    """True if *path* exists and is a regular file (symlinks followed)."""
    return path.is_file()


def read_build_plan(path: Path) -> BuildPlan:
    """Read and validate a JSON build plan.

    Raises ``OSError`` if the file cannot be read, ``UnicodeDecodeError``
    if it is not UTF-8, and ``pydantic.ValidationError`` if the content is
    not a valid plan.
    """
    raw = path.read_text(encoding="utf-8")
    return BuildPlan.model_validate_json(raw)


def write_build_plan(path: Path, plan: BuildPlan) -> None:
    """Write *plan* as indented JSON.

    Creates parent directories if they don't exist.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(plan.model_dump_json(indent=2) + "\n", encoding="utf-8")
