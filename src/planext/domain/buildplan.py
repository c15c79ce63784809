"""Container build-plan value objects.

A :class:`BuildPlan` is the declarative description of an image handed to
extensions by the upstream image builder: ordered filesystem layers, the
entrypoint, and image metadata.

INVARIANT: All models are frozen. Extensions never mutate their input;
they build a new plan with :meth:`BuildPlan.model_copy`.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_serializer, model_validator

from planext.domain.paths import absolute_unix_path

_MAX_MODE = 0o777


class FilePermissions(BaseModel):
    """POSIX permission bits for a file in the image.

    Accepts an octal string (``"755"``), an int (``0o755``) or a mapping
    with a ``mode`` key. Serializes back to the three-digit octal string.
    """

    model_config = {"frozen": True}

    mode: int

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"mode": _parse_octal(value)}
        if isinstance(value, int) and not isinstance(value, bool):
            return {"mode": value}
        return value

    @field_validator("mode")
    @classmethod
    def _check_range(cls, value: int) -> int:
        if not 0 <= value <= _MAX_MODE:
            msg = f"Permission bits out of range: {oct(value)}"
            raise ValueError(msg)
        return value

    @model_serializer
    def _serialize(self) -> str:
        return self.octal_string

    @classmethod
    def from_octal_string(cls, octal: str) -> FilePermissions:
        """Build permissions from a string such as ``"644"``."""
        return cls(mode=_parse_octal(octal))

    @property
    def octal_string(self) -> str:
        return format(self.mode, "03o")

    def __str__(self) -> str:
        return self.octal_string


def _parse_octal(octal: str) -> int:
    if len(octal) != 3 or any(ch not in "01234567" for ch in octal):
        msg = f"Permissions must be a 3-digit octal string: {octal!r}"
        raise ValueError(msg)
    return int(octal, 8)


EXECUTABLE_PERMISSIONS = FilePermissions.from_octal_string("755")


class FileEntry(BaseModel):
    """One file copy instruction: local source to absolute in-image destination."""

    model_config = {"frozen": True}

    source: Path
    destination: str
    permissions: FilePermissions | None = None
    modification_time: datetime | None = None
    ownership: str | None = None

    @field_validator("destination")
    @classmethod
    def _absolute_destination(cls, value: str) -> str:
        return absolute_unix_path(value)


class Layer(BaseModel):
    """A named, ordered set of file entries forming one filesystem delta."""

    model_config = {"frozen": True}

    name: str
    entries: tuple[FileEntry, ...] = ()


class BuildPlan(BaseModel):
    """Declarative container image description.

    Attributes:
        base_image: Image reference the layers are stacked on.
        entrypoint: Container start command; ``None`` when inherited.
        cmd: Default arguments passed to the entrypoint.
        layers: Ordered layers; order is preserved unless an extension
            deliberately rewrites it.
        metadata: Free-form builder metadata carried through untouched.
    """

    model_config = {"frozen": True}

    base_image: str = "scratch"
    entrypoint: list[str] | None = None
    cmd: list[str] | None = None
    environment: dict[str, str] = Field(default_factory=dict)
    labels: dict[str, str] = Field(default_factory=dict)
    user: str | None = None
    working_directory: str | None = None
    exposed_ports: tuple[str, ...] = ()
    metadata: dict[str, Any] = Field(default_factory=dict)
    layers: tuple[Layer, ...] = ()

    def layer_names(self) -> list[str]:
        """Return layer names in plan order."""
        return [layer.name for layer in self.layers]
