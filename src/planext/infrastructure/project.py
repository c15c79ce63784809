"""Host project model handed to every extension.

The host exposes its configuration as named *capabilities* rather than
letting extensions introspect its object graph. A capability that the
host does not provide looks up as ``None``; extensions decide whether
that is fatal.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

from planext.domain.types import LayoutKind

if TYPE_CHECKING:
    from planext.config.settings import PlanextSettings

CONTAINER_CAPABILITY = "container"
NATIVE_IMAGE_CAPABILITY = "native-image"

T = TypeVar("T")


@dataclass(frozen=True)
class ProjectLayout:
    """Where the host build tool writes its outputs."""

    build_dir: Path
    kind: LayoutKind = LayoutKind.GRADLE
    compile_stage: str = "nativeCompile"

    def native_executable(self, name: str) -> Path:
        """Expected location of the native executable called *name*.

        - Gradle: ``{build_dir}/native/{compile_stage}/{name}``
        - Maven: ``{build_dir}/{name}``
        """
        if self.kind is LayoutKind.MAVEN:
            return self.build_dir / name
        return self.build_dir / "native" / self.compile_stage / name

    @property
    def build_step(self) -> str:
        """The build step that produces the native executable."""
        if self.kind is LayoutKind.MAVEN:
            return "native:compile"
        return self.compile_stage


@dataclass(frozen=True)
class ContainerParameters:
    """Container settings configured in the host build."""

    app_root: str | None = None
    main_class: str | None = None
    entrypoint: tuple[str, ...] | None = None


@dataclass(frozen=True)
class NativeBinary:
    """One binary declared by the host's native-image build integration."""

    name: str
    main_class: str | None = None


@dataclass(frozen=True)
class NativeImageOptions:
    """Native-image build integration configuration."""

    binaries: tuple[NativeBinary, ...] = ()

    def binary(self, name: str) -> NativeBinary | None:
        """Return the first binary called *name*, if declared."""
        return next((b for b in self.binaries if b.name == name), None)


@dataclass(frozen=True)
class HostProject:
    """Read-only view of the host project.

    Attributes:
        layout: Build output layout.
        capabilities: Named configuration objects exposed to extensions.
    """

    layout: ProjectLayout
    capabilities: Mapping[str, Any] = field(default_factory=dict)

    def find_capability(self, name: str, kind: type[T]) -> T | None:
        """Look up capability *name*, returning None if absent or not a *kind*."""
        value = self.capabilities.get(name)
        if isinstance(value, kind):
            return value
        return None

    @classmethod
    def from_settings(cls, settings: PlanextSettings) -> HostProject:
        """Build the project model from unified settings."""
        layout = ProjectLayout(
            build_dir=settings.build_dir,
            kind=settings.build.kind,
            compile_stage=settings.build.compile_stage,
        )
        container = settings.container
        capabilities: dict[str, Any] = {
            CONTAINER_CAPABILITY: ContainerParameters(
                app_root=container.app_root or None,
                main_class=container.main_class or None,
                entrypoint=tuple(container.entrypoint) or None,
            ),
        }
        if settings.native_image.enabled:
            capabilities[NATIVE_IMAGE_CAPABILITY] = NativeImageOptions(
                binaries=tuple(
                    NativeBinary(
                        name=b.name,
                        main_class=b.main_class or None,
                    )
                    for b in settings.native_image.binaries
                )
            )
        return cls(layout=layout, capabilities=capabilities)
