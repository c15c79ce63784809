"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, planext.toml only contains overrides.
A project that builds with Gradle into ``build/`` needs no config at all.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from planext.domain.types import LayoutKind

# --- planext.toml sections ---


class BuildConfig(BaseModel):
    """[build] section."""

    model_config = {"frozen": True}

    dir: str = "build"
    kind: LayoutKind = LayoutKind.GRADLE
    compile_stage: str = "nativeCompile"


class ContainerConfig(BaseModel):
    """[container] section."""

    model_config = {"frozen": True}

    app_root: str = ""
    main_class: str = ""
    entrypoint: list[str] = Field(default_factory=list)


class NativeBinaryConfig(BaseModel):
    """One [[native_image.binaries]] entry."""

    model_config = {"frozen": True}

    name: str
    main_class: str = ""


class NativeImageConfig(BaseModel):
    """[native_image] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    binaries: list[NativeBinaryConfig] = Field(default_factory=list)


class ExtensionConfig(BaseModel):
    """One [[extensions]] entry: which extension to run and with what input."""

    model_config = {"frozen": True}

    name: str
    properties: dict[str, str] = Field(default_factory=dict)
    configuration: dict[str, Any] | None = None
