"""Shared pytest fixtures and test helpers for planext tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from planext.domain.buildplan import BuildPlan, FileEntry, Layer
from planext.infrastructure.project import (
    CONTAINER_CAPABILITY,
    NATIVE_IMAGE_CAPABILITY,
    ContainerParameters,
    HostProject,
    NativeBinary,
    NativeImageOptions,
    ProjectLayout,
)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's PLANEXT_* environment out of the tests."""
    monkeypatch.delenv("PLANEXT_CONFIG", raising=False)


@pytest.fixture
def build_dir(tmp_path: Path) -> Path:
    """Gradle-style build output directory."""
    path = tmp_path / "build"
    path.mkdir()
    return path


@pytest.fixture
def _isolated_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp project root so the CLI finds no outside config."""
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def make_executable(build_dir: Path, name: str = "app", stage: str = "nativeCompile") -> Path:
    """Create a fake native executable where the Gradle layout expects it."""
    path = build_dir / "native" / stage / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"\x7fELF")
    path.chmod(0o755)
    return path


def make_project(
    build_dir: Path,
    *,
    app_root: str | None = None,
    main_class: str | None = None,
    entrypoint: tuple[str, ...] | None = None,
    binaries: tuple[NativeBinary, ...] | None = None,
    with_container: bool = True,
    layout: ProjectLayout | None = None,
) -> HostProject:
    """Build a HostProject exposing the given capabilities."""
    capabilities: dict[str, object] = {}
    if with_container:
        capabilities[CONTAINER_CAPABILITY] = ContainerParameters(
            app_root=app_root, main_class=main_class, entrypoint=entrypoint
        )
    if binaries is not None:
        capabilities[NATIVE_IMAGE_CAPABILITY] = NativeImageOptions(binaries=binaries)
    layout = layout or ProjectLayout(build_dir=build_dir)
    return HostProject(layout=layout, capabilities=capabilities)


def entry(destination: str, source: str = "src/file") -> FileEntry:
    return FileEntry(source=Path(source), destination=destination)


def make_plan(*layer_names: str, entrypoint: list[str] | None = None) -> BuildPlan:
    """A plan with one single-entry layer per name."""
    layers = tuple(
        Layer(name=name, entries=(entry(f"/app/{i}/{name.replace(' ', '-')}"),))
        for i, name in enumerate(layer_names)
    )
    return BuildPlan(base_image="eclipse-temurin:21-jre", entrypoint=entrypoint, layers=layers)
