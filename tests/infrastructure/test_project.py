"""Tests for the host project model."""

from __future__ import annotations

from pathlib import Path

from planext.config.settings import PlanextSettings
from planext.domain.types import LayoutKind
from planext.infrastructure.project import (
    CONTAINER_CAPABILITY,
    NATIVE_IMAGE_CAPABILITY,
    ContainerParameters,
    HostProject,
    NativeBinary,
    NativeImageOptions,
    ProjectLayout,
)


class TestProjectLayout:
    def test_gradle_executable_path(self, tmp_path: Path) -> None:
        layout = ProjectLayout(build_dir=tmp_path)
        assert layout.native_executable("app") == tmp_path / "native" / "nativeCompile" / "app"
        assert layout.build_step == "nativeCompile"

    def test_custom_compile_stage(self, tmp_path: Path) -> None:
        layout = ProjectLayout(build_dir=tmp_path, compile_stage="nativeTestCompile")
        assert layout.native_executable("app") == tmp_path / "native" / "nativeTestCompile" / "app"

    def test_maven_executable_path(self, tmp_path: Path) -> None:
        layout = ProjectLayout(build_dir=tmp_path, kind=LayoutKind.MAVEN)
        assert layout.native_executable("app") == tmp_path / "app"
        assert layout.build_step == "native:compile"


class TestCapabilities:
    def test_find_capability(self, tmp_path: Path) -> None:
        container = ContainerParameters(app_root="/custom")
        project = HostProject(
            layout=ProjectLayout(build_dir=tmp_path),
            capabilities={CONTAINER_CAPABILITY: container},
        )
        assert project.find_capability(CONTAINER_CAPABILITY, ContainerParameters) is container

    def test_missing_capability_is_none(self, tmp_path: Path) -> None:
        project = HostProject(layout=ProjectLayout(build_dir=tmp_path))
        assert project.find_capability(CONTAINER_CAPABILITY, ContainerParameters) is None

    def test_wrong_type_is_none(self, tmp_path: Path) -> None:
        project = HostProject(
            layout=ProjectLayout(build_dir=tmp_path),
            capabilities={CONTAINER_CAPABILITY: {"app_root": "/custom"}},
        )
        assert project.find_capability(CONTAINER_CAPABILITY, ContainerParameters) is None

    def test_binary_lookup(self) -> None:
        options = NativeImageOptions(
            binaries=(NativeBinary(name="test"), NativeBinary(name="main", main_class="hello"))
        )
        main = options.binary("main")
        assert main is not None
        assert main.main_class == "hello"
        assert options.binary("other") is None


class TestFromSettings:
    def test_defaults(self, tmp_path: Path) -> None:
        project = HostProject.from_settings(PlanextSettings.from_cli(project_root=tmp_path))
        assert project.layout.build_dir == tmp_path / "build"
        container = project.find_capability(CONTAINER_CAPABILITY, ContainerParameters)
        assert container == ContainerParameters()
        options = project.find_capability(NATIVE_IMAGE_CAPABILITY, NativeImageOptions)
        assert options == NativeImageOptions()

    def test_empty_strings_become_none(self, tmp_path: Path) -> None:
        (tmp_path / "planext.toml").write_text(
            '[container]\napp_root = ""\nmain_class = "Main"\nentrypoint = ["/bin/app", "-v"]\n'
        )
        project = HostProject.from_settings(PlanextSettings.from_cli(project_root=tmp_path))
        container = project.find_capability(CONTAINER_CAPABILITY, ContainerParameters)
        assert container is not None
        assert container.app_root is None
        assert container.main_class == "Main"
        assert container.entrypoint == ("/bin/app", "-v")

    def test_binaries_and_layout(self, tmp_path: Path) -> None:
        (tmp_path / "planext.toml").write_text(
            '[build]\nkind = "maven"\ndir = "target"\n\n'
            '[[native_image.binaries]]\nname = "main"\nmain_class = "hello"\n'
        )
        project = HostProject.from_settings(PlanextSettings.from_cli(project_root=tmp_path))
        assert project.layout.kind is LayoutKind.MAVEN
        assert project.layout.native_executable("x") == tmp_path / "target" / "x"
        options = project.find_capability(NATIVE_IMAGE_CAPABILITY, NativeImageOptions)
        assert options is not None
        assert options.binary("main") == NativeBinary(name="main", main_class="hello")

    def test_native_image_disabled(self, tmp_path: Path) -> None:
        (tmp_path / "planext.toml").write_text("[native_image]\nenabled = false\n")
        project = HostProject.from_settings(PlanextSettings.from_cli(project_root=tmp_path))
        assert project.find_capability(NATIVE_IMAGE_CAPABILITY, NativeImageOptions) is None
