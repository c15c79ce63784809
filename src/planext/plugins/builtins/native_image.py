"""Built-in native-image extension.

Rewrites a JVM-style build plan into one that ships a pre-built standalone
executable: every layer is replaced by a single "native image" layer, the
"extra files" layer family is carried over, and the entrypoint defaults to
the executable.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

import pluggy

from planext.domain.buildplan import EXECUTABLE_PERMISSIONS, BuildPlan, FileEntry, Layer
from planext.domain.errors import ConfigurationError, HostIntegrationError, MissingArtifactError
from planext.domain.paths import resolve_unix_path
from planext.domain.types import LayerType
from planext.infrastructure.filesystem import is_regular_file
from planext.infrastructure.project import (
    CONTAINER_CAPABILITY,
    NATIVE_IMAGE_CAPABILITY,
    ContainerParameters,
    HostProject,
    NativeImageOptions,
)

hookimpl = pluggy.HookimplMarker("planext")

EXTENSION_NAME = "native-image"
IMAGE_NAME_PROPERTY = "imageName"
MAIN_BINARY = "main"
DEFAULT_APP_ROOT = "/app"

# (properties, container, project) -> executable name or None
NameResolver = Callable[[Mapping[str, str], ContainerParameters, HostProject], str | None]


def _from_properties(
    properties: Mapping[str, str], container: ContainerParameters, project: HostProject
) -> str | None:
    return properties.get(IMAGE_NAME_PROPERTY) or None


def _from_container(
    properties: Mapping[str, str], container: ContainerParameters, project: HostProject
) -> str | None:
    return container.main_class or None


def _from_native_image_binary(
    properties: Mapping[str, str], container: ContainerParameters, project: HostProject
) -> str | None:
    options = project.find_capability(NATIVE_IMAGE_CAPABILITY, NativeImageOptions)
    if options is None:
        return None
    main = options.binary(MAIN_BINARY)
    if main is None:
        return None
    return main.main_class or None


NAME_RESOLVERS: tuple[NameResolver, ...] = (
    _from_properties,
    _from_container,
    _from_native_image_binary,
)


def resolve_executable_name(
    properties: Mapping[str, str],
    container: ContainerParameters,
    project: HostProject,
) -> str | None:
    """Return the first executable name any resolver yields.

    Order: ``imageName`` property, container main class, then the main
    class of the native-image integration's ``main`` binary.
    """
    for resolver in NAME_RESOLVERS:
        name = resolver(properties, container, project)
        if name:
            return name
    return None


class NativeImageExtension:
    """Replace the plan's layers with a single native executable layer."""

    @hookimpl
    def extend_container_build_plan(
        self,
        build_plan: BuildPlan,
        properties: Mapping[str, str],
        project: HostProject,
        logger: Any,
    ) -> BuildPlan:
        logger.info("Running layer rewrite")

        container = project.find_capability(CONTAINER_CAPABILITY, ContainerParameters)
        if container is None:
            raise HostIntegrationError(
                EXTENSION_NAME, "can't find container configuration in the host project"
            )

        executable_name = resolve_executable_name(properties, container, project)
        if executable_name is None:
            raise ConfigurationError(
                EXTENSION_NAME,
                "cannot auto-detect native-image executable name; "
                f"consider setting '{IMAGE_NAME_PROPERTY}' property",
            )

        local_executable = project.layout.native_executable(executable_name)
        if not is_regular_file(local_executable):
            raise MissingArtifactError(
                EXTENSION_NAME,
                f"native-image executable does not exist or not a file: {local_executable}\n"
                f"Did you run the '{project.layout.build_step}' build step?",
            )

        app_root = container.app_root or DEFAULT_APP_ROOT
        try:
            target_executable = resolve_unix_path(app_root, executable_name)
        except ValueError as exc:
            raise ConfigurationError(EXTENSION_NAME, f"invalid container app root: {exc}") from exc

        native_layer = Layer(
            name=LayerType.NATIVE_IMAGE.value,
            entries=(
                FileEntry(
                    source=local_executable,
                    destination=target_executable,
                    permissions=EXECUTABLE_PERMISSIONS,
                ),
            ),
        )
        # Extra files are user-declared and always ship verbatim.
        extra_prefix = LayerType.EXTRA_FILES.value
        extra_layers = tuple(
            layer for layer in build_plan.layers if layer.name.startswith(extra_prefix)
        )
        update: dict[str, Any] = {"layers": (native_layer, *extra_layers)}

        if not build_plan.entrypoint and not container.entrypoint:
            update["entrypoint"] = [target_executable]

        logger.debug(
            "Native image layer created",
            executable=str(local_executable),
            target=target_executable,
            preserved_layers=[layer.name for layer in extra_layers],
        )
        return build_plan.model_copy(update=update)
