"""Built-in layer-filter extension.

Moves or deletes individual file entries based on ordered glob filters
matched against each entry's in-image destination:

- The **last** matching filter decides an entry's fate.
- A filter without ``toLayer`` deletes matching entries.
- A filter with ``toLayer`` moves matching entries into a new layer of
  that name. New layers are appended after the original ones, in the
  order their names first appear in the filter list.
- Layers left empty are dropped.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pluggy
from pydantic import BaseModel, ConfigDict, Field

from planext.domain.buildplan import BuildPlan, FileEntry, Layer
from planext.domain.errors import ConfigurationError
from planext.domain.globs import compile_glob, glob_matches
from planext.infrastructure.project import HostProject

hookimpl = pluggy.HookimplMarker("planext")

EXTENSION_NAME = "layer-filter"


class LayerFilter(BaseModel):
    """One filter rule."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    glob: str = Field(min_length=1)
    to_layer: str = Field(default="", alias="toLayer")


class LayerFilterConfig(BaseModel):
    """Extension-specific configuration for ``layer-filter``."""

    model_config = ConfigDict(frozen=True)

    filters: list[LayerFilter] = Field(default_factory=list)


def _new_layer_names(filters: list[LayerFilter]) -> list[str]:
    names: list[str] = []
    for f in filters:
        if f.to_layer and f.to_layer not in names:
            names.append(f.to_layer)
    return names


def _decide(filters: list[LayerFilter], entry: FileEntry) -> LayerFilter | None:
    """Return the last filter matching *entry*, or None."""
    for f in reversed(filters):
        if glob_matches(f.glob, entry.destination):
            return f
    return None


class LayerFilterExtension:
    """Move or delete file entries across layers by glob."""

    @hookimpl
    def extra_config_type(self) -> type[BaseModel]:
        return LayerFilterConfig

    @hookimpl
    def extend_container_build_plan(
        self,
        build_plan: BuildPlan,
        properties: Mapping[str, str],
        config: LayerFilterConfig | None,
        project: HostProject,
        logger: Any,
    ) -> BuildPlan:
        logger.info("Running layer filter")
        if config is None:
            raise ConfigurationError(
                EXTENSION_NAME,
                "extension requires configuration; add 'filters' with 'glob' and 'toLayer'",
            )

        filters = config.filters
        for f in filters:
            try:
                compile_glob(f.glob)
            except ValueError as exc:
                raise ConfigurationError(EXTENSION_NAME, f"invalid glob: {exc}") from exc

        original_names = set(build_plan.layer_names())
        new_names = _new_layer_names(filters)
        for name in new_names:
            if name in original_names:
                raise ConfigurationError(
                    EXTENSION_NAME,
                    f"moving files into existing layer '{name}' is prohibited; "
                    "specify a new layer name in 'toLayer'.",
                )

        moved: dict[str, list[FileEntry]] = {name: [] for name in new_names}
        layers: list[Layer] = []
        deleted = 0
        for layer in build_plan.layers:
            kept: list[FileEntry] = []
            for entry in layer.entries:
                match = _decide(filters, entry)
                if match is None:
                    kept.append(entry)
                elif match.to_layer:
                    moved[match.to_layer].append(entry)
                else:
                    deleted += 1
            if kept:
                layers.append(layer.model_copy(update={"entries": tuple(kept)}))

        layers.extend(
            Layer(name=name, entries=tuple(entries)) for name, entries in moved.items() if entries
        )
        logger.debug(
            "Layers filtered",
            deleted=deleted,
            moved={name: len(entries) for name, entries in moved.items()},
        )
        return build_plan.model_copy(update={"layers": tuple(layers)})
