"""Pluggy hook specifications for build-plan extensions.

An extension is a pluggy plugin registered under its extension name. The
host runs extensions one at a time, feeding each the plan returned by the
previous one, so every hook is ``firstresult``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import pluggy

if TYPE_CHECKING:
    from pydantic import BaseModel

    from planext.domain.buildplan import BuildPlan
    from planext.infrastructure.project import HostProject

hookspec = pluggy.HookspecMarker("planext")


class PlanextHookSpec:
    """Hook specifications for the planext extension system."""

    @hookspec(firstresult=True)
    def extra_config_type(self) -> type[BaseModel] | None:
        """Return the model that extension-specific configuration validates into.

        Extensions that take no configuration return None (or do not
        implement this hook).
        """

    @hookspec(firstresult=True)
    def extend_container_build_plan(
        self,
        build_plan: BuildPlan,
        properties: Mapping[str, str],
        config: BaseModel | None,
        project: HostProject,
        logger: Any,
    ) -> BuildPlan | None:
        """Return a new build plan derived from *build_plan*.

        Raise :class:`planext.domain.errors.ExtensionError` to abort.
        """
