"""Extension discovery, loading, and invocation.

Discovery: built-in extensions first, then entry_points (pip-installed)
from the ``planext.extensions`` group via pluggy setuptools entrypoints.
Invocation: one extension at a time, in the order the host asks for.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

import pluggy
from pydantic import BaseModel, ValidationError

from planext.config.logging import get_extension_logger
from planext.domain.buildplan import BuildPlan
from planext.domain.errors import ConfigurationError, HostIntegrationError
from planext.plugins.hookspecs import PlanextHookSpec

if TYPE_CHECKING:
    from planext.config.models import ExtensionConfig
    from planext.infrastructure.project import HostProject

PROJECT_NAME = "planext"
ENTRY_POINT_GROUP = "planext.extensions"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages extension discovery, loading, and dispatch."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(PlanextHookSpec)
        self._loaded: bool = False

    def discover_and_load(self) -> list[str]:
        """Register built-in extensions, then discover installed ones.

        Entry points whose name is already registered are skipped by
        pluggy, so a third-party package cannot shadow a built-in.

        Returns a list of loaded extension names.
        """
        from planext.plugins.builtins import BUILTIN_EXTENSIONS

        for name, factory in BUILTIN_EXTENSIONS.items():
            if self._pm.get_plugin(name) is None:
                self.register_plugin(factory(), name=name)
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        self._loaded = True
        return self.list_extension_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register an extension instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered extension: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        """Unregister an extension instance."""
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        """Access the hook relay."""
        return self._pm.hook

    def get_plugins(self) -> list[object]:
        """Return all registered extensions."""
        return list(self._pm.get_plugins())

    def list_extension_names(self) -> list[str]:
        """Return names of all registered extensions, sorted."""
        return sorted(self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins())

    def get_extension(self, name: str) -> object | None:
        """Return the extension registered as *name*, if any."""
        return self._pm.get_plugin(name)

    # ------------------------------------------------------------------
    # Invocation
    # ------------------------------------------------------------------

    def apply(
        self,
        build_plan: BuildPlan,
        spec: ExtensionConfig,
        project: HostProject,
    ) -> BuildPlan:
        """Run the extension named by *spec* against *build_plan*.

        Raises:
            HostIntegrationError: The extension is not registered or did
                not return a build plan.
            ConfigurationError: The extension-specific configuration is
                missing, unexpected, or invalid.
        """
        plugin = self.get_extension(spec.name)
        if plugin is None:
            available = ", ".join(self.list_extension_names()) or "none"
            raise HostIntegrationError(
                spec.name,
                f"extension is not installed (available: {available})",
            )

        config = self._load_extra_config(plugin, spec)
        result = self._caller_for(plugin, "extend_container_build_plan")(
            build_plan=build_plan,
            properties=dict(spec.properties),
            config=config,
            project=project,
            logger=get_extension_logger(spec.name),
        )
        if not isinstance(result, BuildPlan):
            raise HostIntegrationError(spec.name, "extension did not return a build plan")
        return result

    def apply_all(
        self,
        build_plan: BuildPlan,
        specs: Sequence[ExtensionConfig],
        project: HostProject,
    ) -> BuildPlan:
        """Run *specs* in order, feeding each extension the previous result."""
        for spec in specs:
            build_plan = self.apply(build_plan, spec, project)
        return build_plan

    def _load_extra_config(self, plugin: object, spec: ExtensionConfig) -> BaseModel | None:
        config_type = self._caller_for(plugin, "extra_config_type")()
        if config_type is None:
            if spec.configuration is not None:
                raise ConfigurationError(
                    spec.name,
                    "extension does not expect extension-specific configuration; "
                    "remove the 'configuration' entry",
                )
            return None
        if spec.configuration is None:
            return None
        try:
            return config_type.model_validate(spec.configuration)
        except ValidationError as exc:
            raise ConfigurationError(
                spec.name,
                f"invalid extension configuration: {exc}",
            ) from exc

    def _caller_for(self, plugin: object, hook_name: str) -> Any:
        """Return a hook caller that only dispatches to *plugin*."""
        others = [p for p in self._pm.get_plugins() if p is not plugin]
        return self._pm.subset_hook_caller(hook_name, remove_plugins=others)

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register an extension class directly. Hook
        dispatch against class objects leaves ``self`` unbound and fails at
        runtime.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point extension %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point extension: %s", plugin_name)
