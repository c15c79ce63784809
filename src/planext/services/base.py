"""BaseService — foundation for planext services.

Every service receives the :class:`HostProject` and the loaded
:class:`PluginManager` at construction time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from planext.infrastructure.project import HostProject
    from planext.plugins.manager import PluginManager


class BaseService:
    """Base for service-layer classes.

    Usage::

        class ExtendService(BaseService):
            def extend(self, plan, specs) -> ServiceResult:
                plan = self._plugins.apply_all(plan, specs, self._project)
                ...
    """

    def __init__(self, project: HostProject, plugins: PluginManager) -> None:
        self._project = project
        self._plugins = plugins
        if not plugins.is_loaded:
            plugins.discover_and_load()
