"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy project/extension loading and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from planext.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from planext.config.settings import PlanextSettings
    from planext.infrastructure.project import HostProject
    from planext.plugins.manager import PluginManager
    from planext.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  Extensions are
    discovered on first use so ``--help`` and ``--version`` never
    import third-party plugins.
    """

    def __init__(self, settings: PlanextSettings) -> None:
        self.settings = settings
        self._project: HostProject | None = None
        self._plugins: PluginManager | None = None

        from planext.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def project(self) -> HostProject:
        """The host project model (built lazily from settings)."""
        if self._project is None:
            from planext.infrastructure.project import HostProject

            self._project = HostProject.from_settings(self.settings)
        return self._project

    @property
    def plugins(self) -> PluginManager:
        """The loaded extension manager."""
        if self._plugins is None:
            from planext.plugins.manager import PluginManager

            self._plugins = PluginManager()
            self._plugins.discover_and_load()
        return self._plugins

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
