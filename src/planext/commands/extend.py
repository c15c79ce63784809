"""Command: run extensions over a build plan."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from planext.commands._base import PlanextCommand

if TYPE_CHECKING:
    from planext.commands._context import AppContext


def _parse_properties(
    _ctx: click.Context, _param: click.Parameter, values: tuple[str, ...]
) -> dict[str, str]:
    properties: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            msg = f"expected KEY=VALUE, got {item!r}"
            raise click.BadParameter(msg)
        properties[key] = value
    return properties


def _parse_configuration(
    _ctx: click.Context, _param: click.Parameter, value: str | None
) -> dict[str, Any] | None:
    if value is None:
        return None
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError as exc:
        msg = f"invalid JSON: {exc}"
        raise click.BadParameter(msg) from exc
    if not isinstance(parsed, dict):
        msg = "must be a JSON object"
        raise click.BadParameter(msg)
    return parsed


@click.command(
    cls=PlanextCommand,
    examples="""\
  planext extend plan.json
  planext extend plan.json -e native-image
  planext extend plan.json -e native-image -P imageName=hello -o native-plan.json
  planext extend plan.json -e layer-filter \\
      --extension-config '{"filters": [{"glob": "**/*.jar", "toLayer": "jars"}]}'""",
)
@click.argument("plan", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-e",
    "--extension",
    "extension_names",
    multiple=True,
    help="Extension to run (repeatable, runs in order). Default: [[extensions]] from config.",
)
@click.option(
    "-P",
    "--property",
    "properties",
    multiple=True,
    metavar="KEY=VALUE",
    callback=_parse_properties,
    help="Property passed to every --extension.",
)
@click.option(
    "--extension-config",
    "configuration",
    default=None,
    metavar="JSON",
    callback=_parse_configuration,
    help="Extension-specific configuration passed to every --extension.",
)
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the extended plan to this file.",
)
@click.pass_obj
def extend(
    app: AppContext,
    plan: Path,
    extension_names: tuple[str, ...],
    properties: dict[str, str],
    configuration: dict[str, Any] | None,
    output_path: Path | None,
) -> None:
    """Apply build-plan extensions to PLAN (a JSON build plan)."""
    from planext.config.models import ExtensionConfig
    from planext.services.extend import ExtendService

    if extension_names:
        specs = [
            ExtensionConfig(name=name, properties=properties, configuration=configuration)
            for name in extension_names
        ]
    else:
        if properties or configuration is not None:
            msg = "--property and --extension-config require --extension"
            raise click.UsageError(msg)
        specs = list(app.settings.extensions)

    svc = ExtendService(app.project, app.plugins)
    app.emit(svc.extend_file(plan, specs, output_path=output_path))
