"""Command: list installed extensions."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from planext.commands._base import PlanextCommand

if TYPE_CHECKING:
    from planext.commands._context import AppContext


@click.command(
    cls=PlanextCommand,
    examples="""\
  planext extensions
  planext --json extensions""",
)
@click.pass_obj
def extensions(app: AppContext) -> None:
    """List registered build-plan extensions."""
    from planext.services.extend import ExtendService

    app.emit(ExtendService(app.project, app.plugins).list_extensions())
