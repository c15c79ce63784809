"""Subcommand modules for planext.

Provides register_commands() which uses deferred imports to keep
``planext --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from planext.commands.extend import extend
    from planext.commands.extensions import extensions

    cli.add_command(extend)
    cli.add_command(extensions)
