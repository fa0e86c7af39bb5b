"""Subcommand modules for typedrpc.

Provides register_commands() which uses deferred imports to keep
``typedrpc --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from typedrpc.commands.execute import execute
    from typedrpc.commands.greet import greet

    cli.add_command(greet)
    cli.add_command(execute)
