"""Subcommand modules for crosstrain.

Provides register_commands() which uses deferred imports to keep
``crosstrain --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the ``config`` group and the document commands."""
    from crosstrain.commands.config_cmd import config
    from crosstrain.commands.document import parse, render

    cli.add_command(config)
    cli.add_command(parse)
    cli.add_command(render)
