"""Entry point for the ``crosstrain`` command.

The root group only records output and logging flags on an
:class:`AppContext`; ``parse``, ``render`` and ``config`` are attached by
:func:`register_commands`.
"""

from __future__ import annotations

import click

from crosstrain import __version__
from crosstrain.commands import register_commands
from crosstrain.commands._context import AppContext


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="crosstrain")
@click.option("--json", "json_output", is_flag=True, help="Print results as one JSON envelope.")
@click.option("-q", "--quiet", is_flag=True, help="Status line only; render prints the text.")
@click.option("-v", "--verbose", is_flag=True, help="Debug-level crosstrain logs on stderr.")
@click.option("--log-json", is_flag=True, help="Write stderr logs as JSON lines.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
) -> None:
    """Parse header documents and resolve layered crosstrain settings."""
    ctx.obj = AppContext(
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
