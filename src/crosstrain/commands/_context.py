"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Configures logging, snapshots the environment, and
centralizes result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import os
from collections.abc import Mapping

import click

from crosstrain.config.logging import configure_logging
from crosstrain.output.formatters import OutputSettings, format_result
from crosstrain.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(
        self,
        *,
        json_output: bool = False,
        quiet: bool = False,
        verbose: bool = False,
        log_json: bool = False,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.output = OutputSettings(json_output=json_output, quiet=quiet)
        self.verbose = verbose
        self.environ: dict[str, str] = dict(os.environ if environ is None else environ)
        configure_logging(verbose=verbose, log_json=log_json)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        output = format_result(result, settings=self.output)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not self.output.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
