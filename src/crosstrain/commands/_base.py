"""Click classes for crosstrain commands that carry worked invocations.

``parse``, ``render`` and the ``config`` group pass an ``examples`` string.
Running any of them with ``--examples`` prints that text and exits, so
``--help`` stays a short option listing.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import click


def _print_examples(examples: str) -> Callable[[click.Context, click.Parameter, bool], None]:
    def callback(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples.rstrip("\n"))
        ctx.exit(0)

    return callback


class _ExamplesMixin:
    """Adds an eager ``--examples`` flag when an examples string is given."""

    examples: str | None

    def _attach_examples(self, examples: str | None) -> None:
        self.examples = examples
        if not examples:
            return
        self.params.append(  # type: ignore[attr-defined]
            click.Option(
                ["--examples"],
                is_flag=True,
                expose_value=False,
                is_eager=True,
                callback=_print_examples(examples),
                help="Print sample crosstrain invocations and exit.",
            )
        )


class CrosstrainCommand(_ExamplesMixin, click.Command):
    """A leaf command such as ``crosstrain parse``."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._attach_examples(examples)


class CrosstrainGroup(_ExamplesMixin, click.Group):
    """A command group; its subcommands are built as :class:`CrosstrainCommand`."""

    command_class = CrosstrainCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._attach_examples(examples)
