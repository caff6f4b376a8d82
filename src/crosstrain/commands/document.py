"""Commands: parse and render header-plus-body documents."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from crosstrain.commands._base import CrosstrainCommand

if TYPE_CHECKING:
    from crosstrain.commands._context import AppContext

_PATH = click.Path(dir_okay=False, path_type=Path)


@click.command(
    cls=CrosstrainCommand,
    examples="""\
  crosstrain parse .claude/agents/reviewer.md
  crosstrain --json parse SKILL.md""",
)
@click.argument("file", type=_PATH)
@click.pass_obj
def parse(app: AppContext, file: Path) -> None:
    """Parse a document and show its header and body."""
    from crosstrain.services.documents import DocumentService

    app.emit(DocumentService().parse_file(file))


@click.command(
    cls=CrosstrainCommand,
    examples="""\
  crosstrain render .claude/commands/deploy.md
  crosstrain -q render SKILL.md > SKILL.canonical.md""",
)
@click.argument("file", type=_PATH)
@click.pass_obj
def render(app: AppContext, file: Path) -> None:
    """Re-render a document in canonical header form."""
    from crosstrain.services.documents import DocumentService

    app.emit(DocumentService().render_file(file))
