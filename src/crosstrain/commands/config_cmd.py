"""Command group: resolve and check configuration."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from crosstrain.commands._base import CrosstrainGroup

if TYPE_CHECKING:
    from crosstrain.commands._context import AppContext
    from crosstrain.services.configuration import ConfigService

_DIRECTORY = click.Path(file_okay=False, path_type=Path)


def _options(raw: str | None) -> dict[str, Any] | None:
    if raw is None:
        return None
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"not valid JSON: {exc}", param_hint="--set") from exc
    if not isinstance(data, dict):
        raise click.BadParameter("must be a JSON object", param_hint="--set")
    return data


def _service(app: AppContext, no_claude: bool) -> ConfigService:
    from crosstrain.services.configuration import ConfigService

    return ConfigService(app.environ, include_claude_settings=not no_claude)


_common_options = [
    click.argument("directory", type=_DIRECTORY, required=False),
    click.option("--set", "overrides", default=None, help="JSON object of top-priority overrides."),
    click.option("--no-claude", is_flag=True, help="Skip Claude Code settings.json files."),
]


def _with_common(func: Any) -> Any:
    for decorator in reversed(_common_options):
        func = decorator(func)
    return func


@click.group(
    cls=CrosstrainGroup,
    examples="""\
  crosstrain config show
  crosstrain config show ./my-project --no-claude
  crosstrain --json config show --set '{"filePrefix": "cc_"}'
  crosstrain config check""",
)
def config() -> None:
    """Resolve layered configuration (defaults, settings, env, options)."""


@config.command()
@_with_common
@click.pass_obj
def show(app: AppContext, directory: Path | None, overrides: str | None, no_claude: bool) -> None:
    """Show the resolved configuration."""
    app.emit(_service(app, no_claude).show(directory, _options(overrides)))


@config.command()
@_with_common
@click.pass_obj
def check(app: AppContext, directory: Path | None, overrides: str | None, no_claude: bool) -> None:
    """Resolve the configuration and report suspicious settings."""
    app.emit(_service(app, no_claude).check(directory, _options(overrides)))
