"""Source layers — loading fragments and resolving a project's configuration.

Fragment loaders are coroutines returning ``Outcome[fragment | None]``.
:func:`load_layers` runs them concurrently, but the merge itself always
applies the layers one at a time in rank order, so each layer sees the
fully merged result of every layer below it.

Ranks used by :func:`resolve_project_config`, lowest first:

====  ===================================================
0-1   ``~/.claude/settings.json``, ``settings.local.json``
2-3   ``<project>/.claude/settings.json``, ``settings.local.json``
10    ``.opencode/plugin/crosstrain/settings.json``
20    ``CROSSTRAIN_*`` environment variables
30    options passed by the caller
====  ===================================================
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog

from crosstrain.config.claude_settings import claude_settings_fragment
from crosstrain.config.discovery import claude_settings_files, settings_path
from crosstrain.config.environment import env_fragment
from crosstrain.config.models import CrosstrainConfig, default_fragment
from crosstrain.config.resolver import SourceLayer, resolve_configuration
from crosstrain.domain.outcome import Outcome

logger = structlog.get_logger(__name__)

Fragment = Mapping[str, Any]
FragmentLoader = Callable[[], Awaitable[Outcome[Fragment | None]]]

RANK_USER_CLAUDE = 0
RANK_PROJECT_CLAUDE = 2
RANK_SETTINGS = 10
RANK_ENVIRONMENT = 20
RANK_OPTIONS = 30


@dataclass(frozen=True)
class LayerSpec:
    """A named, ranked source whose fragment has yet to be loaded."""

    name: str
    rank: int
    load: FragmentLoader


async def load_json_fragment(path: Path) -> Outcome[Fragment | None]:
    """Read a JSON object from *path*.

    A missing file is silently absent.  An unreadable file, invalid
    JSON, or a non-object document is absent with a warning.
    """
    if not path.is_file():
        return Outcome(None)
    try:
        raw = await asyncio.to_thread(path.read_text, encoding="utf-8")
        data = json.loads(raw)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("settings file unreadable", path=str(path), error=str(exc))
        return Outcome(None, [f"{path}: could not be read ({exc})"])
    if not isinstance(data, dict):
        return Outcome(None, [f"{path}: expected a JSON object"])
    return Outcome(data)


async def load_claude_fragment(path: Path) -> Outcome[Fragment | None]:
    """Read a Claude Code settings file and convert it to a fragment."""
    loaded = await load_json_fragment(path)
    if loaded.value is None:
        return loaded
    return Outcome(claude_settings_fragment(loaded.value), loaded.warnings)


def static_source(fragment: Fragment | None) -> FragmentLoader:
    """Wrap an in-memory fragment as a loader."""

    async def load() -> Outcome[Fragment | None]:
        return Outcome(fragment)

    return load


def file_source(path: Path, *, claude: bool = False) -> FragmentLoader:
    """Loader for a JSON settings file at *path*."""

    async def load() -> Outcome[Fragment | None]:
        if claude:
            return await load_claude_fragment(path)
        return await load_json_fragment(path)

    return load


async def load_layers(specs: Sequence[LayerSpec]) -> Outcome[list[SourceLayer]]:
    """Load every spec concurrently; return layers sorted by rank.

    A loader that raises is treated as absent and reported.
    """
    results = await asyncio.gather(*(spec.load() for spec in specs), return_exceptions=True)
    layers: list[SourceLayer] = []
    warnings: list[str] = []
    for spec, result in zip(specs, results, strict=True):
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                raise result
            logger.warning("layer load failed", layer=spec.name, error=str(result))
            warnings.append(f"{spec.name}: load failed ({result})")
            layers.append(SourceLayer(spec.name, None, spec.rank))
            continue
        warnings.extend(result.warnings)
        layers.append(SourceLayer(spec.name, result.value, spec.rank))
    layers.sort(key=lambda layer: layer.rank)
    return Outcome(layers, warnings)


def _claude_specs(claude_dir: Path, base_rank: int, scope: str) -> list[LayerSpec]:
    return [
        LayerSpec(f"{scope} claude {path.name}", base_rank + offset, file_source(path, claude=True))
        for offset, path in enumerate(claude_settings_files(claude_dir))
    ]


async def resolve_project_config(
    directory: Path,
    options: Fragment | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    settings_file: Path | None = None,
    home: Path | None = None,
    include_claude_settings: bool = True,
) -> Outcome[CrosstrainConfig]:
    """Resolve the configuration for the project at *directory*.

    Crosstrain's own layers resolve first so that ``claude_dir`` and
    ``load_user_settings`` are known; the Claude Code settings layers are
    then slotted in underneath them and the whole stack resolves again.
    """
    settings = settings_file or settings_path(directory)
    own_specs = [
        LayerSpec("settings", RANK_SETTINGS, file_source(settings)),
        LayerSpec("environment", RANK_ENVIRONMENT, static_source(env_fragment(environ or {}))),
        LayerSpec("options", RANK_OPTIONS, static_source(options)),
    ]
    own = await load_layers(own_specs)
    first = resolve_configuration(default_fragment(), own.value)
    if not include_claude_settings:
        return Outcome(first.value, [*own.warnings, *first.warnings])

    claude_specs = _claude_specs(directory / first.value.claude_dir, RANK_PROJECT_CLAUDE, "project")
    if first.value.load_user_settings:
        user_dir = (home or Path.home()) / ".claude"
        claude_specs = [*_claude_specs(user_dir, RANK_USER_CLAUDE, "user"), *claude_specs]
    claude = await load_layers(claude_specs)

    final = resolve_configuration(default_fragment(), [*claude.value, *own.value])
    return Outcome(final.value, [*own.warnings, *claude.warnings, *final.warnings])
