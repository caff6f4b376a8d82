"""Advisory checks over a resolved configuration.

Validation only reports.  It never raises and never changes the config,
so running it twice yields the same list.
"""

from __future__ import annotations

from pathlib import PurePath

from crosstrain.config.models import CrosstrainConfig


def _escapes_root(path: str) -> bool:
    return ".." in PurePath(path).parts


def validate_config(config: CrosstrainConfig) -> list[str]:
    """Return warning strings for suspicious settings in *config*."""
    warnings: list[str] = []

    if _escapes_root(config.claude_dir):
        warnings.append(f"claude_dir {config.claude_dir!r} contains parent directory references")
    if _escapes_root(config.opencode_dir):
        warnings.append(
            f"opencode_dir {config.opencode_dir!r} contains parent directory references"
        )

    if config.file_prefix == "":
        warnings.append("file_prefix is empty, generated files may conflict with existing files")

    loaders = config.loaders
    if not any((loaders.skills, loaders.agents, loaders.commands, loaders.hooks, loaders.mcp)):
        warnings.append("All loaders are disabled, no assets will be loaded")

    known: set[str] = set()
    for marketplace in config.marketplaces:
        if not marketplace.name.strip():
            warnings.append("marketplace with an empty name")
            continue
        known.add(marketplace.name)
        if marketplace.enabled and not marketplace.source.strip():
            warnings.append(f"marketplace {marketplace.name!r} has no source")

    for plugin in config.plugins:
        if not plugin.name.strip():
            warnings.append("plugin with an empty name")
        elif not plugin.marketplace:
            warnings.append(f"plugin {plugin.name!r} does not name a marketplace")
        elif plugin.enabled and plugin.marketplace not in known:
            warnings.append(f"plugin {plugin.key!r} references unknown marketplace")

    return warnings
