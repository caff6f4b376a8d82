"""Convert Claude Code ``settings.json`` content into a config fragment.

Claude Code records marketplaces under ``extraKnownMarketplaces`` and
enabled plugins under ``enabledPlugins`` (keyed ``plugin@marketplace``).
Both become named-list entries, so crosstrain's own settings can refine
them entry by entry.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_SOURCE_FIELDS = {"github": "repo", "git": "url", "directory": "path"}


def marketplace_source(source: Any) -> str:
    """Return the source string of a Claude marketplace entry, or ``""``."""
    if not isinstance(source, Mapping):
        return ""
    field = _SOURCE_FIELDS.get(str(source.get("source", "")))
    if field is None:
        return ""
    return str(source.get(field) or "")


def claude_settings_fragment(settings: Mapping[str, Any]) -> dict[str, Any]:
    """Translate Claude Code settings into ``marketplaces``/``plugins`` entries.

    Marketplaces with an unsupported source and plugin keys without an
    ``@marketplace`` suffix are dropped.
    """
    marketplaces: list[dict[str, Any]] = []
    known = settings.get("extraKnownMarketplaces")
    if isinstance(known, Mapping):
        for name, entry in known.items():
            source = marketplace_source(entry.get("source") if isinstance(entry, Mapping) else None)
            if source:
                marketplaces.append({"name": name, "source": source, "enabled": True})

    plugins: list[dict[str, Any]] = []
    enabled = settings.get("enabledPlugins")
    if isinstance(enabled, Mapping):
        for key, flag in enabled.items():
            name, sep, marketplace = str(key).rpartition("@")
            if sep and name and marketplace:
                plugins.append({"name": name, "marketplace": marketplace, "enabled": bool(flag)})

    fragment: dict[str, Any] = {}
    if marketplaces:
        fragment["marketplaces"] = marketplaces
    if plugins:
        fragment["plugins"] = plugins
    return fragment
