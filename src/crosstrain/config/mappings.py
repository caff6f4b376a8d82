"""Helpers applying a resolved configuration to individual assets."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from crosstrain.config.models import CrosstrainConfig


def should_include_asset(
    name: str,
    include: Iterable[str] | None = None,
    exclude: Iterable[str] | None = None,
) -> bool:
    """Apply include/exclude filters.  A non-empty *include* list wins."""
    include_list = list(include or [])
    if include_list:
        return name in include_list
    return name not in set(exclude or [])


def apply_model_mapping(model: str | None, config: CrosstrainConfig) -> str | None:
    """Map a model alias through ``config.model_mappings``.

    Unknown aliases pass through unchanged.  An alias mapped to ``""``
    (``inherit``) yields ``""``, meaning "use the parent's model".
    """
    if not model:
        return None
    return config.model_mappings.get(model, model)


def apply_tool_mapping(
    tools: Iterable[str] | None,
    mapping: Mapping[str, str] | CrosstrainConfig,
) -> list[str] | None:
    """Rename tools through a tool mapping; None for an empty tool list."""
    names = list(tools or [])
    if not names:
        return None
    table = mapping.tool_mappings if isinstance(mapping, CrosstrainConfig) else mapping
    return [table.get(tool) or tool for tool in names]
