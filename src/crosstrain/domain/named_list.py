"""Merge lists of records matched by identity instead of position.

Later configuration layers update or append individual entries
(``marketplaces`` by name, ``plugins`` by ``name@marketplace``) without
discarding the rest of the list.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterable, Mapping
from typing import Any

Entry = dict[str, Any]
IdentityFn = Callable[[Mapping[str, Any]], str | None]


def by_name(entry: Mapping[str, Any]) -> str | None:
    """Identity of a marketplace entry."""
    name = entry.get("name")
    return str(name) if name else None


def by_name_and_marketplace(entry: Mapping[str, Any]) -> str | None:
    """Identity of a plugin entry: ``name@marketplace``."""
    name = entry.get("name")
    marketplace = entry.get("marketplace")
    if not name:
        return None
    return f"{name}@{marketplace or ''}"


def merge_entry(base: Mapping[str, Any], override: Mapping[str, Any]) -> Entry:
    """Shallow field merge; present override fields win."""
    merged = copy.deepcopy(dict(base))
    for key, value in override.items():
        if value is not None:
            merged[key] = copy.deepcopy(value)
    return merged


def named_list_merge(
    base: Iterable[Mapping[str, Any]],
    override: Iterable[Mapping[str, Any]],
    identity: IdentityFn,
) -> list[Entry]:
    """Merge *override* entries into *base* by identity.

    Matching entries are merged in place and keep their original
    position.  New entries are appended in override order.  Entries
    without an identity never match and are always appended.  Neither
    input is mutated.
    """
    result: list[Entry] = [copy.deepcopy(dict(entry)) for entry in base]
    positions: dict[str, int] = {}
    for idx, entry in enumerate(result):
        key = identity(entry)
        if key is not None:
            positions.setdefault(key, idx)

    for entry in override:
        key = identity(entry)
        if key is not None and key in positions:
            idx = positions[key]
            result[idx] = merge_entry(result[idx], entry)
            continue
        if key is not None:
            positions[key] = len(result)
        result.append(copy.deepcopy(dict(entry)))

    return result
