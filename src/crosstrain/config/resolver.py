"""Layered configuration resolution.

Precedence (lowest to highest) is carried by each layer's ``rank``::

    code defaults  <  Claude settings  <  settings.json  <  env vars  <  options

Every layer is a sparse fragment.  Layers are merged strictly in rank
order, each one on top of everything below it:

- nested records merge key by key (:func:`deep_merge`);
- scalars, lists, and shape mismatches are replaced wholesale;
- named lists (``marketplaces``, ``plugins``) merge entry by entry
  through :func:`named_list_merge`;
- alias tables (``model_mappings``, ``tool_mappings``) union key by key.

Resolution never raises.  A missing fragment, a wrongly shaped field, or
a layer that would leave the record invalid is skipped and reported in
the returned :class:`Outcome`'s warnings.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

import structlog
from pydantic import ValidationError

from crosstrain.config.models import CrosstrainConfig, canonical_fragment
from crosstrain.domain.named_list import (
    IdentityFn,
    by_name,
    by_name_and_marketplace,
    named_list_merge,
)
from crosstrain.domain.nodes import Absent, ArrayNode, ObjectNode, lookup
from crosstrain.domain.outcome import Outcome

logger = structlog.get_logger(__name__)

NAMED_LIST_FIELDS: dict[str, IdentityFn] = {
    "marketplaces": by_name,
    "plugins": by_name_and_marketplace,
}
MAPPING_FIELDS: tuple[str, ...] = ("model_mappings", "tool_mappings")


@dataclass(frozen=True)
class SourceLayer:
    """One configuration source.  ``fragment`` is None when unavailable."""

    name: str
    fragment: Mapping[str, Any] | None
    rank: int


def _skip_message(layer: SourceLayer) -> str:
    if layer.fragment is None:
        return f"{layer.name}: not available, skipped"
    return f"{layer.name}: fragment is not a mapping, skipped"


def deep_merge(target: Mapping[str, Any], source: Mapping[str, Any]) -> dict[str, Any]:
    """Merge *source* over *target* and return a new dict.

    Neither argument is modified.
    """
    merged = copy.deepcopy(dict(target))
    for key in source:
        match (lookup(target, key), lookup(source, key)):
            case (ObjectNode(entries=ours), ObjectNode(entries=theirs)):
                merged[key] = deep_merge(ours, theirs)
            case (_, Absent()):
                pass
            case _:
                merged[key] = copy.deepcopy(source[key])
    return merged


def _merge_named_lists(
    current: Mapping[str, Any],
    merged: dict[str, Any],
    fragment: Mapping[str, Any],
    layer: str,
    named_lists: Mapping[str, IdentityFn],
    warnings: list[str],
) -> None:
    for field, identity in named_lists.items():
        base = current.get(field) or []
        match lookup(fragment, field):
            case Absent():
                continue
            case ArrayNode(items=items):
                entries = [item for item in items if isinstance(item, Mapping)]
                if len(entries) != len(items):
                    warnings.append(f"{layer}: ignored non-record entries in {field!r}")
                merged[field] = named_list_merge(base, entries, identity)
            case _:
                warnings.append(f"{layer}: {field!r} must be a list, ignored")
                merged[field] = copy.deepcopy(list(base))


def _union_mappings(
    current: Mapping[str, Any],
    merged: dict[str, Any],
    fragment: Mapping[str, Any],
    layer: str,
    mapping_fields: Iterable[str],
    warnings: list[str],
) -> None:
    for field in mapping_fields:
        base = current.get(field) or {}
        match lookup(fragment, field):
            case Absent():
                continue
            case ObjectNode(entries=entries):
                merged[field] = {**base, **entries}
            case _:
                warnings.append(f"{layer}: {field!r} must be a mapping, ignored")
                merged[field] = dict(base)


def apply_layer(
    current: Mapping[str, Any],
    fragment: Mapping[str, Any],
    *,
    layer: str = "fragment",
    named_lists: Mapping[str, IdentityFn] = NAMED_LIST_FIELDS,
    mapping_fields: Iterable[str] = MAPPING_FIELDS,
    warnings: list[str] | None = None,
) -> dict[str, Any]:
    """Merge one fragment over *current* with the per-field rules."""
    sink = warnings if warnings is not None else []
    merged = deep_merge(current, fragment)
    _merge_named_lists(current, merged, fragment, layer, named_lists, sink)
    _union_mappings(current, merged, fragment, layer, mapping_fields, sink)
    return merged


def merge_layers(
    defaults: Mapping[str, Any],
    layers: Iterable[SourceLayer],
    *,
    named_lists: Mapping[str, IdentityFn] = NAMED_LIST_FIELDS,
    mapping_fields: Iterable[str] = MAPPING_FIELDS,
) -> Outcome[dict[str, Any]]:
    """Fold *layers* over a deep copy of *defaults* in ascending rank."""
    warnings: list[str] = []
    result = copy.deepcopy(dict(defaults))
    fields = tuple(mapping_fields)
    for layer in sorted(layers, key=lambda src: src.rank):
        if not isinstance(layer.fragment, Mapping):
            warnings.append(_skip_message(layer))
            logger.debug("layer skipped", layer=layer.name, rank=layer.rank)
            continue
        result = apply_layer(
            result,
            layer.fragment,
            layer=layer.name,
            named_lists=named_lists,
            mapping_fields=fields,
            warnings=warnings,
        )
    return Outcome(result, warnings)


def resolve_configuration(
    defaults: Mapping[str, Any],
    layers: Iterable[SourceLayer],
) -> Outcome[CrosstrainConfig]:
    """Resolve *layers* over *defaults* into a :class:`CrosstrainConfig`.

    A layer whose merged result fails validation is dropped and reported,
    and the remaining layers still apply.
    """
    warnings: list[str] = []
    try:
        result = CrosstrainConfig.model_validate(canonical_fragment(defaults))
    except ValidationError as exc:
        count = exc.error_count()
        warnings.append(f"defaults are invalid, using built-in defaults: {count} errors")
        result = CrosstrainConfig()
    state = result.model_dump()

    for layer in sorted(layers, key=lambda src: src.rank):
        if not isinstance(layer.fragment, Mapping):
            warnings.append(_skip_message(layer))
            logger.debug("layer skipped", layer=layer.name, rank=layer.rank)
            continue

        layer_warnings: list[str] = []
        candidate = apply_layer(
            state,
            canonical_fragment(layer.fragment),
            layer=layer.name,
            warnings=layer_warnings,
        )
        try:
            validated = CrosstrainConfig.model_validate(candidate)
        except ValidationError as exc:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
            warnings.append(f"{layer.name}: invalid values ({fields}), layer skipped")
            logger.warning("layer rejected", layer=layer.name, fields=fields)
            continue
        warnings.extend(layer_warnings)
        state, result = candidate, validated

    for warning in warnings:
        logger.debug("resolution warning", warning=warning)
    return Outcome(result, warnings)
