"""Tagged union over fragment values, used at the merge boundary.

Configuration fragments arrive as untyped JSON-like data.  ``classify``
tags each value once, so the merge code can dispatch on four explicit
shapes with ``match`` instead of scattering ``isinstance`` checks.

``None`` is tagged :class:`Absent`: an explicit null in a fragment means
"not provided", never "reset to null".
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Absent:
    """No value at this key."""


@dataclass(frozen=True)
class Scalar:
    value: Any


@dataclass(frozen=True)
class ObjectNode:
    entries: Mapping[str, Any]


@dataclass(frozen=True)
class ArrayNode:
    items: Sequence[Any]


Node = Scalar | ObjectNode | ArrayNode | Absent

ABSENT = Absent()


def classify(value: Any) -> Node:
    """Tag a raw fragment value."""
    if value is None:
        return ABSENT
    if isinstance(value, Mapping):
        return ObjectNode(value)
    if isinstance(value, (list, tuple)):
        return ArrayNode(value)
    return Scalar(value)


def lookup(mapping: Mapping[str, Any], key: str) -> Node:
    """Tag ``mapping[key]``, or :data:`ABSENT` if the key is missing."""
    if key not in mapping:
        return ABSENT
    return classify(mapping[key])
