"""Outcome — a value paired with the advisory warnings raised producing it.

Parsers, loaders and the resolver all degrade instead of raising.  They
return an Outcome so callers can decide whether to surface what was
skipped.  Warnings never change ``value``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Primary result plus side-channel warnings."""

    value: T
    warnings: list[str] = field(default_factory=list)
