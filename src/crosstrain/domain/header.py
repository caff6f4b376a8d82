"""Header-plus-body documents — parsing and canonical rendering.

A document opens with a ``---`` line, carries a small YAML-like header,
closes with a second ``---`` line, and continues with free-form body
text::

    ---
    name: reviewer
    tools: [Read, Grep]
    permissions:
      edit: deny
    ---

    Body text.

The header dialect is deliberately small: ``key: value`` lines, nesting
by indentation, inline ``[a, b]`` lists, and ``#`` comment lines.  No
anchors, block scalars, or multi-document streams.

Parsing never raises.  Malformed input degrades to an empty header with
the whole text as body, and the ``*_with_warnings`` variant reports what
was skipped on a side channel.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import structlog

from crosstrain.domain.outcome import Outcome
from crosstrain.domain.values import coerce_scalar, render_scalar

logger = structlog.get_logger(__name__)

HeaderTree = dict[str, Any]

DELIMITER = "---"
COMMENT_MARKER = "#"
_INDENT = "  "


@dataclass(frozen=True)
class ParsedDocument:
    """A document split into its parsed header and raw body."""

    header: HeaderTree = field(default_factory=dict)
    body: str = ""


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _trim_blank_lines(text: str) -> str:
    """Drop leading and trailing whitespace-only lines."""
    lines = text.split("\n")
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return "\n".join(lines[start:end])


def _split_document(text: str) -> tuple[list[str], str] | None:
    """Return ``(header_lines, body)`` or None when no header block is present."""
    lines = text.split("\n")
    if not lines or lines[0].strip() != DELIMITER:
        return None
    for idx in range(1, len(lines)):
        if lines[idx].strip() == DELIMITER:
            return lines[1:idx], _trim_blank_lines("\n".join(lines[idx + 1 :]))
    return None


def parse_header(lines: list[str], warnings: list[str] | None = None) -> HeaderTree:
    """Parse header lines into a nested tree using an indentation stack.

    Each stack frame is ``(tree, indent)``.  A line pops every frame
    indented at least as deep as itself, then writes into the frame left
    on top.  A ``key:`` line with no value opens a nested tree that
    deeper lines fill in.
    """
    sink = warnings if warnings is not None else []
    root: HeaderTree = {}
    stack: list[tuple[HeaderTree, int]] = [(root, -1)]

    for lineno, line in enumerate(lines, start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith(COMMENT_MARKER):
            continue

        indent = len(line) - len(line.lstrip())
        while len(stack) > 1 and stack[-1][1] >= indent:
            stack.pop()
        target = stack[-1][0]

        key, sep, raw_value = stripped.partition(":")
        key = key.strip()
        if not sep or not key:
            sink.append(f"header line {lineno}: no 'key: value' pair, skipped")
            continue

        if key in target:
            sink.append(f"header line {lineno}: duplicate key {key!r} overrides earlier value")

        raw_value = raw_value.strip()
        if raw_value:
            target[key] = coerce_scalar(raw_value)
        else:
            nested: HeaderTree = {}
            target[key] = nested
            stack.append((nested, indent))

    return root


def parse_document_with_warnings(text: str) -> Outcome[ParsedDocument]:
    """Parse *text* into header and body, reporting anything skipped."""
    warnings: list[str] = []
    normalized = text.replace("\r\n", "\n")
    fallback = ParsedDocument(header={}, body=_trim_blank_lines(normalized))

    try:
        split = _split_document(normalized)
        if split is None:
            if fallback.body.split("\n", 1)[0].strip() == DELIMITER:
                warnings.append("header block is misplaced or not closed; treating text as body")
            return Outcome(fallback, warnings)
        header_lines, body = split
        header = parse_header(header_lines, warnings)
    except Exception as exc:  # noqa: BLE001
        logger.warning("header parse failed", error=str(exc))
        warnings.append(f"header could not be parsed: {exc}")
        return Outcome(fallback, warnings)

    if warnings:
        logger.debug("header parsed with warnings", count=len(warnings))
    return Outcome(ParsedDocument(header=header, body=body), warnings)


def parse_document(text: str) -> ParsedDocument:
    """Parse *text* into a :class:`ParsedDocument`.  Never raises."""
    return parse_document_with_warnings(text).value


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _check_key(key: str) -> None:
    if (
        not key
        or key != key.strip()
        or ":" in key
        or "\n" in key
        or "\r" in key
        or key.startswith(COMMENT_MARKER)
    ):
        raise ValueError(f"cannot render header key {key!r}")


def _render_lines(tree: HeaderTree, depth: int) -> list[str]:
    prefix = _INDENT * depth
    lines: list[str] = []
    for key, value in tree.items():
        _check_key(key)
        if isinstance(value, dict):
            lines.append(f"{prefix}{key}:")
            lines.extend(_render_lines(value, depth + 1))
        elif isinstance(value, (list, tuple)):
            items = ", ".join(render_scalar(item, in_list=True) for item in value)
            lines.append(f"{prefix}{key}: [{items}]")
        else:
            lines.append(f"{prefix}{key}: {render_scalar(value)}")
    return lines


def render_header(header: HeaderTree) -> str:
    """Render a header tree, two spaces of indent per nesting level.

    Raises ValueError for keys that would not read back as the same key
    (empty, padded, containing a colon or line break, or starting with
    ``#``) and for values :func:`render_scalar` rejects.
    """
    return "\n".join(_render_lines(header, 0))


def serialize_document(header: HeaderTree, body: str) -> str:
    """Render *header* and *body* as canonical document text.

    The caller drops unset fields beforehand; ``None`` values that remain
    render as ``null``.  ``parse_document`` reads the result back to the
    same header and body.
    """
    return f"{DELIMITER}\n{render_header(header)}\n{DELIMITER}\n\n{body}"


def drop_unset(header: HeaderTree) -> HeaderTree:
    """Return a copy of *header* without ``None`` values, at every depth."""
    cleaned: HeaderTree = {}
    for key, value in header.items():
        if value is None:
            continue
        cleaned[key] = drop_unset(value) if isinstance(value, dict) else value
    return cleaned
