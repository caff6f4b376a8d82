"""Scalar coercion and rendering for header values.

``coerce_scalar`` turns a raw header token into a typed value and
``render_scalar`` does the reverse, quoting a string only when its bare
form would read back as something else.

Inline lists are flat: ``[a, [b, c]]`` yields ``["a", "[b, c]"]``.  Nested
brackets inside a list are kept as plain strings, never structured.
"""

from __future__ import annotations

import math
import re
from typing import Any

Scalar = str | int | float | bool | None

_NUMBER_RE = re.compile(r"-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][-+]?[0-9]+)?")
_QUOTES = ('"', "'")
_KEYWORDS: dict[str, Scalar] = {
    "true": True,
    "false": False,
    "null": None,
    "~": None,
}


def _is_quoted(token: str) -> bool:
    return len(token) >= 2 and token[0] in _QUOTES and token[-1] == token[0]


def _coerce_number(token: str) -> int | float | None:
    if not _NUMBER_RE.fullmatch(token):
        return None
    if any(ch in token for ch in ".eE"):
        value = float(token)
        return value if math.isfinite(value) else None
    try:
        return int(token)
    except ValueError:
        # longer than the interpreter's int string conversion limit
        return None


def _closes_item(rest: str) -> bool:
    stripped = rest.lstrip()
    return not stripped or stripped[0] == ","


def _split_items(interior: str) -> list[str]:
    """Split an inline-list interior on commas outside quotes and brackets.

    A quote opens only at the start of an item and closes only where the
    item ends, so quote characters inside a quoted item are kept.
    """
    items: list[str] = []
    buf: list[str] = []
    depth = 0
    quote: str | None = None
    for i, ch in enumerate(interior):
        if quote:
            if ch == quote and _closes_item(interior[i + 1 :]):
                quote = None
        elif ch in _QUOTES and not "".join(buf).strip():
            quote = ch
        elif ch == "[":
            depth += 1
        elif ch == "]" and depth:
            depth -= 1
        elif ch == "," and depth == 0:
            items.append("".join(buf).strip())
            buf = []
            continue
        buf.append(ch)
    items.append("".join(buf).strip())
    return items


def _coerce(token: str, *, allow_list: bool) -> Any:
    if _is_quoted(token):
        return token[1:-1]
    if token in _KEYWORDS:
        return _KEYWORDS[token]
    number = _coerce_number(token)
    if number is not None:
        return number
    if allow_list and token.startswith("[") and token.endswith("]"):
        interior = token[1:-1].strip()
        if not interior:
            return []
        return [_coerce(item, allow_list=False) for item in _split_items(interior)]
    return token


def coerce_scalar(token: str) -> Any:
    """Coerce a trimmed header token into a typed value.

    Rules are tried in order: quoted string, boolean, null, number,
    inline list, plain string.  Never raises.
    """
    return _coerce(token, allow_list=True)


def needs_quotes(value: str, *, in_list: bool = False) -> bool:
    """Return True if *value* must be quoted to read back unchanged."""
    if ":" in value or value != value.strip() or not value:
        return True
    if in_list and any(ch in value for ch in ",[]"):
        return True
    if value[0] in _QUOTES:
        return True
    return _coerce(value, allow_list=not in_list) != value


def _list_quote(text: str) -> str:
    for quote in ('"', "'"):
        if not re.search(re.escape(quote) + r"\s*,", text):
            return quote
    return ""


def _reads_back_bare(text: str) -> bool:
    return (
        text == text.strip()
        and _split_items(f"{text}, _") == [text, "_"]
        and _coerce(text, allow_list=False) == text
    )


def render_scalar(value: Any, *, in_list: bool = False) -> str:
    """Render a scalar as a header literal.

    List items holding a quote followed by a comma take the other quote
    character.  Raises ValueError for values the header format cannot
    carry: non-finite floats, strings spanning several lines, and list
    items that neither quote character nor bare text can protect.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"cannot render non-finite number {value!r}")
    if isinstance(value, (int, float)):
        return repr(value)
    text = str(value)
    if "\n" in text or "\r" in text:
        raise ValueError(f"cannot render multi-line string {text!r}")
    if not needs_quotes(text, in_list=in_list):
        return text
    if not in_list:
        return f'"{text}"'
    quote = _list_quote(text)
    if quote:
        return f"{quote}{text}{quote}"
    if _reads_back_bare(text):
        return text
    raise ValueError(f"cannot quote list item {text!r}")
