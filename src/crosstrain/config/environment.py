"""Environment-variable configuration layer.

Reads a snapshot mapping passed in by the caller (usually
``dict(os.environ)`` taken at the CLI boundary), never the live process
environment, so resolution stays a pure function of its inputs.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

ENV_PREFIX = "CROSSTRAIN_"

BOOL_VARS: dict[str, str] = {
    "CROSSTRAIN_ENABLED": "enabled",
    "CROSSTRAIN_VERBOSE": "verbose",
    "CROSSTRAIN_WATCH": "watch",
    "CROSSTRAIN_LOAD_USER_ASSETS": "load_user_assets",
    "CROSSTRAIN_LOAD_USER_SETTINGS": "load_user_settings",
}

STRING_VARS: dict[str, str] = {
    "CROSSTRAIN_CLAUDE_DIR": "claude_dir",
    "CROSSTRAIN_OPENCODE_DIR": "opencode_dir",
    "CROSSTRAIN_FILE_PREFIX": "file_prefix",
}

_FALSE_VALUES = frozenset({"false", "0"})


def env_flag(value: str) -> bool:
    """``"false"`` and ``"0"`` (any case, no padding) are False; anything else is True."""
    return value.lower() not in _FALSE_VALUES


def env_fragment(environ: Mapping[str, str]) -> dict[str, Any]:
    """Build a configuration fragment from an environment snapshot.

    Unset or empty variables leave their field out of the fragment
    entirely, so lower layers keep their values.
    """
    fragment: dict[str, Any] = {}
    for var, field in BOOL_VARS.items():
        value = environ.get(var)
        if value:
            fragment[field] = env_flag(value)
    for var, field in STRING_VARS.items():
        value = environ.get(var)
        if value:
            fragment[field] = value
    return fragment
