"""Pydantic configuration models with code-baked defaults.

Sparse settings contract: defaults baked here, settings files and
environment variables only carry overrides.  Settings files use
camelCase JSON keys (``claudeDir``, ``openCodeDir``);
:func:`canonical_fragment` maps them onto field names before merging.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

DEFAULT_MODEL_MAPPING: dict[str, str] = {
    "sonnet": "anthropic/claude-sonnet-4-20250514",
    "opus": "anthropic/claude-opus-4-20250514",
    "haiku": "anthropic/claude-haiku-4-20250514",
    "inherit": "",
}

DEFAULT_TOOL_MAPPING: dict[str, str] = {
    "Read": "read",
    "Write": "write",
    "Edit": "edit",
    "Bash": "bash",
    "Grep": "grep",
    "Glob": "glob",
    "WebFetch": "webfetch",
}

_MODEL_CONFIG: dict[str, Any] = {
    "frozen": True,
    "alias_generator": to_camel,
    "validate_by_name": True,
    "validate_by_alias": True,
}


class LoaderToggles(BaseModel):
    """Which asset loaders run."""

    model_config = _MODEL_CONFIG

    skills: bool = True
    agents: bool = True
    commands: bool = True
    hooks: bool = True
    mcp: bool = True


class MarketplaceConfig(BaseModel):
    """A named plugin source (git URL, ``org/repo`` shorthand, or local path)."""

    model_config = _MODEL_CONFIG

    name: str
    source: str = ""
    enabled: bool = True
    ref: str | None = None


class PluginInstallConfig(BaseModel):
    """A plugin to install, identified by ``name@marketplace``."""

    model_config = _MODEL_CONFIG

    name: str
    marketplace: str = ""
    enabled: bool = True
    install_dir: str | None = None

    @property
    def key(self) -> str:
        return f"{self.name}@{self.marketplace}"


class CrosstrainConfig(BaseModel):
    """Fully resolved configuration.

    Every field carries a concrete value.  Instances come out of
    :func:`crosstrain.config.resolver.resolve_configuration` and are never
    modified afterwards.
    """

    model_config = _MODEL_CONFIG

    enabled: bool = True
    claude_dir: str = ".claude"
    opencode_dir: str = Field(default=".opencode", alias="openCodeDir")
    load_user_assets: bool = True
    load_user_settings: bool = True
    watch: bool = True
    file_prefix: str = "claude_"
    verbose: bool = False
    loaders: LoaderToggles = Field(default_factory=LoaderToggles)
    model_mappings: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_MODEL_MAPPING))
    tool_mappings: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_TOOL_MAPPING))
    marketplaces: list[MarketplaceConfig] = Field(default_factory=list)
    plugins: list[PluginInstallConfig] = Field(default_factory=list)


def default_fragment() -> dict[str, Any]:
    """Code defaults as a plain nested dict, the base of every resolution."""
    return CrosstrainConfig().model_dump()


# Fields holding nested models whose keys also need canonicalising.
_NESTED_MODELS: dict[str, type[BaseModel]] = {
    "loaders": LoaderToggles,
    "marketplaces": MarketplaceConfig,
    "plugins": PluginInstallConfig,
}


def _field_names(model: type[BaseModel]) -> dict[str, str]:
    names: dict[str, str] = {}
    for name, info in model.model_fields.items():
        names[name] = name
        if info.alias:
            names[info.alias] = name
    return names


def _canonical(model: type[BaseModel], data: Mapping[str, Any]) -> dict[str, Any]:
    names = _field_names(model)
    out: dict[str, Any] = {}
    for key, value in data.items():
        name = names.get(key, key)
        nested = _NESTED_MODELS.get(name) if model is CrosstrainConfig else None
        if nested is not None and isinstance(value, Mapping):
            value = _canonical(nested, value)
        elif nested is not None and isinstance(value, list):
            value = [_canonical(nested, v) if isinstance(v, Mapping) else v for v in value]
        out[name] = value
    return out


def canonical_fragment(fragment: Mapping[str, Any]) -> dict[str, Any]:
    """Rename camelCase keys to field names; unknown keys pass through."""
    return _canonical(CrosstrainConfig, fragment)
