"""Tests for applying resolved mappings to assets."""

from crosstrain.config import apply_model_mapping, apply_tool_mapping, should_include_asset
from crosstrain.config.models import CrosstrainConfig


class TestShouldIncludeAsset:
    def test_no_filters(self) -> None:
        assert should_include_asset("a") is True

    def test_include_wins(self) -> None:
        assert should_include_asset("a", include=["a"], exclude=["a"]) is True
        assert should_include_asset("b", include=["a"]) is False

    def test_exclude(self) -> None:
        assert should_include_asset("a", exclude=["a"]) is False
        assert should_include_asset("b", exclude=["a"]) is True


class TestModelMapping:
    def test_known_alias(self) -> None:
        config = CrosstrainConfig()
        assert apply_model_mapping("opus", config) == config.model_mappings["opus"]

    def test_unknown_passes_through(self) -> None:
        assert apply_model_mapping("custom/model", CrosstrainConfig()) == "custom/model"

    def test_inherit_maps_to_empty(self) -> None:
        assert apply_model_mapping("inherit", CrosstrainConfig()) == ""

    def test_missing_model(self) -> None:
        assert apply_model_mapping(None, CrosstrainConfig()) is None
        assert apply_model_mapping("", CrosstrainConfig()) is None


class TestToolMapping:
    def test_from_config(self) -> None:
        assert apply_tool_mapping(["Read", "Bash", "Custom"], CrosstrainConfig()) == [
            "read",
            "bash",
            "Custom",
        ]

    def test_from_plain_mapping(self) -> None:
        assert apply_tool_mapping(["Read"], {"Read": "view"}) == ["view"]

    def test_empty_tools(self) -> None:
        assert apply_tool_mapping([], CrosstrainConfig()) is None
        assert apply_tool_mapping(None, {}) is None
