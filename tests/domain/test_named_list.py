"""Tests for identity-keyed list merging."""

from crosstrain.domain.named_list import (
    by_name,
    by_name_and_marketplace,
    merge_entry,
    named_list_merge,
)


class TestNamedListMerge:
    def test_replaces_in_place_and_appends(self) -> None:
        base = [{"name": "m1", "source": "s1"}]
        override = [{"name": "m1", "source": "s2"}, {"name": "m2", "source": "s3"}]
        result = named_list_merge(base, override, by_name)
        assert result == [{"name": "m1", "source": "s2"}, {"name": "m2", "source": "s3"}]

    def test_keeps_original_position(self) -> None:
        base = [{"name": "a"}, {"name": "b"}, {"name": "c"}]
        result = named_list_merge(base, [{"name": "b", "enabled": False}], by_name)
        assert [e["name"] for e in result] == ["a", "b", "c"]
        assert result[1] == {"name": "b", "enabled": False}

    def test_absent_override_fields_fall_back(self) -> None:
        base = [{"name": "m1", "source": "s1", "ref": "main"}]
        result = named_list_merge(base, [{"name": "m1", "enabled": False}], by_name)
        assert result == [{"name": "m1", "source": "s1", "ref": "main", "enabled": False}]

    def test_none_override_field_falls_back(self) -> None:
        assert merge_entry({"name": "a", "ref": "v1"}, {"name": "a", "ref": None}) == {
            "name": "a",
            "ref": "v1",
        }

    def test_duplicates_within_override_collapse(self) -> None:
        result = named_list_merge(
            [], [{"name": "x", "source": "1"}, {"name": "x", "ref": "dev"}], by_name
        )
        assert result == [{"name": "x", "source": "1", "ref": "dev"}]

    def test_inputs_not_mutated(self) -> None:
        base = [{"name": "m1", "tags": ["a"]}]
        override = [{"name": "m1", "source": "s"}]
        result = named_list_merge(base, override, by_name)
        result[0]["tags"].append("b")
        assert base == [{"name": "m1", "tags": ["a"]}]
        assert override == [{"name": "m1", "source": "s"}]

    def test_entries_without_identity_are_appended(self) -> None:
        result = named_list_merge([{"source": "x"}], [{"source": "x"}], by_name)
        assert len(result) == 2

    def test_plugin_identity_includes_marketplace(self) -> None:
        base = [{"name": "lint", "marketplace": "a", "enabled": True}]
        override = [
            {"name": "lint", "marketplace": "b", "enabled": True},
            {"name": "lint", "marketplace": "a", "enabled": False},
        ]
        result = named_list_merge(base, override, by_name_and_marketplace)
        assert result == [
            {"name": "lint", "marketplace": "a", "enabled": False},
            {"name": "lint", "marketplace": "b", "enabled": True},
        ]

    def test_identities(self) -> None:
        assert by_name({"name": "m"}) == "m"
        assert by_name({"name": ""}) is None
        assert by_name_and_marketplace({"name": "p", "marketplace": "m"}) == "p@m"
        assert by_name_and_marketplace({"marketplace": "m"}) is None
