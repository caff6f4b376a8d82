"""Tests for settings file discovery."""

from pathlib import Path

from crosstrain.config.discovery import (
    CONFIG_ENV_VAR,
    claude_settings_files,
    find_settings,
    project_root,
    settings_path,
)


class TestFindSettings:
    def test_finds_in_current_dir(self, project: Path) -> None:
        settings = settings_path(project)
        settings.write_text("{}")
        assert find_settings(project) == settings.resolve()

    def test_walks_up(self, project: Path) -> None:
        settings = settings_path(project)
        settings.write_text("{}")
        child = project / "a" / "b" / "c"
        child.mkdir(parents=True)
        assert find_settings(child) == settings.resolve()

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        child = tmp_path / "empty"
        child.mkdir()
        assert find_settings(child, {}) is None

    def test_env_override(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom.json"
        custom.write_text("{}")
        assert find_settings(tmp_path, {CONFIG_ENV_VAR: str(custom)}) == custom

    def test_env_override_missing_file(self, tmp_path: Path) -> None:
        assert find_settings(tmp_path, {CONFIG_ENV_VAR: str(tmp_path / "nope.json")}) is None


class TestPaths:
    def test_project_root_inverts_settings_path(self, project: Path) -> None:
        assert project_root(settings_path(project)) == project

    def test_claude_settings_order(self, tmp_path: Path) -> None:
        files = claude_settings_files(tmp_path / ".claude")
        assert [f.name for f in files] == ["settings.json", "settings.local.json"]
