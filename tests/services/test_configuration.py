"""Tests for ConfigService."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from crosstrain.config.discovery import CONFIG_ENV_VAR, settings_path
from crosstrain.services.configuration import ConfigService

WriteJson = Callable[[Path, Any], Path]


class TestShow:
    def test_defaults(self, project: Path, home: Path) -> None:
        result = ConfigService({}, home=home).show(project)
        assert result.ok
        assert result.op == "show_config"
        assert result.data["directory"] == str(project)
        assert result.data["config"]["claude_dir"] == ".claude"
        assert result.data["config"]["loaders"]["mcp"] is True

    def test_options_and_environment(self, project: Path, home: Path) -> None:
        service = ConfigService({"CROSSTRAIN_WATCH": "0"}, home=home)
        result = service.show(project, {"filePrefix": "cc_"})
        assert result.data["config"]["watch"] is False
        assert result.data["config"]["file_prefix"] == "cc_"

    def test_discovers_project_from_cwd(
        self, project: Path, home: Path, write_json: WriteJson, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        write_json(settings_path(project), {"verbose": True})
        nested = project / "src" / "pkg"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        result = ConfigService({}, home=home).show()
        assert result.data["directory"] == str(project.resolve())
        assert result.data["config"]["verbose"] is True

    def test_env_settings_override(
        self, tmp_path: Path, home: Path, write_json: WriteJson, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        custom = write_json(tmp_path / "custom.json", {"filePrefix": "env_file_"})
        monkeypatch.chdir(tmp_path)
        result = ConfigService({CONFIG_ENV_VAR: str(custom)}, home=home).show()
        assert result.data["config"]["file_prefix"] == "env_file_"

    def test_resolution_warnings_passed_through(self, project: Path, home: Path) -> None:
        settings_path(project).write_text("{oops")
        result = ConfigService({}, home=home).show(project)
        assert result.ok
        assert result.warnings


class TestCheck:
    def test_clean(self, project: Path, home: Path) -> None:
        result = ConfigService({}, home=home).check(project)
        assert result.ok
        assert result.data["issues"] == []

    def test_issues_fail(self, project: Path, home: Path) -> None:
        options = {"filePrefix": "", "claudeDir": "../x"}
        result = ConfigService({}, home=home).check(project, options)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_CONFIG"
        assert len(result.data["issues"]) == 2

    def test_claude_settings_can_be_skipped(
        self, project: Path, home: Path, write_json: WriteJson
    ) -> None:
        write_json(project / ".claude" / "settings.json", {"enabledPlugins": {"p@ghost": True}})
        assert not ConfigService({}, home=home).check(project).ok
        assert ConfigService({}, home=home, include_claude_settings=False).check(project).ok
