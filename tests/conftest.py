"""Shared pytest fixtures and test helpers for crosstrain tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from crosstrain.config.discovery import settings_path


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Temporary project directory with empty ``.claude`` and ``.opencode`` trees."""
    root = tmp_path / "project"
    (root / ".claude").mkdir(parents=True)
    settings_path(root).parent.mkdir(parents=True)
    return root


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """Fake home directory so user-level Claude settings never leak in."""
    path = tmp_path / "home"
    (path / ".claude").mkdir(parents=True)
    return path


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Strip CROSSTRAIN_* variables so the CLI's environment snapshot is predictable."""
    import os

    for name in list(os.environ):
        if name.startswith("CROSSTRAIN_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root and app logger state; the CLI reconfigures logging per invocation."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    app = logging.getLogger("crosstrain")
    app_level = app.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    app.setLevel(app_level)


def _write_json(path: Path, data: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def write_json() -> Callable[[Path, Any], Path]:
    """Write JSON to a path, creating parent directories."""
    return _write_json
