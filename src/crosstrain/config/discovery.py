"""Settings file discovery.

Walk-up finder locates the project whose ``.opencode`` tree carries a
crosstrain settings file, similar to how git finds .git/.  Supports a
CROSSTRAIN_CONFIG override read from the caller's environment snapshot.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

SETTINGS_FILENAME = "settings.json"
SETTINGS_DIR = Path(".opencode") / "plugin" / "crosstrain"
CONFIG_ENV_VAR = "CROSSTRAIN_CONFIG"

CLAUDE_SETTINGS_FILES = ("settings.json", "settings.local.json")


def settings_path(directory: Path) -> Path:
    """Return ``<directory>/.opencode/plugin/crosstrain/settings.json``."""
    return directory / SETTINGS_DIR / SETTINGS_FILENAME


def find_settings(
    start: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path | None:
    """Walk up from *start* (default: cwd) looking for the settings file.

    Returns the path to the settings file, or None if not found.
    Checks CROSSTRAIN_CONFIG in *environ* first.
    """
    env_path = (environ or {}).get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = settings_path(current)
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def project_root(settings_file: Path) -> Path:
    """Project directory owning *settings_file* (three levels above its folder)."""
    return settings_file.parent.parent.parent.parent


def claude_settings_files(claude_dir: Path) -> list[Path]:
    """Claude settings files in *claude_dir*, lowest precedence first."""
    return [claude_dir / name for name in CLAUDE_SETTINGS_FILES]
