"""ConfigService — resolve and check a project's configuration."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from crosstrain.config.discovery import CONFIG_ENV_VAR, find_settings, project_root
from crosstrain.config.models import CrosstrainConfig
from crosstrain.config.sources import resolve_project_config
from crosstrain.config.validation import validate_config
from crosstrain.domain.outcome import Outcome
from crosstrain.services.result import ServiceError, ServiceResult


class ConfigService:
    """Resolve configuration for a project directory.

    *environ* is a snapshot of the process environment taken by the
    caller; the service never reads ``os.environ`` itself.
    """

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        *,
        home: Path | None = None,
        include_claude_settings: bool = True,
    ) -> None:
        self._environ = dict(environ or {})
        self._home = home
        self._include_claude_settings = include_claude_settings

    def _locate(self, directory: Path | None) -> tuple[Path, Path | None]:
        if directory is not None:
            return directory, None
        found = find_settings(Path.cwd(), self._environ)
        if found is None or CONFIG_ENV_VAR in self._environ:
            return Path.cwd(), found
        return project_root(found), found

    def _resolve(
        self, directory: Path | None, options: Mapping[str, Any] | None
    ) -> tuple[Path, Outcome[CrosstrainConfig]]:
        root, settings_file = self._locate(directory)
        outcome = asyncio.run(
            resolve_project_config(
                root,
                options,
                environ=self._environ,
                settings_file=settings_file,
                home=self._home,
                include_claude_settings=self._include_claude_settings,
            )
        )
        return root, outcome

    def show(
        self,
        directory: Path | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> ServiceResult:
        """Resolve and return the full configuration."""
        root, outcome = self._resolve(directory, options)
        return ServiceResult(
            ok=True,
            op="show_config",
            data={"directory": str(root), "config": outcome.value.model_dump(mode="json")},
            warnings=outcome.warnings,
        )

    def check(
        self,
        directory: Path | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> ServiceResult:
        """Resolve the configuration and run advisory validation.

        Fails when validation reports any issue.  Resolution warnings
        (missing files, skipped layers) are passed through but never fail
        the check.
        """
        root, outcome = self._resolve(directory, options)
        issues = validate_config(outcome.value)
        if issues:
            return ServiceResult(
                ok=False,
                op="check_config",
                data={"directory": str(root), "issues": issues},
                warnings=outcome.warnings,
                error=ServiceError(
                    code="INVALID_CONFIG",
                    message=f"{len(issues)} configuration issue(s)",
                    detail={"issues": issues},
                ),
            )
        return ServiceResult(
            ok=True,
            op="check_config",
            data={"directory": str(root), "issues": []},
            warnings=outcome.warnings,
        )
