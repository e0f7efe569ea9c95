# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration model and TOML loading for lintbase."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError

DEFAULT_BASELINE_FILE: Final[str] = ".eslint-baseline.json"
DEFAULT_MARKER_PREFIX: Final[str] = "-- __BASELINE_TEMP__"
PYPROJECT_FILE: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "lintbase"


class BaselineConfig(BaseModel):
    """Settings controlling how the lint tool is driven and how markers look."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    baseline_file: Path = Path(DEFAULT_BASELINE_FILE)
    command: tuple[str, ...] = ("npx", "eslint")
    report_args: tuple[str, ...] = ("--format", "json")
    fix_flag: str = "--fix"
    disable_comment: str = "// eslint-disable-next-line"
    marker_prefix: str = DEFAULT_MARKER_PREFIX
    recover_markers: bool = True
    timeout: float | None = Field(default=None, gt=0)

    @field_validator("command")
    @classmethod
    def _require_command(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("command must name at least one executable")
        return value

    @field_validator("marker_prefix", "fix_flag", "disable_comment")
    @classmethod
    def _require_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("value must not be blank")
        return value

    def baseline_path(self, root: Path) -> Path:
        """Return the absolute baseline location for ``root``."""

        path = self.baseline_file.expanduser()
        return path if path.is_absolute() else root / path

    def with_overrides(self, **overrides: Any) -> BaselineConfig:
        """Return a copy with every non-``None`` override applied.

        Raises:
            ConfigError: If an override fails validation.
        """

        updates = {key: value for key, value in overrides.items() if value is not None}
        if not updates:
            return self
        try:
            return BaselineConfig.model_validate({**self.model_dump(), **updates})
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration override: {exc}") from exc


def _read_toml(path: Path) -> Mapping[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Unable to parse {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Unable to read {path}: {exc}") from exc


def _pyproject_section(data: Mapping[str, Any]) -> Mapping[str, Any]:
    tool_section = data.get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return {}
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if not isinstance(section, Mapping):
        return {}
    return section


def load_config(root: Path, *, config_file: Path | None = None) -> BaselineConfig:
    """Load configuration for ``root``.

    An explicit ``config_file`` is read as a plain TOML table (a
    ``pyproject.toml`` is unwrapped to its ``[tool.lintbase]`` section);
    otherwise ``[tool.lintbase]`` from ``root/pyproject.toml`` is used when
    present, falling back to built-in defaults.

    Args:
        root: Project root.
        config_file: Optional explicit configuration file.

    Returns:
        BaselineConfig: Validated configuration.

    Raises:
        ConfigError: If the file is unreadable or contains invalid settings.
    """

    payload: Mapping[str, Any] = {}
    if config_file is not None:
        if not config_file.is_file():
            raise ConfigError(f"Configuration file {config_file} does not exist")
        data = _read_toml(config_file)
        payload = _pyproject_section(data) if config_file.name == PYPROJECT_FILE else data
    else:
        pyproject = root / PYPROJECT_FILE
        if pyproject.is_file():
            payload = _pyproject_section(_read_toml(pyproject))
    normalised = {str(key).replace("-", "_"): value for key, value in payload.items()}
    try:
        return BaselineConfig.model_validate(normalised)
    except ValidationError as exc:
        raise ConfigError(f"Invalid lintbase configuration: {exc}") from exc


__all__ = ["BaselineConfig", "DEFAULT_BASELINE_FILE", "DEFAULT_MARKER_PREFIX", "load_config"]
