# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from lintbase.config import BaselineConfig, load_config
from lintbase.errors import ConfigError


def test_defaults_without_pyproject(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config == BaselineConfig()
    assert config.baseline_path(tmp_path) == tmp_path / ".eslint-baseline.json"
    assert config.command == ("npx", "eslint")


def test_pyproject_section_is_applied(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        '[tool.lintbase]\nbaseline-file = "lint/baseline.json"\ncommand = ["yarn", "eslint"]\nrecover_markers = false\n',
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.baseline_path(tmp_path) == tmp_path / "lint" / "baseline.json"
    assert config.command == ("yarn", "eslint")
    assert config.recover_markers is False


def test_explicit_config_file_is_a_plain_table(tmp_path: Path) -> None:
    explicit = tmp_path / "lintbase.toml"
    explicit.write_text('marker_prefix = "-- __TEMP__"\ntimeout = 12.5\n', encoding="utf-8")

    config = load_config(tmp_path, config_file=explicit)

    assert config.marker_prefix == "-- __TEMP__"
    assert config.timeout == 12.5


@pytest.mark.parametrize(
    "content",
    [
        "[tool.lintbase]\nunknown = 1\n",
        "[tool.lintbase]\ncommand = []\n",
        '[tool.lintbase]\nmarker_prefix = "  "\n',
        "[tool.lintbase\n",
    ],
)
def test_invalid_configuration_raises(tmp_path: Path, content: str) -> None:
    (tmp_path / "pyproject.toml").write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_missing_explicit_config_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(tmp_path, config_file=tmp_path / "absent.toml")


def test_overrides_skip_none_and_validate(tmp_path: Path) -> None:
    config = BaselineConfig()

    assert config.with_overrides(baseline_file=None) is config
    assert config.with_overrides(recover_markers=False).recover_markers is False
    with pytest.raises(ConfigError):
        config.with_overrides(timeout=-1)
