# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI command removing protection markers left by an interrupted fix."""

from __future__ import annotations

from pathlib import Path

import typer

from ..baseline.store import read_baseline
from ..config import load_config
from ..errors import LintbaseError
from ..logging import configure_logging, fail, ok, warn
from ..recovery import strip_stray_markers
from .options import (
    BASELINE_OPTION,
    COLOR_OPTION,
    CONFIG_OPTION,
    EMOJI_OPTION,
    FILES_ARGUMENT,
    ROOT_OPTION,
    VERBOSE_OPTION,
)


def recover(
    files: FILES_ARGUMENT = None,
    root: ROOT_OPTION = Path("."),
    baseline: BASELINE_OPTION = None,
    config: CONFIG_OPTION = None,
    color: COLOR_OPTION = True,
    emoji: EMOJI_OPTION = True,
    verbose: VERBOSE_OPTION = False,
) -> None:
    """Strip leftover protection markers from source files."""
    configure_logging(verbose=verbose)
    resolved_root = root.expanduser().resolve()
    try:
        config_file = config.expanduser().resolve() if config is not None else None
        baseline_file = baseline.expanduser().resolve() if baseline is not None else None
        settings = load_config(resolved_root, config_file=config_file).with_overrides(baseline_file=baseline_file)
        if files:
            candidates = [path.expanduser().resolve() for path in files]
        else:
            candidates = read_baseline(settings.baseline_path(resolved_root), root=resolved_root).files()
        result = strip_stray_markers(candidates, settings.marker_prefix)
    except LintbaseError as exc:
        fail(str(exc), use_emoji=emoji, use_color=color)
        raise typer.Exit(code=1) from exc

    if not result.repaired:
        ok("No leftover protection markers found", use_emoji=emoji, use_color=color)
        raise typer.Exit(code=0)
    for path, removed in result.repaired.items():
        warn(f"Removed {removed} marker line(s) from {path}", use_emoji=emoji, use_color=color)
    raise typer.Exit(code=0)


__all__ = ["recover"]
