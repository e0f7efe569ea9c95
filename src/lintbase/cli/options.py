# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Data structures for the lintbase CLI commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer

ROOT_OPTION = Annotated[
    Path,
    typer.Option("--root", "-r", help="Project root the lint tool runs in."),
]
FIX_OPTION = Annotated[
    bool,
    typer.Option("--fix", help="Apply automatic fixes while shielding baselined issues."),
]
BASELINE_OPTION = Annotated[
    Path | None,
    typer.Option("--baseline", "-b", help="Baseline file (defaults to the configured name in the root)."),
]
CONFIG_OPTION = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="TOML configuration file overriding [tool.lintbase]."),
]
RECOVER_OPTION = Annotated[
    bool | None,
    typer.Option("--recover/--no-recover", help="Strip leftover protection markers before evaluating."),
]
COLOR_OPTION = Annotated[
    bool,
    typer.Option("--color/--no-color", help="Colourise console output."),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Decorate console output with emoji."),
]
VERBOSE_OPTION = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Emit debug logging."),
]
FILES_ARGUMENT = Annotated[
    list[Path] | None,
    typer.Argument(help="Files to scan instead of those referenced by the baseline."),
]

# Arguments the command does not recognise are forwarded to the lint tool.
FORWARDING_CONTEXT: dict[str, bool] = {"allow_extra_args": True, "ignore_unknown_options": True}


@dataclass(slots=True)
class CheckCLIOptions:
    """Normalised CLI inputs for the ``check`` command."""

    root: Path
    fix: bool
    baseline: Path | None
    config: Path | None
    recover: bool | None
    lint_args: tuple[str, ...]
    use_color: bool
    use_emoji: bool


def build_check_options(
    *,
    root: Path,
    fix: bool,
    baseline: Path | None,
    config: Path | None,
    recover: bool | None,
    lint_args: list[str],
    color: bool,
    emoji: bool,
) -> CheckCLIOptions:
    """Construct ``CheckCLIOptions`` from Typer parameters."""

    resolved_root = root.expanduser().resolve()
    resolved_baseline = None
    if baseline is not None:
        candidate = baseline.expanduser()
        resolved_baseline = candidate if candidate.is_absolute() else (Path.cwd() / candidate).resolve()
    return CheckCLIOptions(
        root=resolved_root,
        fix=fix,
        baseline=resolved_baseline,
        config=config.expanduser().resolve() if config is not None else None,
        recover=recover,
        lint_args=tuple(lint_args),
        use_color=color,
        use_emoji=emoji,
    )


__all__ = [
    "BASELINE_OPTION",
    "COLOR_OPTION",
    "CONFIG_OPTION",
    "CheckCLIOptions",
    "EMOJI_OPTION",
    "FILES_ARGUMENT",
    "FIX_OPTION",
    "FORWARDING_CONTEXT",
    "RECOVER_OPTION",
    "ROOT_OPTION",
    "VERBOSE_OPTION",
    "build_check_options",
]
