# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI command comparing lint results against the accepted baseline."""

from __future__ import annotations

from pathlib import Path

import typer

from ..config import load_config
from ..errors import ConfigError
from ..logging import configure_logging, fail
from ..orchestrator import BaselineRunner
from ..provider import LintToolProvider
from ..reporting import ReportStyle, render_outcome
from .options import (
    BASELINE_OPTION,
    COLOR_OPTION,
    CONFIG_OPTION,
    EMOJI_OPTION,
    FIX_OPTION,
    RECOVER_OPTION,
    ROOT_OPTION,
    VERBOSE_OPTION,
    build_check_options,
)


def check(
    ctx: typer.Context,
    root: ROOT_OPTION = Path("."),
    fix: FIX_OPTION = False,
    baseline: BASELINE_OPTION = None,
    config: CONFIG_OPTION = None,
    recover: RECOVER_OPTION = None,
    color: COLOR_OPTION = True,
    emoji: EMOJI_OPTION = True,
    verbose: VERBOSE_OPTION = False,
) -> None:
    """Report lint issues that are not covered by the baseline.

    Without a baseline file, one is created from the current findings and the
    command exits with status 1 so the new baseline is reviewed before use.
    Any unrecognised arguments, and everything after ``--``, are passed
    through to the lint tool.

    Raises:
        typer.Exit: Carrying the run's exit status, unless a subcommand such
            as ``recover`` was requested instead.
    """
    if ctx.invoked_subcommand is not None:
        return
    configure_logging(verbose=verbose)
    options = build_check_options(
        root=root,
        fix=fix,
        baseline=baseline,
        config=config,
        recover=recover,
        lint_args=list(ctx.args),
        color=color,
        emoji=emoji,
    )
    style = ReportStyle(use_color=options.use_color, use_emoji=options.use_emoji)

    try:
        settings = load_config(options.root, config_file=options.config).with_overrides(
            baseline_file=options.baseline,
            recover_markers=options.recover,
        )
    except ConfigError as exc:
        fail(str(exc), use_emoji=style.use_emoji, use_color=style.use_color)
        raise typer.Exit(code=1) from exc

    provider = LintToolProvider.from_config(settings, root=options.root, args=options.lint_args)
    baseline_path = settings.baseline_path(options.root)
    runner = BaselineRunner(
        root=options.root,
        baseline_path=baseline_path,
        provider=provider,
        fixer=provider,
        comment=settings.disable_comment,
        marker_prefix=settings.marker_prefix,
        fix=options.fix,
        recover=settings.recover_markers,
    )
    outcome = runner.run()
    render_outcome(outcome, baseline_path=baseline_path, style=style)
    raise typer.Exit(code=outcome.exit_code)


__all__ = ["check"]
