# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render run outcomes to the console."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from .logging import fail, info, ok, plain, section, warn
from .models import Diagnostic
from .orchestrator import RunOutcome, RunState


@dataclass(frozen=True, slots=True)
class ReportStyle:
    """Console presentation preferences."""

    use_color: bool = False
    use_emoji: bool = False


def format_diagnostic(diagnostic: Diagnostic) -> str:
    """Return the one-line report entry for ``diagnostic``."""

    line = "?" if diagnostic.line is None else diagnostic.line
    column = "?" if diagnostic.column is None else diagnostic.column
    return f" - {diagnostic.file}, line {line}:{column}, rule {diagnostic.rule_id}, {diagnostic.message}"


def render_new_diagnostics(diagnostics: Sequence[Diagnostic], style: ReportStyle) -> None:
    """Print the comparison section listing ``diagnostics``."""

    section("baseline compare results", use_color=style.use_color)
    plain(use_color=style.use_color)
    if not diagnostics:
        ok(" [OK] no issues found", use_emoji=style.use_emoji, use_color=style.use_color)
        return
    for diagnostic in diagnostics:
        plain(format_diagnostic(diagnostic), use_color=style.use_color)
    plain(use_color=style.use_color)
    fail(f" [fail] {len(diagnostics)} issues found !!!", use_emoji=style.use_emoji, use_color=style.use_color)


def render_outcome(outcome: RunOutcome, *, baseline_path: Path, style: ReportStyle) -> None:
    """Print ``outcome`` in the shape its terminal state calls for."""

    if outcome.recovery is not None:
        for path, removed in outcome.recovery.repaired.items():
            warn(
                f"Removed {removed} leftover protection marker line(s) from {path}",
                use_emoji=style.use_emoji,
                use_color=style.use_color,
            )

    if outcome.state is RunState.CREATE_BASELINE:
        accepted = outcome.baseline.total() if outcome.baseline is not None else 0
        warn(
            f"Baseline not found; created {baseline_path} accepting {accepted} issue(s)",
            use_emoji=style.use_emoji,
            use_color=style.use_color,
        )
        info("Run again to evaluate against the new baseline.", use_emoji=style.use_emoji, use_color=style.use_color)
        return

    if outcome.stderr.strip():
        for line in outcome.stderr.rstrip().splitlines():
            plain(line, use_color=style.use_color)

    if outcome.state is RunState.ABORTED:
        fail(f"Baseline run aborted: {outcome.error}", use_emoji=style.use_emoji, use_color=style.use_color)
        return

    for message in outcome.warnings:
        warn(message, use_emoji=style.use_emoji, use_color=style.use_color)
    render_new_diagnostics(outcome.new, style)


__all__ = ["ReportStyle", "format_diagnostic", "render_new_diagnostics", "render_outcome"]
