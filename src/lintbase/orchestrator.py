# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""State machine sequencing baseline creation, evaluation and protected fixing."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Final

from .baseline.matcher import Classification, classify
from .baseline.store import create, read_baseline, write_baseline
from .errors import BaselineParseError, FileIOError, FixerExecutionError, ProviderExecutionError
from .models import Baseline, Diagnostic
from .protection import Fixer, run_protected_fix
from .provider import DiagnosticsProvider
from .recovery import RecoveryResult, strip_stray_markers

LOGGER = logging.getLogger(__name__)

EXIT_SUCCESS: Final[int] = 0
EXIT_FAILURE: Final[int] = 1


class RunState(str, Enum):
    """States visited by a single run."""

    NO_BASELINE = "no-baseline"
    CREATE_BASELINE = "create-baseline"
    HAS_BASELINE = "has-baseline"
    EVALUATE = "evaluate"
    CLASSIFY = "classify"
    PROTECT_AND_FIX = "protect-and-fix"
    RECLASSIFY = "reclassify"
    REPORT = "report"
    ABORTED = "aborted"


@dataclass(slots=True)
class RunOutcome:
    """Everything the CLI needs to report a finished run."""

    states: list[RunState] = field(default_factory=list)
    new: list[Diagnostic] = field(default_factory=list)
    baselined: list[Diagnostic] = field(default_factory=list)
    baseline: Baseline | None = None
    error: str | None = None
    stderr: str = ""
    warnings: list[str] = field(default_factory=list)
    recovery: RecoveryResult | None = None

    @property
    def state(self) -> RunState:
        """Return the terminal state reached by the run."""

        return self.states[-1]

    @property
    def exit_code(self) -> int:
        """Return the process exit status for the run."""

        if self.state is RunState.REPORT and not self.new:
            return EXIT_SUCCESS
        return EXIT_FAILURE

    def enter(self, state: RunState) -> None:
        LOGGER.debug("entering state %s", state.value)
        self.states.append(state)


@dataclass(slots=True)
class BaselineRunner:
    """Drive one run of the baseline workflow.

    Attributes:
        root: Project root anchoring relative paths in the baseline file.
        baseline_path: Location of the baseline file.
        provider: Diagnostics provider; consulted once per evaluation.
        fixer: Fixer used when ``fix`` is requested.
        fix: ``True`` to run a protected fix when new diagnostics exist.
        comment: Disable-comment prefix for protection markers.
        marker_prefix: Prefix of protection marker tokens.
        recover: ``True`` to strip stray markers before evaluating.
    """

    root: Path
    baseline_path: Path
    provider: DiagnosticsProvider
    fixer: Fixer
    comment: str
    marker_prefix: str
    fix: bool = False
    recover: bool = True

    def run(self) -> RunOutcome:
        """Execute the run and return its outcome; never raises for expected failures."""

        outcome = RunOutcome()
        if not self.baseline_path.exists():
            outcome.enter(RunState.NO_BASELINE)
            return self._create(outcome)

        outcome.enter(RunState.HAS_BASELINE)
        try:
            baseline = read_baseline(self.baseline_path, root=self.root)
        except BaselineParseError as exc:
            return self._abort(outcome, str(exc))
        outcome.baseline = baseline

        if self.recover:
            try:
                outcome.recovery = strip_stray_markers(baseline.files(), self.marker_prefix)
            except FileIOError as exc:
                return self._abort(outcome, str(exc))

        outcome.enter(RunState.EVALUATE)
        try:
            diagnostics = self.provider.collect()
        except ProviderExecutionError as exc:
            return self._abort(outcome, str(exc), stderr=exc.stderr)

        outcome.enter(RunState.CLASSIFY)
        classification = classify(diagnostics, baseline)

        if self.fix and classification.new:
            outcome.enter(RunState.PROTECT_AND_FIX)
            try:
                run_protected_fix(
                    classification.baselined,
                    self.fixer,
                    comment=self.comment,
                    marker_prefix=self.marker_prefix,
                )
            except FixerExecutionError as exc:
                LOGGER.warning("fixer failed: %s", exc)
                outcome.warnings.append(f"Fix run failed: {exc}")
                outcome.stderr = exc.stderr
            except FileIOError as exc:
                return self._abort(outcome, str(exc))

            outcome.enter(RunState.RECLASSIFY)
            classification = self._reclassify(outcome, baseline, classification)

        return self._report(outcome, classification)

    def _create(self, outcome: RunOutcome) -> RunOutcome:
        try:
            diagnostics = self.provider.collect()
        except ProviderExecutionError as exc:
            return self._abort(outcome, str(exc), stderr=exc.stderr)
        baseline = create(diagnostics)
        try:
            write_baseline(self.baseline_path, baseline, root=self.root)
        except OSError as exc:
            return self._abort(outcome, str(FileIOError(self.baseline_path, exc)))
        outcome.baseline = baseline
        outcome.enter(RunState.CREATE_BASELINE)
        return outcome

    def _reclassify(self, outcome: RunOutcome, baseline: Baseline, previous: Classification) -> Classification:
        try:
            diagnostics = self.provider.collect()
        except ProviderExecutionError as exc:
            LOGGER.warning("diagnostics run after fixing failed: %s", exc)
            outcome.warnings.append(f"Re-running diagnostics after the fix failed, reporting pre-fix results: {exc}")
            outcome.stderr = exc.stderr
            return previous
        return classify(diagnostics, baseline)

    @staticmethod
    def _report(outcome: RunOutcome, classification: Classification) -> RunOutcome:
        outcome.new = classification.new
        outcome.baselined = classification.baselined
        outcome.enter(RunState.REPORT)
        return outcome

    @staticmethod
    def _abort(outcome: RunOutcome, error: str, *, stderr: str = "") -> RunOutcome:
        outcome.error = error
        outcome.stderr = stderr
        outcome.enter(RunState.ABORTED)
        return outcome


__all__ = ["BaselineRunner", "EXIT_FAILURE", "EXIT_SUCCESS", "RunOutcome", "RunState"]
