# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run the external lint tool for diagnostics and for fixing."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from subprocess import CompletedProcess  # nosec B404
from typing import Final, Protocol

from .config import BaselineConfig
from .errors import FixerExecutionError, ProviderExecutionError
from .models import Diagnostic
from .parsers import ReportFormatError, parse_eslint
from .process_utils import CommandRunner, run_command

LOGGER = logging.getLogger(__name__)

EXIT_CLEAN: Final[int] = 0
EXIT_FINDINGS: Final[int] = 1
_ACCEPTED_EXIT_CODES: Final[frozenset[int]] = frozenset({EXIT_CLEAN, EXIT_FINDINGS})


class DiagnosticsProvider(Protocol):
    """Collaborator producing a fresh, ordered diagnostic list."""

    def collect(self) -> list[Diagnostic]:
        """Return diagnostics or raise :class:`ProviderExecutionError`."""


def strip_flag(args: Sequence[str], flag: str) -> list[str]:
    """Return ``args`` without any occurrence of ``flag``."""

    return [arg for arg in args if arg != flag]


@dataclass(slots=True)
class LintToolProvider:
    """Drive a lint tool that reports ESLint-style JSON.

    The same instance serves as the diagnostics provider and as the fixer. The
    fix flag is always removed from the forwarded arguments, so a diagnostics
    run never modifies files.

    Attributes:
        root: Working directory for the tool and anchor for relative paths.
        command: Executable and leading arguments, e.g. ``("npx", "eslint")``.
        args: Arguments forwarded from the command line.
        report_args: Arguments selecting the JSON report format.
        fix_flag: Flag switching the tool into fix mode.
        timeout: Optional per-invocation timeout in seconds.
        runner: Callable executing a command and returning the completed process.
    """

    root: Path
    command: Sequence[str] = ("npx", "eslint")
    args: Sequence[str] = ()
    report_args: Sequence[str] = ("--format", "json")
    fix_flag: str = "--fix"
    timeout: float | None = None
    runner: CommandRunner = field(default=run_command)

    @classmethod
    def from_config(
        cls,
        config: BaselineConfig,
        *,
        root: Path,
        args: Sequence[str] = (),
        runner: CommandRunner | None = None,
    ) -> LintToolProvider:
        """Build a provider from ``config`` with ``args`` forwarded to the tool."""

        return cls(
            root=root,
            command=tuple(config.command),
            args=tuple(args),
            report_args=tuple(config.report_args),
            fix_flag=config.fix_flag,
            timeout=config.timeout,
            runner=runner or run_command,
        )

    @property
    def forwarded_args(self) -> list[str]:
        """Arguments forwarded to every invocation, minus the fix flag."""

        return strip_flag(self.args, self.fix_flag)

    def report_command(self) -> list[str]:
        """Return the command producing a JSON report."""

        return [*self.command, *self.report_args, *self.forwarded_args]

    def fix_command(self) -> list[str]:
        """Return the command applying automatic fixes."""

        return [*self.command, self.fix_flag, *self.forwarded_args]

    def collect(self) -> list[Diagnostic]:
        """Run the tool and parse its report.

        Returns:
            list[Diagnostic]: Diagnostics in report order.

        Raises:
            ProviderExecutionError: If the tool could not run, exited with a
                status other than 0 or 1, or produced an unreadable report.
        """

        completed = self._run(self.report_command(), ProviderExecutionError)
        stderr = completed.stderr or ""
        if completed.returncode not in _ACCEPTED_EXIT_CODES:
            raise ProviderExecutionError(
                f"{self.command[0]} exited with status {completed.returncode}",
                returncode=completed.returncode,
                stderr=stderr,
            )
        if stderr.strip():
            LOGGER.debug("lint tool stderr: %s", stderr.strip())
        stdout = completed.stdout or ""
        if not stdout.strip():
            raise ProviderExecutionError(
                f"{self.command[0]} produced no report",
                returncode=completed.returncode,
                stderr=stderr,
            )
        try:
            diagnostics = parse_eslint(json.loads(stdout), root=self.root)
        except (json.JSONDecodeError, ReportFormatError) as exc:
            raise ProviderExecutionError(
                f"Unable to parse {self.command[0]} report: {exc}",
                returncode=completed.returncode,
                stderr=stderr,
            ) from exc
        LOGGER.debug("collected %d diagnostics", len(diagnostics))
        return diagnostics

    def fix(self) -> None:
        """Run the tool in fix mode.

        Exit status 1 only means unfixable findings remain and is accepted.

        Raises:
            FixerExecutionError: If the tool could not run or failed.
        """

        completed = self._run(self.fix_command(), FixerExecutionError)
        if completed.returncode not in _ACCEPTED_EXIT_CODES:
            raise FixerExecutionError(
                f"{self.command[0]} {self.fix_flag} exited with status {completed.returncode}",
                returncode=completed.returncode,
                stderr=completed.stderr or "",
            )

    def _run(
        self,
        command: list[str],
        error_type: type[ProviderExecutionError] | type[FixerExecutionError],
    ) -> CompletedProcess[str]:
        LOGGER.debug("running %s", " ".join(command))
        try:
            return self.runner(command, cwd=self.root, timeout=self.timeout)
        except (FileNotFoundError, PermissionError) as exc:
            raise error_type(f"Unable to run {command[0]}: {exc}") from exc


__all__ = ["DiagnosticsProvider", "LintToolProvider", "strip_flag"]
