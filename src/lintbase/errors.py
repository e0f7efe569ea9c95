# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy raised by the baseline engine and its collaborators."""

from __future__ import annotations

from pathlib import Path


class LintbaseError(RuntimeError):
    """Base class for every error surfaced to the CLI as a fatal abort."""


class ConfigError(LintbaseError):
    """Raised when configuration input is invalid."""


class BaselineParseError(LintbaseError):
    """Raised when a persisted baseline cannot be decoded."""


class ToolExecutionError(LintbaseError):
    """Raised when the external lint tool fails to execute.

    Attributes:
        returncode: Exit status reported by the tool, ``None`` when it never ran.
        stderr: Captured standard error text, possibly empty.
    """

    def __init__(self, message: str, *, returncode: int | None = None, stderr: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class ProviderExecutionError(ToolExecutionError):
    """Raised when a plain diagnostics run fails or emits an unreadable report."""


class FixerExecutionError(ToolExecutionError):
    """Raised when the fix-mode invocation of the lint tool fails."""


class FileIOError(LintbaseError):
    """Raised when a source file cannot be read or written during protection."""

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"Unable to update {path}: {cause}")
        self.path = path
        self.cause = cause


__all__ = [
    "BaselineParseError",
    "ConfigError",
    "FileIOError",
    "FixerExecutionError",
    "LintbaseError",
    "ProviderExecutionError",
    "ToolExecutionError",
]
