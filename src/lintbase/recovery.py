# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Repair source files left with markers by an interrupted protected fix."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .errors import FileIOError
from .protection import read_source, strip_marker_lines, write_source

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class RecoveryResult:
    """Files repaired by a recovery scan and the marker lines removed from each."""

    repaired: dict[Path, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        """Return the number of marker lines removed across all files."""

        return sum(self.repaired.values())


def scan_for_markers(paths: Iterable[Path], marker_prefix: str) -> list[Path]:
    """Return the files among ``paths`` containing ``marker_prefix``.

    Missing or unreadable files are skipped; they cannot hold stray markers
    that the lint tool would see.
    """

    found: list[Path] = []
    for path in paths:
        try:
            text = read_source(path)
        except OSError as exc:
            LOGGER.debug("skipping %s during marker scan: %s", path, exc)
            continue
        if marker_prefix in text:
            found.append(path)
    return found


def strip_stray_markers(paths: Iterable[Path], marker_prefix: str) -> RecoveryResult:
    """Remove every line containing ``marker_prefix`` from ``paths``.

    Args:
        paths: Candidate files, typically every file referenced by the baseline.
        marker_prefix: Prefix shared by all transaction tokens.

    Returns:
        RecoveryResult: Files that were rewritten.

    Raises:
        FileIOError: If a file holding markers cannot be rewritten.
    """

    result = RecoveryResult()
    for path in scan_for_markers(paths, marker_prefix):
        try:
            cleaned, removed = strip_marker_lines(read_source(path), marker_prefix)
            write_source(path, cleaned)
        except OSError as exc:
            raise FileIOError(path, exc) from exc
        LOGGER.debug("removed %d stray marker line(s) from %s", removed, path)
        result.repaired[path] = removed
    return result


__all__ = ["RecoveryResult", "scan_for_markers", "strip_stray_markers"]
