# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shield baselined diagnostics from an automatic fixer.

A :class:`ProtectionTransaction` inserts a temporary disable comment above
every line that carries a baselined diagnostic, lets the fixer run, and then
strips every line containing its transaction token. The comments stop the
fixer from resolving or moving accepted violations, so the baseline's
accounting still holds on the next run.
"""

from __future__ import annotations

import logging
import re
import uuid
from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from types import TracebackType
from typing import Final, Protocol

from .errors import FileIOError
from .models import Diagnostic

LOGGER = logging.getLogger(__name__)

LINE_SEPARATOR: Final[str] = "\n"
SOURCE_ENCODING: Final[str] = "utf-8"
SOURCE_ERRORS: Final[str] = "surrogateescape"
_INDENT_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[ \t]*")


class Fixer(Protocol):
    """Collaborator that rewrites source files in place."""

    def fix(self) -> None:
        """Run the fixer; raise :class:`~lintbase.errors.FixerExecutionError` on failure."""


@dataclass(frozen=True, slots=True)
class LineMarker:
    """Suppression request for one physical line."""

    line: int
    rules: tuple[str, ...]


def read_source(path: Path) -> str:
    """Return the exact text of ``path`` without newline translation.

    Bytes that are not valid UTF-8 are carried as surrogate escapes, so
    :func:`write_source` puts every byte back unchanged.
    """

    with path.open(encoding=SOURCE_ENCODING, errors=SOURCE_ERRORS, newline="") as handle:
        return handle.read()


def write_source(path: Path, text: str) -> None:
    """Write ``text`` to ``path`` without newline translation."""

    with path.open("w", encoding=SOURCE_ENCODING, errors=SOURCE_ERRORS, newline="") as handle:
        handle.write(text)


def plan_markers(diagnostics: Iterable[Diagnostic]) -> dict[Path, list[LineMarker]]:
    """Group baselined diagnostics into per-file, per-line suppression requests.

    Files are keyed by absolute path and returned in sorted order; each file's
    markers are sorted by *descending* line number, the order they must be
    inserted in. Diagnostics without a positive line are skipped, and lines
    whose diagnostics all lack a rule id get no marker.

    Args:
        diagnostics: Baselined diagnostics.

    Returns:
        dict[Path, list[LineMarker]]: Insertion plan.
    """

    rules_by_line: dict[Path, dict[int, set[str]]] = defaultdict(lambda: defaultdict(set))
    for diagnostic in diagnostics:
        if diagnostic.line is None or diagnostic.line < 1:
            continue
        rules = rules_by_line[diagnostic.full_path][diagnostic.line]
        if diagnostic.rule_id:
            rules.add(diagnostic.rule_id)

    plan: dict[Path, list[LineMarker]] = {}
    for path in sorted(rules_by_line, key=lambda item: item.as_posix()):
        markers = [
            LineMarker(line=line, rules=tuple(sorted(rules)))
            for line, rules in sorted(rules_by_line[path].items(), reverse=True)
            if rules
        ]
        if markers:
            plan[path] = markers
    return plan


def insert_markers(lines: Sequence[str], markers: Sequence[LineMarker], *, comment: str, token: str) -> list[str]:
    """Return ``lines`` with a marker line inserted above each requested line.

    ``markers`` must be sorted by descending line number: inserting above line
    ``n`` shifts every later line down by one, so working bottom-up keeps the
    not-yet-processed line numbers valid.

    Args:
        lines: Source lines without separators.
        markers: Descending suppression requests.
        comment: Disable-comment prefix, e.g. ``// eslint-disable-next-line``.
        token: Transaction token appended to each inserted line.

    Returns:
        list[str]: New line sequence.
    """

    result = list(lines)
    previous: int | None = None
    for marker in markers:
        if previous is not None and marker.line >= previous:
            raise ValueError("markers must be sorted by strictly descending line number")
        previous = marker.line
        index = marker.line - 1
        target = result[index] if index < len(result) else ""
        indent = _INDENT_PATTERN.match(target)
        prefix = indent.group(0) if indent else ""
        result.insert(index, f"{prefix}{comment} {', '.join(marker.rules)} {token}")
    return result


def strip_marker_lines(text: str, token: str) -> tuple[str, int]:
    """Remove every line of ``text`` containing ``token``.

    Returns:
        tuple[str, int]: Cleaned text and the number of lines removed.
    """

    lines = text.split(LINE_SEPARATOR)
    kept = [line for line in lines if token not in line]
    return LINE_SEPARATOR.join(kept), len(lines) - len(kept)


@dataclass(slots=True)
class ProtectionTransaction:
    """Scoped insertion and guaranteed removal of suppression markers.

    Use as a context manager: markers are applied on entry and released on
    exit whatever happens inside the block, including when applying itself
    fails part-way through. ``release`` runs at most once and attempts every
    touched file even when some of them fail.

    Attributes:
        diagnostics: Baselined diagnostics to shield.
        comment: Disable-comment prefix written before the rule list.
        marker_prefix: Stable prefix shared by every transaction's token.
        token: Unique token identifying this transaction's inserted lines.
    """

    diagnostics: Sequence[Diagnostic]
    comment: str
    marker_prefix: str
    token: str = ""
    _touched: list[Path] = field(default_factory=list, init=False)
    _released: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        if not self.token:
            self.token = f"{self.marker_prefix}:{uuid.uuid4().hex}"

    @property
    def touched(self) -> tuple[Path, ...]:
        """Files that may hold markers and will be cleaned on release."""

        return tuple(self._touched)

    def apply(self) -> None:
        """Insert markers file by file in sorted path order.

        Raises:
            FileIOError: If a file cannot be read or written. Files touched
                before the failure stay registered for :meth:`release`.
        """

        for path, markers in plan_markers(self.diagnostics).items():
            try:
                original = read_source(path)
            except OSError as exc:
                raise FileIOError(path, exc) from exc
            updated = insert_markers(
                original.split(LINE_SEPARATOR),
                markers,
                comment=self.comment,
                token=self.token,
            )
            # Registered before writing: a failed write may still leave markers behind.
            self._touched.append(path)
            try:
                write_source(path, LINE_SEPARATOR.join(updated))
            except OSError as exc:
                raise FileIOError(path, exc) from exc
            LOGGER.debug("protected %d line(s) in %s", len(markers), path)

    def release(self) -> None:
        """Strip this transaction's markers from every touched file.

        Raises:
            FileIOError: The first cleanup failure, raised only after every
                touched file has been attempted.
        """

        if self._released:
            return
        self._released = True
        failures: list[FileIOError] = []
        for path in self._touched:
            try:
                cleaned, removed = strip_marker_lines(read_source(path), self.token)
                if removed:
                    write_source(path, cleaned)
            except OSError as exc:
                LOGGER.error("failed to remove protection markers from %s: %s", path, exc)
                failures.append(FileIOError(path, exc))
                continue
            LOGGER.debug("released %d marker line(s) from %s", removed, path)
        if failures:
            raise failures[0]

    def __enter__(self) -> ProtectionTransaction:
        try:
            self.apply()
        except BaseException:
            self._release_quietly()
            raise
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        if exc is None:
            self.release()
            return
        self._release_quietly()

    def _release_quietly(self) -> None:
        """Release while another error is propagating; that error wins."""

        try:
            self.release()
        except FileIOError as cleanup_error:
            LOGGER.error("cleanup after a failed protected fix also failed: %s", cleanup_error)


def run_protected_fix(
    baselined: Sequence[Diagnostic],
    fixer: Fixer,
    *,
    comment: str,
    marker_prefix: str,
) -> ProtectionTransaction:
    """Run ``fixer`` while ``baselined`` diagnostics are shielded.

    Args:
        baselined: Diagnostics accepted by the baseline.
        fixer: Collaborator rewriting files in place.
        comment: Disable-comment prefix.
        marker_prefix: Prefix of the transaction token.

    Returns:
        ProtectionTransaction: The released transaction, for inspection.

    Raises:
        FileIOError: If markers could not be applied or removed.
        FixerExecutionError: If the fixer failed; markers are already removed.
    """

    transaction = ProtectionTransaction(diagnostics=baselined, comment=comment, marker_prefix=marker_prefix)
    with transaction:
        fixer.fix()
    return transaction


__all__ = [
    "Fixer",
    "LineMarker",
    "ProtectionTransaction",
    "insert_markers",
    "plan_markers",
    "read_source",
    "run_protected_fix",
    "strip_marker_lines",
    "write_source",
]
