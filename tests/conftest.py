# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
import re
import subprocess
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest

from lintbase.models import Diagnostic
from lintbase.severity import Severity

_VAR_PATTERN = re.compile(r"^(?P<indent>\s*)var (?P<name>\w+)\b")
UNUSED_RULE = "no-unused-vars"


def unused_message(name: str) -> str:
    return f"'{name}' is assigned a value but never used."


class FakeEslint:
    """Runner standing in for ``npx eslint``.

    Every ``var`` declaration in a ``.js`` file under the root is reported as
    unused unless the previous line disables ``no-unused-vars``. In fix mode
    every unprotected declaration is deleted.
    """

    def __init__(self, root: Path, *, report_status: int | None = None, fix_status: int = 0) -> None:
        self.root = root
        self.report_status = report_status
        self.fix_status = fix_status
        self.calls: list[list[str]] = []
        self.marker_snapshots: list[dict[str, str]] = []

    def __call__(self, cmd: Sequence[str], **_: Any) -> subprocess.CompletedProcess[str]:
        self.calls.append(list(cmd))
        if "--fix" in cmd:
            return self._fix(cmd)
        return self._report(cmd)

    def _files(self) -> list[Path]:
        return sorted(self.root.rglob("*.js"))

    @staticmethod
    def _unprotected(lines: list[str]) -> list[tuple[int, str, int]]:
        found: list[tuple[int, str, int]] = []
        for index, line in enumerate(lines):
            match = _VAR_PATTERN.match(line)
            if match is None:
                continue
            previous = lines[index - 1] if index else ""
            if "eslint-disable-next-line" in previous and UNUSED_RULE in previous:
                continue
            found.append((index, match.group("name"), len(match.group("indent")) + 5))
        return found

    def _report(self, cmd: Sequence[str]) -> subprocess.CompletedProcess[str]:
        results = []
        for path in self._files():
            lines = path.read_text(encoding="utf-8", errors="surrogateescape").split("\n")
            messages = [
                {
                    "ruleId": UNUSED_RULE,
                    "severity": 2,
                    "message": unused_message(name),
                    "line": index + 1,
                    "column": column,
                }
                for index, name, column in self._unprotected(lines)
            ]
            results.append({"filePath": str(path), "messages": messages})
        if self.report_status is not None:
            return subprocess.CompletedProcess(list(cmd), self.report_status, stdout="", stderr="Oops! Something went wrong!")
        status = 1 if any(result["messages"] for result in results) else 0
        return subprocess.CompletedProcess(list(cmd), status, stdout=json.dumps(results), stderr="")

    def _fix(self, cmd: Sequence[str]) -> subprocess.CompletedProcess[str]:
        snapshot: dict[str, str] = {}
        for path in self._files():
            text = path.read_text(encoding="utf-8", errors="surrogateescape")
            snapshot[path.name] = text
            lines = text.split("\n")
            doomed = {index for index, _, _ in self._unprotected(lines)}
            if doomed:
                kept = [line for index, line in enumerate(lines) if index not in doomed]
                path.write_text("\n".join(kept), encoding="utf-8", errors="surrogateescape")
        self.marker_snapshots.append(snapshot)
        return subprocess.CompletedProcess(list(cmd), self.fix_status, stdout="", stderr="fix failed" if self.fix_status > 1 else "")


@pytest.fixture
def fake_eslint(tmp_path: Path) -> FakeEslint:
    """Return a fake ESLint runner scoped to ``tmp_path``."""
    return FakeEslint(tmp_path)


@pytest.fixture
def make_diagnostic(tmp_path: Path) -> Callable[..., Diagnostic]:
    """Return a factory building diagnostics for files under ``tmp_path``."""

    def _make(
        file: str = "a.js",
        line: int | None = 1,
        rule_id: str | None = UNUSED_RULE,
        message: str = unused_message("x"),
        column: int | None = 1,
    ) -> Diagnostic:
        return Diagnostic(
            file=file,
            full_path=(tmp_path / file).resolve(),
            line=line,
            column=column,
            rule_id=rule_id,
            message=message,
            severity=Severity.ERROR,
        )

    return _make
