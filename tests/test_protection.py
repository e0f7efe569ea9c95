# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the protected-fix transaction."""

from __future__ import annotations

from pathlib import Path

import pytest

from lintbase.errors import FileIOError, FixerExecutionError
from lintbase.protection import (
    LineMarker,
    ProtectionTransaction,
    insert_markers,
    plan_markers,
    run_protected_fix,
    strip_marker_lines,
)

COMMENT = "// eslint-disable-next-line"
PREFIX = "-- __BASELINE_TEMP__"
TOKEN = f"{PREFIX}:test"


def _source(lines: int) -> str:
    body = "\n".join(f"    const value{number} = {number};" for number in range(1, lines + 1))
    return f"{body}\n"


class RecordingFixer:
    """Fixer that records the file content it saw and optionally misbehaves."""

    def __init__(self, path: Path, *, error: Exception | None = None, rewrite: bool = False) -> None:
        self.path = path
        self.error = error
        self.rewrite = rewrite
        self.seen: list[str] = []

    def fix(self) -> None:
        text = self.path.read_text(encoding="utf-8")
        self.seen.append(text)
        if self.rewrite:
            self.path.write_text(text.replace("const value3 = 3;", "let value3 = 3;"), encoding="utf-8")
        if self.error is not None:
            raise self.error


def test_plan_groups_rules_per_line_in_descending_order(make_diagnostic) -> None:
    plan = plan_markers(
        [
            make_diagnostic(line=5, rule_id="semi"),
            make_diagnostic(line=10, rule_id="no-unused-vars"),
            make_diagnostic(line=5, rule_id="eqeqeq"),
            make_diagnostic(line=5, rule_id="semi"),
            make_diagnostic(line=None),
            make_diagnostic(line=2, rule_id=None),
        ],
    )

    (markers,) = plan.values()
    assert markers == [LineMarker(line=10, rules=("no-unused-vars",)), LineMarker(line=5, rules=("eqeqeq", "semi"))]


def test_insert_markers_rejects_ascending_order() -> None:
    with pytest.raises(ValueError):
        insert_markers(["a", "b"], [LineMarker(1, ("semi",)), LineMarker(2, ("semi",))], comment=COMMENT, token=TOKEN)


def test_markers_land_directly_above_their_lines(tmp_path: Path, make_diagnostic) -> None:
    target = tmp_path / "a.js"
    original = _source(12)
    target.write_text(original, encoding="utf-8")
    transaction = ProtectionTransaction(
        diagnostics=[make_diagnostic(line=5, rule_id="semi"), make_diagnostic(line=10, rule_id="eqeqeq")],
        comment=COMMENT,
        marker_prefix=PREFIX,
        token=TOKEN,
    )

    transaction.apply()

    expected = original.split("\n")
    expected.insert(9, f"    {COMMENT} eqeqeq {TOKEN}")
    expected.insert(4, f"    {COMMENT} semi {TOKEN}")
    mutated = target.read_text(encoding="utf-8").split("\n")
    assert mutated == expected
    assert mutated[5] == "    const value5 = 5;"
    assert mutated[11] == "    const value10 = 10;"

    transaction.release()

    assert target.read_text(encoding="utf-8") == original


def test_cleanup_after_successful_fix_keeps_fixer_edits(tmp_path: Path, make_diagnostic) -> None:
    target = tmp_path / "a.js"
    target.write_text(_source(4), encoding="utf-8")
    fixer = RecordingFixer(target, rewrite=True)

    transaction = run_protected_fix([make_diagnostic(line=2)], fixer, comment=COMMENT, marker_prefix=PREFIX)

    assert transaction.token.startswith(f"{PREFIX}:")
    assert transaction.token in fixer.seen[0]
    final = target.read_text(encoding="utf-8")
    assert PREFIX not in final
    assert "let value3 = 3;" in final
    assert final == _source(4).replace("const value3", "let value3")


@pytest.mark.parametrize("error", [FixerExecutionError("boom", returncode=2), RuntimeError("unexpected")])
def test_cleanup_runs_when_fixer_fails(tmp_path: Path, make_diagnostic, error: Exception) -> None:
    first = tmp_path / "a.js"
    second = tmp_path / "b.js"
    first.write_text(_source(3), encoding="utf-8")
    second.write_text(_source(3), encoding="utf-8")
    fixer = RecordingFixer(first, error=error)

    with pytest.raises(type(error)):
        run_protected_fix(
            [make_diagnostic(line=1), make_diagnostic(file="b.js", line=3)],
            fixer,
            comment=COMMENT,
            marker_prefix=PREFIX,
        )

    assert first.read_text(encoding="utf-8") == _source(3)
    assert second.read_text(encoding="utf-8") == _source(3)


def test_noop_fixer_restores_exact_content_with_crlf(tmp_path: Path, make_diagnostic) -> None:
    target = tmp_path / "a.js"
    original = b"var a = 1;\r\n\tvar b = 2;\r\nvar c = 3;"
    target.write_bytes(original)

    class NoopFixer:
        def fix(self) -> None:
            return None

    run_protected_fix(
        [make_diagnostic(line=2), make_diagnostic(line=3)],
        NoopFixer(),
        comment=COMMENT,
        marker_prefix=PREFIX,
    )

    assert target.read_bytes() == original


def test_marker_inherits_indentation(tmp_path: Path, make_diagnostic) -> None:
    target = tmp_path / "a.js"
    target.write_text("function f() {\n\t  var a = 1;\n}\n", encoding="utf-8")
    transaction = ProtectionTransaction(
        diagnostics=[make_diagnostic(line=2)],
        comment=COMMENT,
        marker_prefix=PREFIX,
        token=TOKEN,
    )

    with transaction:
        assert target.read_text(encoding="utf-8").split("\n")[1] == f"\t  {COMMENT} no-unused-vars {TOKEN}"

    assert target.read_text(encoding="utf-8") == "function f() {\n\t  var a = 1;\n}\n"


def test_failed_read_cleans_files_already_mutated(tmp_path: Path, make_diagnostic) -> None:
    present = tmp_path / "a.js"
    present.write_text(_source(2), encoding="utf-8")
    fixer = RecordingFixer(present)

    with pytest.raises(FileIOError) as excinfo:
        run_protected_fix(
            [make_diagnostic(line=1), make_diagnostic(file="missing.js", line=1)],
            fixer,
            comment=COMMENT,
            marker_prefix=PREFIX,
        )

    assert excinfo.value.path == (tmp_path / "missing.js").resolve()
    assert fixer.seen == []
    assert present.read_text(encoding="utf-8") == _source(2)


def test_release_attempts_every_file_and_runs_once(tmp_path: Path, make_diagnostic) -> None:
    first = tmp_path / "a.js"
    second = tmp_path / "b.js"
    first.write_text(_source(2), encoding="utf-8")
    second.write_text(_source(2), encoding="utf-8")
    transaction = ProtectionTransaction(
        diagnostics=[make_diagnostic(line=1), make_diagnostic(file="b.js", line=2)],
        comment=COMMENT,
        marker_prefix=PREFIX,
        token=TOKEN,
    )
    transaction.apply()
    first.unlink()

    with pytest.raises(FileIOError):
        transaction.release()

    assert second.read_text(encoding="utf-8") == _source(2)
    transaction.release()


def test_cleanup_error_does_not_mask_fixer_error(tmp_path: Path, make_diagnostic) -> None:
    target = tmp_path / "a.js"
    target.write_text(_source(2), encoding="utf-8")

    class DeletingFixer:
        def fix(self) -> None:
            target.unlink()
            raise FixerExecutionError("crashed", returncode=2)

    with pytest.raises(FixerExecutionError):
        run_protected_fix([make_diagnostic(line=1)], DeletingFixer(), comment=COMMENT, marker_prefix=PREFIX)


def test_strip_marker_lines_counts_removed_lines() -> None:
    text = f"a\n// x {TOKEN}\nb\n// y {TOKEN}\n"

    cleaned, removed = strip_marker_lines(text, TOKEN)

    assert cleaned == "a\nb\n"
    assert removed == 2


def test_other_transactions_markers_survive_release(tmp_path: Path, make_diagnostic) -> None:
    target = tmp_path / "a.js"
    foreign = f"// eslint-disable-next-line semi {PREFIX}:other"
    target.write_text(f"{foreign}\nvar a = 1;\n", encoding="utf-8")

    with ProtectionTransaction(diagnostics=[make_diagnostic(line=2)], comment=COMMENT, marker_prefix=PREFIX):
        pass

    assert target.read_text(encoding="utf-8") == f"{foreign}\nvar a = 1;\n"


def test_file_that_is_not_utf8_is_protected_and_restored_exactly(tmp_path: Path, make_diagnostic) -> None:
    target = tmp_path / "a.js"
    original = b"var caf\xe9 = 1;\r\n  var x = 2; // \xff\xfe\r\n"
    target.write_bytes(original)
    transaction = ProtectionTransaction(
        diagnostics=[make_diagnostic(line=2)],
        comment=COMMENT,
        marker_prefix=PREFIX,
        token=TOKEN,
    )

    with transaction:
        protected = target.read_bytes()
        assert protected.startswith(b"var caf\xe9 = 1;\r\n  " + COMMENT.encode())
        assert protected.endswith(TOKEN.encode() + b"\n  var x = 2; // \xff\xfe\r\n")

    assert target.read_bytes() == original


def test_release_continues_past_file_rewritten_with_undecodable_bytes(tmp_path: Path, make_diagnostic) -> None:
    first = tmp_path / "a.js"
    second = tmp_path / "b.js"
    first.write_text(_source(2), encoding="utf-8")
    second.write_text(_source(2), encoding="utf-8")
    transaction = ProtectionTransaction(
        diagnostics=[make_diagnostic(line=1), make_diagnostic(file="b.js", line=2)],
        comment=COMMENT,
        marker_prefix=PREFIX,
        token=TOKEN,
    )
    transaction.apply()
    with first.open("ab") as handle:
        handle.write(b"\xff")

    transaction.release()

    assert first.read_bytes() == _source(2).encode() + b"\xff"
    assert second.read_text(encoding="utf-8") == _source(2)
