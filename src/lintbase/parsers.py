# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsers turning lint tool reports into :class:`Diagnostic` objects."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from .filesystem.paths import display_path, resolve_path
from .models import Diagnostic
from .serialization import JsonValue, coerce_optional_int, coerce_optional_str
from .severity import severity_from_level


class ReportFormatError(ValueError):
    """Raised when a report does not follow the expected JSON layout."""


def parse_eslint(payload: JsonValue, *, root: Path) -> list[Diagnostic]:
    """Parse ESLint JSON diagnostics into normalized diagnostic objects.

    Args:
        payload: JSON payload produced by ESLint when invoked with ``--format json``.
        root: Project root used to build display paths and resolve relative ones.

    Returns:
        list[Diagnostic]: Diagnostics in report order (file by file, message
        by message), which is the order ordinals are assigned in.

    Raises:
        ReportFormatError: If the top-level payload is not a list of results.
    """
    if not isinstance(payload, list):
        raise ReportFormatError(f"expected a list of file results, got {type(payload).__name__}")
    results: list[Diagnostic] = []
    for entry in payload:
        if not isinstance(entry, dict):
            continue
        path = coerce_optional_str(entry.get("filePath")) or coerce_optional_str(entry.get("filename"))
        messages = entry.get("messages")
        if not path or not isinstance(messages, Sequence):
            continue
        full_path = resolve_path(path, base_dir=root)
        shown = display_path(full_path, base_dir=root)
        for message in messages:
            if not isinstance(message, dict):
                continue
            results.append(
                Diagnostic(
                    file=shown,
                    full_path=full_path,
                    line=coerce_optional_int(message.get("line")),
                    column=coerce_optional_int(message.get("column")),
                    rule_id=coerce_optional_str(message.get("ruleId")),
                    message=coerce_optional_str(message.get("message")) or "",
                    severity=severity_from_level(coerce_optional_int(message.get("severity"))),
                ),
            )
    return results


__all__ = ["ReportFormatError", "parse_eslint"]
