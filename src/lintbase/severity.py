# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum
from typing import Final

ESLINT_ERROR_LEVEL: Final[int] = 2
ESLINT_WARNING_LEVEL: Final[int] = 1


class Severity(str, Enum):
    """Severity levels normalising different tool vocabularies."""

    ERROR = "error"
    WARNING = "warning"
    NOTICE = "notice"


def severity_from_level(level: int | None) -> Severity:
    """Map an ESLint numeric severity onto :class:`Severity`.

    Args:
        level: Numeric level reported by ESLint (``2`` error, ``1`` warning).

    Returns:
        Severity: Matching severity; unknown levels become notices and a
        missing level defaults to a warning.
    """

    if level is None or level == ESLINT_WARNING_LEVEL:
        return Severity.WARNING
    if level == ESLINT_ERROR_LEVEL:
        return Severity.ERROR
    return Severity.NOTICE


__all__ = ["ESLINT_ERROR_LEVEL", "ESLINT_WARNING_LEVEL", "Severity", "severity_from_level"]
