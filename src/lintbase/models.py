# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the lintbase package."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator

from .severity import Severity


class Fingerprint(BaseModel):
    """Identity of a diagnostic that survives line drift between runs.

    ``path`` is the resolved absolute path of the offending file. Line and
    column are deliberately absent; duplicates are told apart by ordinal.
    """

    model_config = ConfigDict(frozen=True)

    path: Path
    rule_id: str
    message: str

    def sort_key(self) -> tuple[str, str, str]:
        """Return a tuple that orders fingerprints deterministically."""

        return (self.path.as_posix(), self.rule_id, self.message)


class Diagnostic(BaseModel):
    """Normalized lint diagnostic returned by the diagnostics provider."""

    model_config = ConfigDict(frozen=True)

    file: str
    full_path: Path
    line: int | None = None
    column: int | None = None
    rule_id: str | None = None
    message: str
    severity: Severity | None = None

    @field_validator("message", mode="before")
    @classmethod
    def _strip_message(cls, value: object) -> object:
        """Drop surrounding whitespace so fingerprints compare reliably."""
        if isinstance(value, str):
            return value.strip()
        return value

    @property
    def fingerprint(self) -> Fingerprint:
        """Return the cross-run identity of this diagnostic."""

        return Fingerprint(path=self.full_path, rule_id=self.rule_id or "", message=self.message)


@dataclass(frozen=True, slots=True)
class Baseline:
    """Accepted occurrence counts keyed by fingerprint.

    A fingerprint absent from the mapping has an accepted count of zero.
    """

    entries: Mapping[Fingerprint, int] = field(default_factory=dict)

    def accepted(self, fingerprint: Fingerprint) -> int:
        """Return how many occurrences of ``fingerprint`` are tolerated."""

        return self.entries.get(fingerprint, 0)

    def files(self) -> list[Path]:
        """Return the distinct files referenced by the baseline, sorted."""

        return sorted({fingerprint.path for fingerprint in self.entries}, key=lambda path: path.as_posix())

    def total(self) -> int:
        """Return the total number of accepted occurrences."""

        return sum(self.entries.values())

    def __iter__(self) -> Iterator[Fingerprint]:
        return iter(sorted(self.entries, key=Fingerprint.sort_key))

    def __len__(self) -> int:
        return len(self.entries)


__all__ = ["Baseline", "Diagnostic", "Fingerprint"]
