# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Partition a fresh diagnostic list into new and baselined diagnostics."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from ..models import Baseline, Diagnostic, Fingerprint


@dataclass(slots=True)
class Classification:
    """Outcome of matching one provider run against a baseline.

    Attributes:
        new: Diagnostics whose ordinal exceeds the accepted count, in encounter order.
        baselined: Diagnostics covered by the baseline, in encounter order.
        ordinals: Ordinal assigned to each diagnostic, parallel to the input list.
    """

    new: list[Diagnostic] = field(default_factory=list)
    baselined: list[Diagnostic] = field(default_factory=list)
    ordinals: list[int] = field(default_factory=list)

    @property
    def clean(self) -> bool:
        """Return ``True`` when no new diagnostics were found."""

        return not self.new


def classify(diagnostics: Iterable[Diagnostic], baseline: Baseline) -> Classification:
    """Classify ``diagnostics`` against ``baseline`` in a single ordered pass.

    The n-th diagnostic carrying a given fingerprint receives ordinal ``n``;
    it is baselined when ``n`` does not exceed the accepted count for that
    fingerprint. Counters live only for the duration of this call.

    Args:
        diagnostics: Diagnostics in provider encounter order.
        baseline: Accepted occurrence counts.

    Returns:
        Classification: New and baselined partitions.
    """

    seen: Counter[Fingerprint] = Counter()
    result = Classification()
    for diagnostic in diagnostics:
        fingerprint = diagnostic.fingerprint
        seen[fingerprint] += 1
        ordinal = seen[fingerprint]
        result.ordinals.append(ordinal)
        if ordinal <= baseline.accepted(fingerprint):
            result.baselined.append(diagnostic)
        else:
            result.new.append(diagnostic)
    return result


def new_only(diagnostics: Iterable[Diagnostic], baseline: Baseline) -> list[Diagnostic]:
    """Return only the diagnostics not covered by ``baseline``."""

    return classify(diagnostics, baseline).new


def baselined_only(diagnostics: Iterable[Diagnostic], baseline: Baseline) -> list[Diagnostic]:
    """Return only the diagnostics covered by ``baseline``."""

    return classify(diagnostics, baseline).baselined


__all__ = ["Classification", "baselined_only", "classify", "new_only"]
