# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Baseline creation, persistence and matching."""

from __future__ import annotations

from .matcher import Classification, baselined_only, classify, new_only
from .store import create, load, read_baseline, serialize, write_baseline

__all__ = [
    "Classification",
    "baselined_only",
    "classify",
    "create",
    "load",
    "new_only",
    "read_baseline",
    "serialize",
    "write_baseline",
]
