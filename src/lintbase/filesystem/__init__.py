# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Filesystem helpers shared by the baseline engine."""

from __future__ import annotations

from .paths import display_path, resolve_path

__all__ = ["display_path", "resolve_path"]
