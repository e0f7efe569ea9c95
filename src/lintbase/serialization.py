# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helpers for coercing loosely typed JSON values."""

from __future__ import annotations

from typing import TypeAlias

JsonPrimitive: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonPrimitive | list["JsonValue"] | dict[str, "JsonValue"]


def coerce_optional_int(value: object) -> int | None:
    """Return ``value`` as ``int`` when it carries an integer, else ``None``."""

    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def coerce_optional_str(value: object) -> str | None:
    if value is None:
        return None
    return str(value)


__all__ = ["JsonPrimitive", "JsonValue", "coerce_optional_int", "coerce_optional_str"]
