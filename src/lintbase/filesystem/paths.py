# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helpers for reasoning about filesystem paths."""

from __future__ import annotations

from functools import lru_cache
from os import PathLike
from pathlib import Path
from typing import Final

_Pathish = str | PathLike[str] | Path
_DEFAULT_CACHE_SIZE: Final[int] = 1024


@lru_cache(maxsize=_DEFAULT_CACHE_SIZE)
def _best_effort_resolve(path: Path) -> Path:
    """Return ``path`` resolved where possible without raising.

    Args:
        path: Candidate path to resolve.

    Returns:
        Path: Absolute variant when resolution succeeds; otherwise the closest
        achievable approximation.

    """

    try:
        return path.resolve(strict=False)
    except (OSError, RuntimeError):
        return path.absolute() if not path.is_absolute() else path


def resolve_path(path: _Pathish, *, base_dir: _Pathish | None = None) -> Path:
    """Return the absolute form of ``path`` anchored at ``base_dir``.

    Args:
        path: Filesystem path supplied by a tool or a persisted baseline.
        base_dir: Directory used to anchor relative paths. Defaults to
            ``Path.cwd()`` when omitted.

    Returns:
        Path: Resolved absolute path.

    Raises:
        ValueError: If ``path`` is ``None``.

    """

    if path is None:
        raise ValueError("path must not be None")

    raw_path = Path(path).expanduser()
    base = _best_effort_resolve(Path(base_dir).expanduser() if base_dir is not None else Path.cwd())
    candidate = raw_path if raw_path.is_absolute() else base / raw_path
    return _best_effort_resolve(candidate)


def display_path(path: _Pathish, *, base_dir: _Pathish | None = None) -> str:
    """Return ``path`` as a POSIX string relative to ``base_dir`` when possible.

    Paths outside ``base_dir`` keep their absolute form so that two distinct
    files never collapse onto the same display key.

    Args:
        path: Path for which to build the display string.
        base_dir: Directory the display path is made relative to.

    Returns:
        str: Relative POSIX path, or the absolute POSIX path as a fallback.

    """

    resolved = resolve_path(path, base_dir=base_dir)
    base = resolve_path(base_dir) if base_dir is not None else resolve_path(Path.cwd())
    try:
        return resolved.relative_to(base).as_posix()
    except ValueError:
        return resolved.as_posix()


__all__ = ["display_path", "resolve_path"]
