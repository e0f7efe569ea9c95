# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Create, decode and encode persisted baselines.

The persisted form is a flat JSON object. Each key joins the root-relative
POSIX path, the rule id and the message with :data:`KEY_SEPARATOR`; each value
is the number of occurrences accepted for that fingerprint. Keys are sorted and
the document is indented so the file diffs cleanly and can be edited by hand.
Files outside the project root keep their absolute path.
"""

from __future__ import annotations

import json
import logging
import re
from collections import Counter
from collections.abc import Iterable
from pathlib import Path
from typing import Final

from ..errors import BaselineParseError
from ..filesystem.paths import display_path, resolve_path
from ..models import Baseline, Diagnostic, Fingerprint

LOGGER = logging.getLogger(__name__)

KEY_SEPARATOR: Final[str] = " :: "
JSON_INDENT: Final[int] = 4
# Rule ids never contain whitespace, so the second field is anchored on \S*.
_KEY_PATTERN: Final[re.Pattern[str]] = re.compile(r"^(?P<path>.+?) :: (?P<rule>\S*) :: (?P<message>.*)$", re.DOTALL)


def create(diagnostics: Iterable[Diagnostic]) -> Baseline:
    """Build a baseline accepting every diagnostic in ``diagnostics``.

    Args:
        diagnostics: Diagnostics from a single provider run.

    Returns:
        Baseline: Occurrence counts per fingerprint.
    """

    counts = Counter(diagnostic.fingerprint for diagnostic in diagnostics)
    return Baseline(entries=dict(counts))


def encode_key(fingerprint: Fingerprint, *, root: Path) -> str:
    """Return the persisted key for ``fingerprint``."""

    return KEY_SEPARATOR.join((display_path(fingerprint.path, base_dir=root), fingerprint.rule_id, fingerprint.message))


def decode_key(key: str, *, root: Path) -> Fingerprint:
    """Parse a persisted key back into a :class:`Fingerprint`.

    Raises:
        BaselineParseError: If ``key`` does not follow the key layout.
    """

    match = _KEY_PATTERN.match(key)
    if match is None:
        raise BaselineParseError(f"Malformed baseline key: {key!r}")
    return Fingerprint(
        path=resolve_path(match.group("path"), base_dir=root),
        rule_id=match.group("rule"),
        message=match.group("message"),
    )


def load(payload: bytes | str, *, root: Path) -> Baseline:
    """Decode a persisted baseline.

    Args:
        payload: Raw file content.
        root: Project root that relative paths are anchored at.

    Returns:
        Baseline: Decoded baseline.

    Raises:
        BaselineParseError: If the payload is not a JSON object of positive
            integer counts keyed by well-formed fingerprints.
    """

    try:
        data = json.loads(payload)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise BaselineParseError(f"Baseline is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise BaselineParseError(f"Baseline must be a JSON object, got {type(data).__name__}")

    entries: dict[Fingerprint, int] = {}
    for key, value in data.items():
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise BaselineParseError(f"Baseline count for {key!r} must be a positive integer, got {value!r}")
        fingerprint = decode_key(key, root=root)
        if fingerprint in entries:
            raise BaselineParseError(f"Duplicate baseline entry for {key!r}")
        entries[fingerprint] = value
    LOGGER.debug("loaded baseline with %d fingerprints", len(entries))
    return Baseline(entries=entries)


def serialize(baseline: Baseline, *, root: Path) -> bytes:
    """Encode ``baseline`` into its stable, human-diffable persisted form."""

    document = {encode_key(fingerprint, root=root): baseline.entries[fingerprint] for fingerprint in baseline}
    text = json.dumps(document, indent=JSON_INDENT, sort_keys=True, ensure_ascii=False)
    return f"{text}\n".encode()


def read_baseline(path: Path, *, root: Path) -> Baseline:
    """Read and decode the baseline stored at ``path``.

    Raises:
        BaselineParseError: If the file cannot be read or decoded.
    """

    try:
        payload = path.read_bytes()
    except OSError as exc:
        raise BaselineParseError(f"Unable to read baseline {path}: {exc}") from exc
    return load(payload, root=root)


def write_baseline(path: Path, baseline: Baseline, *, root: Path) -> None:
    """Persist ``baseline`` to ``path``, creating parent directories."""

    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_bytes(serialize(baseline, root=root))


__all__ = [
    "KEY_SEPARATOR",
    "create",
    "decode_key",
    "encode_key",
    "load",
    "read_baseline",
    "serialize",
    "write_baseline",
]
