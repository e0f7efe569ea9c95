# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands."""

from __future__ import annotations

from .check import check
from .options import FORWARDING_CONTEXT
from .recover import recover
from .typer_ext import create_typer

app = create_typer(help="Report only lint issues that are not part of the accepted baseline.")
app.callback(invoke_without_command=True, context_settings=FORWARDING_CONTEXT)(check)
app.command("recover")(recover)

__all__ = ["app"]
