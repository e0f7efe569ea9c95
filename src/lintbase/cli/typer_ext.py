# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typer building blocks for the lintbase command line."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Final, TypeVar

import typer
from click.core import Command, Context, Parameter
from click.formatting import HelpFormatter
from typer.core import TyperCommand, TyperGroup

ARGUMENT_PARAM_TYPE: Final[str] = "argument"

CommandCallback = TypeVar("CommandCallback", bound=Callable[..., Any])


def _sort_name(param: Parameter) -> str:
    """Return the lower-cased long flag of ``param`` without leading dashes."""

    flags = [*getattr(param, "opts", ()), *getattr(param, "secondary_opts", ())]
    for flag in flags:
        if flag.startswith("--"):
            return flag.lstrip("-").lower()
    fallback = flags[0] if flags else (param.name or "")
    return fallback.lstrip("-").lower()


def _write_sorted_params(command: Command, ctx: Context, formatter: HelpFormatter) -> None:
    """Write arguments in declaration order, then options sorted by flag."""

    arguments: list[tuple[str, str]] = []
    options: list[tuple[str, tuple[str, str]]] = []
    for param in command.get_params(ctx):
        record = param.get_help_record(ctx)
        if record is None:
            continue
        if getattr(param, "param_type_name", "") == ARGUMENT_PARAM_TYPE:
            arguments.append(record)
        else:
            options.append((_sort_name(param), record))
    if arguments:
        with formatter.section("Arguments"):
            formatter.write_dl(arguments)
    if options:
        with formatter.section("Options"):
            formatter.write_dl([record for _, record in sorted(options, key=lambda item: item[0])])


class SortedTyperCommand(TyperCommand):
    """Subcommand listing its options alphabetically in ``--help``."""

    def format_options(self, ctx: Context, formatter: HelpFormatter) -> None:
        _write_sorted_params(self, ctx, formatter)


class RootCommandGroup(TyperGroup):
    """Group whose own callback is the default action.

    When the first argument names a registered subcommand, parsing proceeds
    as for any group. Otherwise the arguments belong to the group callback:
    options may appear anywhere and every leftover argument, including those
    after ``--``, ends up in ``ctx.args``.
    """

    command_class = SortedTyperCommand
    allow_interspersed_args = True

    def parse_args(self, ctx: Context, args: list[str]) -> list[str]:
        if args and args[0] in self.commands:
            ctx.allow_interspersed_args = False
            return super().parse_args(ctx, args)
        return Command.parse_args(self, ctx, args)

    def format_options(self, ctx: Context, formatter: HelpFormatter) -> None:
        _write_sorted_params(self, ctx, formatter)
        self.format_commands(ctx, formatter)


class SortedTyper(typer.Typer):
    """Typer application built on :class:`RootCommandGroup`."""

    def __init__(self, *args: Any, cls: type[TyperGroup] | None = None, **kwargs: Any) -> None:
        super().__init__(*args, cls=cls or RootCommandGroup, **kwargs)

    def command(
        self,
        name: str | None = None,
        *,
        cls: type[TyperCommand] | None = None,
        **kwargs: Any,
    ) -> Callable[[CommandCallback], CommandCallback]:
        """Register a subcommand that renders sorted help."""

        return super().command(name, cls=cls or SortedTyperCommand, **kwargs)


def create_typer(*, cls: type[TyperGroup] | None = None, **kwargs: Any) -> SortedTyper:
    """Return a :class:`SortedTyper` forwarding ``kwargs`` to Typer."""

    return SortedTyper(cls=cls, **kwargs)


__all__ = ["RootCommandGroup", "SortedTyper", "SortedTyperCommand", "create_typer"]
