# Pinion CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""Defines positional `Arg` clauses and the ordered `ArgGroup`."""
from __future__ import annotations

from typing import Iterator

from pinion.parser.clause import ValueClause


class Arg(ValueClause):
    """
    A positional argument.

    An argument bound to a cumulative value consumes every remaining positional
    token, so it must be the last argument of its command.
    """

    def consumes_remainder(self) -> bool:
        return self.value is not None and self.value.is_cumulative

    def format_usage(self) -> str:
        text = f"<{self.name}>"
        if self.consumes_remainder():
            text += "..."
        if not self.required:
            text = f"[{text}]"
        return text

    def __str__(self) -> str:
        return f"'{self.name}'"


class ArgGroup:
    """Arguments declared on one command, in positional order."""

    def __init__(self) -> None:
        self.args: list[Arg] = []

    def add(self, arg: Arg) -> Arg:
        self.args.append(arg)
        return arg

    def get(self, name: str) -> Arg | None:
        for arg in self.args:
            if arg.name == name:
                return arg
        return None

    def __getitem__(self, index: int) -> Arg:
        return self.args[index]

    def __iter__(self) -> Iterator[Arg]:
        return iter(self.args)

    def __len__(self) -> int:
        return len(self.args)

    def __bool__(self) -> bool:
        return bool(self.args)
