# Pinion CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""Defines `Flag` and the per-command `FlagGroup`."""
from __future__ import annotations

from typing import Any, Iterator

from pinion.parser.clause import Action, ValueClause
from pinion.parser.values import StringValue, Value


class Flag(ValueClause):
    """
    A named option, e.g. `--ttl 5s`, `-t 5s`, `--ttl=5s` or `-t5s`.

    Boolean flags (`value.is_bool_flag`) take no value and may be negated with
    `--no-<name>` unless their own name already starts with `no-`.
    """

    def __init__(
        self,
        name: str,
        help: str = "",
        *,
        short: str | None = None,
        placeholder: str | None = None,
        value: Value | None = None,
        default: Any = None,
        required: bool = False,
        envar: str | None = None,
        no_envar: bool = False,
        hidden: bool = False,
        dispatch: Action | None = None,
    ) -> None:
        super().__init__(
            name,
            help,
            value=value,
            default=default,
            required=required,
            envar=envar,
            no_envar=no_envar,
            hidden=hidden,
            dispatch=dispatch,
        )
        self.short = short
        self.placeholder = placeholder

    def is_bool(self) -> bool:
        return self.value is not None and self.value.is_bool_flag

    def needs_value(self) -> bool:
        return self.value is not None and not self.value.is_bool_flag

    def is_negatable(self) -> bool:
        return self.is_bool() and not self.name.startswith("no-")

    def format_placeholder(self) -> str:
        if self.placeholder:
            return self.placeholder
        if self.defaults:
            ellipsis = "..." if len(self.defaults) > 1 else ""
            if isinstance(self.value, StringValue):
                return f'"{self.defaults[0]}"{ellipsis}'
            return f"{self.defaults[0]}{ellipsis}"
        return self.name.upper().replace("-", "_")

    def __str__(self) -> str:
        return f"--{self.name}"


class FlagGroup:
    """Flags declared directly on one command, in declaration order."""

    def __init__(self) -> None:
        self.flags: list[Flag] = []

    def add(self, flag: Flag) -> Flag:
        self.flags.append(flag)
        return flag

    def get(self, name: str) -> Flag | None:
        for flag in self.flags:
            if flag.name == name:
                return flag
        return None

    def get_short(self, short: str) -> Flag | None:
        for flag in self.flags:
            if flag.short == short:
                return flag
        return None

    def visible(self) -> list[Flag]:
        return [flag for flag in self.flags if not flag.hidden]

    def __iter__(self) -> Iterator[Flag]:
        return iter(self.flags)

    def __len__(self) -> int:
        return len(self.flags)

    def __bool__(self) -> bool:
        return bool(self.flags)
