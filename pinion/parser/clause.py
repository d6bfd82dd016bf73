# Pinion CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Shared building blocks for flags and positional arguments.

`ValueClause` holds everything a flag and an argument have in common: the bound
`Value`, default strings, environment variable binding, dispatch callback,
actions and completion hints. `ActionMixin` is also used by commands.
"""
from __future__ import annotations

import os
import re
from datetime import timedelta
from typing import TYPE_CHECKING, Any, Callable

from pinion.parser.hints import Completion, CompletionMixin
from pinion.parser.utils import format_duration
from pinion.parser.values import Value

if TYPE_CHECKING:
    from pinion.parser.context import ParseContext

Action = Callable[["ParseContext"], Any]

_ENVAR_LINES = re.compile(r"\r?\n")


def normalize_defaults(default: Any) -> tuple[str, ...]:
    """Turn a user supplied default into the tuple of raw strings the resolver chain uses."""
    if default is None:
        return ()
    if isinstance(default, (list, tuple)):
        return tuple(value for item in default for value in normalize_defaults(item))
    if isinstance(default, bool):
        return ("true" if default else "false",)
    if isinstance(default, timedelta):
        return (format_duration(default),)
    return (str(default),)


class ActionMixin:
    """Post-parse actions and pre-actions attached to a clause or command."""

    actions: list[Action]
    pre_actions: list[Action]

    def _init_actions(self) -> None:
        self.actions = []
        self.pre_actions = []

    def add_action(self, action: Action):
        """Run `action(context)` after parsing and validation succeed."""
        self.actions.append(action)
        return self

    def add_pre_action(self, action: Action):
        """Run `action(context)` after parsing, before validators and actions."""
        self.pre_actions.append(action)
        return self

    def apply_actions(self, context: ParseContext) -> None:
        for action in self.actions:
            action(context)

    def apply_pre_actions(self, context: ParseContext) -> None:
        for action in self.pre_actions:
            action(context)


class ValueClause(ActionMixin, CompletionMixin):
    """
    Base class for `Flag` and `Arg`.

    Args:
        name (str): Long name of the flag or name of the argument.
        help (str): Help text.
        value (Value | None): The value binding. Validation rejects clauses
            without one.
        default (Any): Default value(s); normalized to a tuple of strings.
        required (bool): Whether a value must be supplied.
        envar (str | None): Environment variable to read when no value is given.
        no_envar (bool): Disable environment variable lookup entirely, including
            names derived by `Application.default_envars()`.
        hidden (bool): Omit from help and completion.
        dispatch (Action | None): Called with the parse context as soon as the
            clause is matched on the command line.
    """

    def __init__(
        self,
        name: str,
        help: str = "",
        *,
        value: Value | None = None,
        default: Any = None,
        required: bool = False,
        envar: str | None = None,
        no_envar: bool = False,
        hidden: bool = False,
        dispatch: Action | None = None,
    ) -> None:
        self.name = name
        self.help = help
        self.value = value
        self.defaults: tuple[str, ...] = normalize_defaults(default)
        self.required = required
        self.envar = envar
        self.no_envar = no_envar
        self.hidden = hidden
        self.dispatch = dispatch
        self.internal = False
        self.envar_prefix = ""
        self._init_actions()
        self._init_completion()

    @property
    def dest(self) -> str:
        return self.name.replace("-", "_")

    def get(self) -> Any:
        if self.value is None:
            return None
        return self.value.get()

    def get_envar(self) -> str | None:
        """Return the effective environment variable name, or None when disabled."""
        if self.no_envar or not self.envar:
            return None
        return f"{self.envar_prefix}{self.envar}"

    def envar_values(self) -> list[str]:
        """
        Read the bound environment variable.

        An empty variable counts as unset. Cumulative values split the content
        into lines after trimming one trailing newline.
        """
        name = self.get_envar()
        if not name:
            return []
        raw = os.getenv(name, "")
        if not raw:
            return []
        if self.value is not None and self.value.is_cumulative:
            if raw.endswith("\n"):
                raw = raw[:-1].removesuffix("\r")
            return _ENVAR_LINES.split(raw)
        return [raw]

    def builtin_completion(self) -> Completion:
        if self.value is None:
            return Completion()
        return self.value.builtin_completion()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"
