# Pinion CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Per-invocation parse state.

A `ParseContext` is created fresh for every `parse()` call and discarded
afterwards. It owns:

- the lazy `TokenStream` over the raw arguments,
- the `FlagScope` chain, extended by one level for every command entered, so
  flags of every ancestor stay recognisable at any depth,
- the ordered trail of `ParseElement`s recording which flag, argument or
  command matched and with what literal value,
- the resolver chain consulted when a clause has no explicit value:
  environment variables, then user resolvers in registration order, then
  static defaults. The first resolver returning a non-empty list wins.

The same context is handed to dispatch callbacks, actions, validators and
resolvers, and is used by the completion resolver after a best-effort parse.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Sequence

from pinion.logger import logger
from pinion.parser.argument import Arg, ArgGroup
from pinion.parser.flag import Flag, FlagGroup
from pinion.parser.lexer import Token, TokenStream
from pinion.parser.resolver import Resolver, defaults_resolver, envar_resolver

if TYPE_CHECKING:
    from pinion.parser.clause import ValueClause
    from pinion.parser.command import Command


@dataclass
class ParseElement:
    """
    One matched clause in the parse trail.

    Attributes:
        clause (Flag | Arg | Command): What matched.
        value (str | None): The literal value for flags and arguments.
    """

    clause: Flag | Arg | Command
    value: str | None = None


class FlagScope:
    """
    Effective flag namespace: one command's `FlagGroup` plus a link to the
    enclosing scope. Lookups walk the chain from the innermost group outwards.
    """

    def __init__(self, group: FlagGroup, parent: FlagScope | None = None) -> None:
        self.group = group
        self.parent = parent

    def extend(self, group: FlagGroup) -> FlagScope:
        return FlagScope(group, self)

    def long(self, name: str) -> Flag | None:
        scope: FlagScope | None = self
        while scope is not None:
            flag = scope.group.get(name)
            if flag is not None:
                return flag
            scope = scope.parent
        return None

    def short(self, short: str) -> Flag | None:
        scope: FlagScope | None = self
        while scope is not None:
            flag = scope.group.get_short(short)
            if flag is not None:
                return flag
            scope = scope.parent
        return None

    def groups(self) -> list[FlagGroup]:
        """Return every group in the chain, outermost first."""
        groups: list[FlagGroup] = []
        scope: FlagScope | None = self
        while scope is not None:
            groups.append(scope.group)
            scope = scope.parent
        return list(reversed(groups))

    def flags(self) -> Iterator[Flag]:
        for group in self.groups():
            yield from group


class ParseContext:
    """
    Transient state for a single parse.

    Args:
        args (Sequence[str]): Raw arguments (already `@file` expanded).
        app (Command): The root command.
        resolvers (Sequence[Resolver]): User resolvers in registration order.
        dispatch (bool): Whether flag and argument dispatch callbacks run.
        completion (bool): Set while computing shell completions.
    """

    def __init__(
        self,
        args: Sequence[str],
        app: Command,
        resolvers: Sequence[Resolver] = (),
        *,
        dispatch: bool = True,
        completion: bool = False,
    ) -> None:
        self.app = app
        self.raw_args: list[str] = list(args)
        self.tokens = TokenStream(args, self._short_takes_value)
        self.scope = FlagScope(app.flags)
        self.arguments = ArgGroup()
        self.elements: list[ParseElement] = []
        self.selected: list[Command] = []
        self.seen: set[Flag | Arg] = set()
        self.resolvers: list[Resolver] = [envar_resolver(), *resolvers, defaults_resolver()]
        self.resolving: ValueClause | None = None
        self.help_requested = False
        self.dispatch_enabled = dispatch
        self.completion = completion
        self.error: Exception | None = None

    def _short_takes_value(self, short: str) -> bool:
        flag = self.scope.short(short)
        return flag is not None and flag.needs_value()

    def peek(self) -> Token:
        return self.tokens.peek()

    def next(self) -> Token:
        return self.tokens.next()

    def push_back(self, token: Token) -> Token:
        return self.tokens.push_back(token)

    def eol(self) -> bool:
        return self.peek().is_eol()

    @property
    def args_only(self) -> bool:
        return self.tokens.args_only

    def matched_flag(self, flag: Flag, value: str) -> None:
        self.elements.append(ParseElement(flag, value))
        self.seen.add(flag)

    def matched_arg(self, arg: Arg, value: str) -> None:
        self.elements.append(ParseElement(arg, value))
        self.seen.add(arg)

    def matched_command(self, command: Command) -> None:
        self.elements.append(ParseElement(command))
        self.selected.append(command)

    def selected_default(self, command: Command) -> None:
        """Record a command chosen as the default, without adding it to the trail."""
        self.selected.append(command)

    @property
    def selected_command(self) -> Command | None:
        return self.selected[-1] if self.selected else None

    @property
    def command_path(self) -> str:
        return " ".join(command.name for command in self.selected)

    def find_clause(self, key: str) -> ValueClause | None:
        """
        Look up a flag or argument by name.

        The clause currently being resolved wins, then flags in scope, then the
        arguments of the current command.
        """
        if self.resolving is not None and self.resolving.name == key:
            return self.resolving
        flag = self.scope.long(key)
        if flag is not None:
            return flag
        return self.arguments.get(key)

    def add_resolver(self, resolver: Resolver) -> None:
        """Insert a resolver after those already registered, ahead of the defaults."""
        self.resolvers.insert(len(self.resolvers) - 1, resolver)

    def resolve(self, clause: ValueClause) -> list[str]:
        """Return the first non-empty value list the resolver chain yields for `clause`."""
        return self.resolve_with_source(clause)[0]

    def resolve_with_source(self, clause: ValueClause) -> tuple[list[str], Resolver | None]:
        """Like `resolve()`, also returning the resolver that supplied the values."""
        self.resolving = clause
        try:
            for resolver in self.resolvers:
                values = resolver.resolve(clause.name, self)
                if values:
                    logger.debug(
                        "Resolved '%s' from %s: %s", clause.name, resolver, values
                    )
                    return list(values), resolver
        finally:
            self.resolving = None
        return [], None

    def __str__(self) -> str:
        return self.command_path
