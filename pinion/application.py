# Pinion CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `Application`, the root command and the parse entry point.

An application is an explicit object; there is no module level default
instance. Each call to `parse()`:

1. validates the declared tree (`validate()`), raising `DeclarationError` for
   programmer mistakes before any token is consumed,
2. expands `@file` arguments,
3. answers `--completion-bash` requests by printing completion words,
4. resets every bound value, then resolves commands, flags and arguments,
5. reports leftover tokens, applies resolver values to untouched flags and
   checks required flags across the whole selected path,
6. runs pre-actions, then validators, then actions (application, commands on
   the selected path, matched flags, matched arguments).

`run()` is the boundary for end programs: it formats `ParseError`s as
`<name>: error: <message>` and calls the termination handler with status 1.

Example:
    app = Application("ping", "Send pings.")
    app.add_flag("ttl", short="t", type=timedelta, default="5s")
    app.add_argument("host", required=True)
    result = app.run()
    print(result["host"], result["ttl"])
"""
from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Sequence

from rich.console import Console
from rich.markup import escape

from pinion.console import PINION_THEME
from pinion.console import console as default_console
from pinion.exceptions import (
    DeclarationError,
    ParseError,
    UnexpectedArgumentError,
    UnknownCommandError,
)
from pinion.logger import logger
from pinion.parser.argument import Arg
from pinion.parser.clause import ValueClause
from pinion.parser.command import Command
from pinion.parser.completion import completion_options
from pinion.parser.context import ParseContext
from pinion.parser.flag import Flag
from pinion.parser.resolution import finalize_flags, resolve_command
from pinion.parser.resolver import Resolver
from pinion.parser.values import ListValue, StringValue
from pinion.usage import render_help
from pinion.utils import envar_transform, expand_args_from_files

COMPLETION_FLAG = "--completion-bash"


@dataclass
class ParseResult:
    """
    Outcome of a successful parse.

    Attributes:
        command (str): Space separated path of selected commands ("" for none).
        values (dict[str, Any]): Bound values keyed by clause `dest`.
        context (ParseContext): The context the parse ran with.
    """

    command: str
    values: dict[str, Any] = field(default_factory=dict)
    context: ParseContext | None = None

    @classmethod
    def from_context(cls, context: ParseContext) -> ParseResult:
        values: dict[str, Any] = {}
        for flag in context.scope.flags():
            if not flag.internal:
                values[flag.dest] = flag.get()
        for command in [context.app, *context.selected]:
            for arg in command.args:
                values[arg.dest] = arg.get()
        return cls(command=context.command_path, values=values, context=context)

    def __getitem__(self, key: str) -> Any:
        return self.values[key]

    def __contains__(self, key: object) -> bool:
        return key in self.values


class Application(Command):
    """
    The root of a command tree.

    Args:
        name (str | None): Program name used in usage and error output. Defaults
            to the basename of `sys.argv[0]`.
        help (str): Description shown in help output.
        console (Console | None): Rich console for help, version and errors.
            The Pinion theme is pushed onto a caller supplied console.
        terminate (Callable[[int], Any]): Called with an exit status after help,
            version, completion output and errors. Tests may pass a function that
            returns; parsing then carries on.
        expand_args_from_files (bool): Expand `@path` arguments into the lines of
            the named file.
    """

    def __init__(
        self,
        name: str | None = None,
        help: str = "",
        *,
        console: Console | None = None,
        terminate: Callable[[int], Any] = sys.exit,
        expand_args_from_files: bool = True,
    ) -> None:
        super().__init__(name or Path(sys.argv[0]).name, help)
        self.console = console or default_console
        if console is not None:
            console.push_theme(PINION_THEME)
        self.terminate = terminate
        self.expand_args_from_files = expand_args_from_files
        self.resolvers: list[Resolver] = []
        self.default_envars_enabled = False
        self.help_flag = self.add_flag(
            "help", "Show context-sensitive help.", type=bool, dispatch=self._help_flag
        )
        self.help_flag.internal = True
        self.help_flag.no_envar = True
        self.version_flag: Flag | None = None
        self.help_command: Command | None = None

    def version(self, text: str) -> Application:
        """Add a `--version` flag printing `text` and terminating with status 0."""

        def show_version(context: ParseContext) -> None:
            self.console.print(text, markup=False, highlight=False)
            self.terminate(0)

        self.version_flag = self.add_flag(
            "version", "Show application version.", type=bool, dispatch=show_version
        )
        self.version_flag.internal = True
        self.version_flag.no_envar = True
        return self

    def default_envars(self) -> Application:
        """Bind every flag without an explicit variable to `<APP>_<FLAG_NAME>`."""
        self.default_envars_enabled = True
        return self

    def add_resolver(self, resolver: Resolver) -> Application:
        """Consult `resolver` after environment variables and before defaults."""
        self.resolvers.append(resolver)
        return self

    def _help_flag(self, context: ParseContext) -> None:
        context.help_requested = True

    def _add_help_command(self) -> None:
        command = Command("help", "Show help.")
        arg = command.add_argument(
            "command", "Show help on command.", value=ListValue(StringValue())
        )
        arg.hint_action(
            lambda: [
                child.name for child in self.commands.visible() if child is not command
            ]
        )
        self.commands.insert(0, command, parent=self)
        self.help_command = command

    def _help_target(self, context: ParseContext) -> Command | None:
        """Return the command whose help was asked for, by `--help` or `help <command>...`."""
        if self.help_command is None or self.help_command not in context.selected:
            return context.selected_command
        target: Command = self
        for name in self.help_command.args[0].get():
            child = target.commands.get(name)
            if child is None:
                raise UnknownCommandError(f"expected command but got '{name}'")
            target = child
        return target

    def validate(self) -> None:
        """
        Check the declared tree, raising `DeclarationError` on the first problem.

        Also adds the implicit `help` command when commands are declared,
        derives default environment variable names and computes the
        environment variable prefix of every clause.
        """
        if self.commands and self.help_command is None:
            self._add_help_command()
        self._validate_command(self, {}, {}, self.envar_prefix)

    def _validate_clause(self, clause: ValueClause, kind: str) -> None:
        if clause.value is None:
            raise DeclarationError(f"{kind} '{clause.name}' has no value type")
        if clause.required and clause.defaults:
            raise DeclarationError(
                f"required {kind} '{clause.name}' with default value"
            )

    def _validate_command(
        self,
        command: Command,
        long_names: dict[str, Command],
        short_names: dict[str, Command],
        envar_prefix: str,
    ) -> None:
        long_names = dict(long_names)
        short_names = dict(short_names)

        for flag in command.flags:
            self._validate_clause(flag, "flag")
            if flag.name in long_names:
                raise DeclarationError(f"duplicate long flag --{flag.name}")
            long_names[flag.name] = command
            if flag.short is not None:
                if len(flag.short) != 1:
                    raise DeclarationError(
                        f"short name of flag --{flag.name} must be a single character"
                    )
                if flag.short in short_names:
                    raise DeclarationError(f"duplicate short flag -{flag.short}")
                short_names[flag.short] = command
            if (
                self.default_envars_enabled
                and flag.envar is None
                and not flag.no_envar
                and not flag.internal
            ):
                flag.envar = envar_transform(f"{self.name}_{flag.name}")
            flag.envar_prefix = envar_prefix

        optional_seen = False
        for index, arg in enumerate(command.args):
            self._validate_clause(arg, "argument")
            if arg.required and optional_seen:
                raise DeclarationError(
                    f"required argument '{arg.name}' can not follow optional arguments"
                )
            optional_seen = optional_seen or not arg.required
            if arg.consumes_remainder() and index != len(command.args) - 1:
                raise DeclarationError(
                    f"argument '{arg.name}' consumes the remainder and must be last"
                )
            arg.envar_prefix = envar_prefix

        if command.args and command.commands:
            raise DeclarationError(
                f"can't mix arguments and commands in '{command.name}'"
            )

        names: set[str] = set()
        defaults: list[str] = []
        for child in command.commands:
            for name in [child.name, *child.aliases]:
                if name in names:
                    raise DeclarationError(f"duplicate command '{name}'")
                names.add(name)
            if child.default:
                defaults.append(child.name)
        if len(defaults) > 1:
            raise DeclarationError(
                f"more than one default subcommand exists: {', '.join(defaults)}"
            )

        for child in command.commands:
            self._validate_command(
                child, long_names, short_names, envar_prefix + child.envar_prefix
            )

    def _walk(self, command: Command | None = None) -> list[Command]:
        command = command or self
        commands = [command]
        for child in command.commands:
            commands.extend(self._walk(child))
        return commands

    def reset(self) -> None:
        """Return every bound value in the tree to its unset state."""
        for command in self._walk():
            for clause in [*command.flags, *command.args]:
                if clause.value is not None:
                    clause.value.reset()

    def _new_context(
        self, args: Sequence[str], dispatch: bool = True, completion: bool = False
    ) -> ParseContext:
        return ParseContext(
            args, self, self.resolvers, dispatch=dispatch, completion=completion
        )

    def _completion_request(self, args: list[str]) -> list[str] | None:
        if COMPLETION_FLAG not in args:
            return None
        index = args.index(COMPLETION_FLAG)
        if "--" in args[:index]:
            return None
        return args[:index] + args[index + 1 :]

    def parse_context(self, args: Sequence[str], completion: bool = False) -> ParseContext:
        """
        Resolve `args` best-effort without dispatch callbacks or actions.

        Resolution stops at the first error, which is stored on
        `context.error` instead of being raised.
        """
        self.validate()
        self.reset()
        context = self._new_context(args, dispatch=False, completion=completion)
        try:
            resolve_command(context, self)
        except ParseError as error:
            logger.debug("Best-effort parse stopped: %s", error)
            context.error = error
        return context

    def completion_options(self, args: Sequence[str]) -> list[str]:
        """Return completion words for the last element of `args`."""
        context = self.parse_context(args, completion=True)
        return completion_options(self, context)

    def parse(self, args: Sequence[str] | None = None) -> ParseResult:
        """
        Parse `args` (defaults to `sys.argv[1:]`).

        Raises:
            DeclarationError: If the declared tree is invalid.
            ParseError: If the arguments can not be resolved.
        """
        raw_args = list(sys.argv[1:] if args is None else args)
        self.validate()
        if self.expand_args_from_files:
            raw_args = expand_args_from_files(raw_args)

        completion_args = self._completion_request(raw_args)
        if completion_args is not None:
            context = self.parse_context(completion_args, completion=True)
            for word in completion_options(self, context):
                self.console.out(word, highlight=False)
            self.terminate(0)
            return ParseResult.from_context(context)

        self.reset()
        context = self._new_context(raw_args)
        resolve_command(context, self)
        if self.help_command is not None and self.help_command in context.selected:
            context.help_requested = True

        if not context.help_requested and context.tokens.has_trailing_args():
            trailing = context.tokens.drain()
            if trailing:
                raise UnexpectedArgumentError([str(token) for token in trailing])

        finalize_flags(
            context, context.scope.groups(), ignore_required=context.help_requested
        )

        if context.help_requested:
            render_help(self, self._help_target(context))
            self.terminate(0)
            return ParseResult.from_context(context)

        self._apply_callbacks(context)
        logger.debug("Parsed command '%s'", context.command_path)
        return ParseResult.from_context(context)

    def _apply_callbacks(self, context: ParseContext) -> None:
        commands: list[Command] = [self, *context.selected]
        clauses: list[ValueClause] = []
        for kind in (Flag, Arg):
            for element in context.elements:
                clause = element.clause
                if isinstance(clause, kind) and clause not in clauses:
                    clauses.append(clause)

        for command in commands:
            command.apply_pre_actions(context)
        for clause in clauses:
            clause.apply_pre_actions(context)

        for command in commands:
            command.apply_validators(context)

        for command in commands:
            command.apply_actions(context)
        for clause in clauses:
            clause.apply_actions(context)

    def run(self, args: Sequence[str] | None = None) -> ParseResult | None:
        """
        Parse `args`, reporting parse errors and terminating with status 1.

        Exceptions raised by actions and validators propagate unchanged.
        """
        try:
            return self.parse(args)
        except ParseError as error:
            self.console.print(
                f"[pinion.error]{escape(self.name)}: error:[/pinion.error] {escape(str(error))}"
            )
            self.console.print(
                f"[pinion.dim]Try '{escape(self.name)} --help' for more information.[/pinion.dim]"
            )
            self.terminate(1)
            return None

    def render_help(self, command: Command | None = None) -> None:
        render_help(self, command)
