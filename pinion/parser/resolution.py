# Pinion CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
The flag, argument and command resolution engines.

Resolution is a recursive descent over the declared command tree driven by a
single `ParseContext`:

- `resolve_command()` extends the flag scope with the command's own flags,
  consumes interleaved flags, then either selects a child command (by name,
  alias or default) and recurses, or hands over to `resolve_args()`.
- `resolve_args()` matches positional tokens to declared arguments, still
  consuming flags between them, then fills unconsumed arguments from the
  resolver chain.
- `consume_flags()` matches flag tokens against the merged scope.
- `finalize_flags()` runs once at the end over every flag group on the selected
  path: it reports all missing required flags together and applies resolver
  values (environment, user resolvers, defaults) to untouched flags.

Errors propagate unchanged to the caller; partially bound values are not
rolled back.
"""
from __future__ import annotations

from difflib import get_close_matches
from typing import Iterable

from pinion.exceptions import (
    ExpectedValueError,
    MissingArgumentError,
    MissingCommandError,
    MissingFlagError,
    RepeatedFlagError,
    UnknownCommandError,
    UnknownFlagError,
    ValueConversionError,
)
from pinion.logger import logger
from pinion.parser.argument import Arg, ArgGroup
from pinion.parser.clause import ValueClause
from pinion.parser.command import Command
from pinion.parser.context import ParseContext
from pinion.parser.flag import Flag, FlagGroup
from pinion.parser.lexer import Token, TokenType


def _set_value(clause: ValueClause, raw: str, source: str = "") -> None:
    try:
        clause.value.set(raw)
    except ValueError as error:
        name = str(clause) if isinstance(clause, Flag) else f"argument {clause}"
        if source:
            message = f"{source} value for {name} is invalid: {error}"
        else:
            message = f"invalid value '{raw}' for {name}: {error}"
        raise ValueConversionError(message) from error


def _unknown_flag(context: ParseContext, token: Token) -> UnknownFlagError:
    if token.type is TokenType.SHORT:
        return UnknownFlagError(f"unknown short flag '{token}'")
    names = [flag.name for flag in context.scope.flags() if not flag.hidden]
    suggestions = get_close_matches(token.value, names, n=3, cutoff=0.6)
    message = f"unknown long flag '{token}'"
    if suggestions:
        message += f", did you mean {', '.join(f'--{name}' for name in suggestions)}?"
    return UnknownFlagError(message)


def _match_flag(context: ParseContext, token: Token) -> tuple[Flag, bool]:
    """Return the flag named by `token` and whether it was negated with `--no-`."""
    if token.type is TokenType.SHORT:
        flag = context.scope.short(token.value)
        if flag is None:
            raise _unknown_flag(context, token)
        return flag, False

    flag = context.scope.long(token.value)
    if flag is not None:
        return flag, False

    if token.value.startswith("no-"):
        flag = context.scope.long(token.value[3:])
        if flag is not None:
            if not flag.is_bool():
                raise UnknownFlagError(
                    f"flag '{flag}' is not a boolean and cannot be negated"
                )
            if flag.is_negatable():
                return flag, True
    raise _unknown_flag(context, token)


def consume_flags(context: ParseContext) -> None:
    """
    Consume flag tokens until the next token is an argument or end of input.

    Boolean flags receive `"true"` (or `"false"` when negated) without
    consuming a value token. Every other flag requires the following token to
    be an argument.

    Raises:
        UnknownFlagError: If a flag is not declared in scope, or a non-boolean
            flag is negated.
        ExpectedValueError: If a value flag is not followed by a value.
        RepeatedFlagError: If a non-cumulative value flag is given twice.
        ValueConversionError: If the value binding rejects the value.
    """
    while True:
        token = context.peek()
        if not token.is_flag():
            return
        context.next()

        flag, invert = _match_flag(context, token)

        if flag.is_bool():
            raw = "false" if invert else "true"
            attached = context.peek()
            if attached.attached and not invert:
                context.next()
                raw = attached.value
        else:
            value_token = context.peek()
            if value_token.type is not TokenType.ARG:
                raise ExpectedValueError(f"expected argument for flag '{flag}'")
            context.next()
            raw = value_token.value

        if flag in context.seen and not flag.is_bool() and not flag.value.is_cumulative:
            raise RepeatedFlagError(f"flag '{flag}' cannot be repeated")

        logger.debug("Matched flag %s with value '%s'", flag, raw)
        _set_value(flag, raw)
        context.matched_flag(flag, raw)
        if flag.dispatch is not None and context.dispatch_enabled:
            flag.dispatch(context)


def finalize_flags(
    context: ParseContext,
    groups: Iterable[FlagGroup],
    ignore_required: bool = False,
) -> None:
    """
    Apply resolver values to every flag in `groups` that was not given explicitly.

    All missing required flags are collected first and reported in one error.

    Raises:
        MissingFlagError: If required flags resolve to nothing.
        ValueConversionError: If a resolved value is rejected.
    """
    pending: list[tuple[Flag, list[str], str]] = []
    missing: list[str] = []
    for group in groups:
        for flag in group:
            if flag in context.seen:
                continue
            values, resolver = context.resolve_with_source(flag)
            if values:
                pending.append((flag, values, str(resolver)))
            elif flag.required and not ignore_required:
                missing.append(str(flag))

    if missing:
        raise MissingFlagError(missing)

    for flag, values, source in pending:
        for raw in values:
            _set_value(flag, raw, source)


def resolve_flags(
    context: ParseContext, group: FlagGroup, ignore_required: bool = False
) -> None:
    """Consume flags from the token stream, then finalize `group`."""
    consume_flags(context)
    finalize_flags(context, [group], ignore_required)


def resolve_args(context: ParseContext, args: ArgGroup) -> None:
    """
    Match positional tokens to `args` in declaration order.

    A remainder-consuming argument keeps absorbing tokens until input runs out.
    Arguments left without a token are resolved through the resolver chain.
    Tokens left over once every argument is filled are left in the stream for
    the caller to report.

    Raises:
        MissingArgumentError: If a required argument resolves to nothing.
        ValueConversionError: If a value binding rejects a value.
    """
    context.arguments = args
    index = 0
    while index < len(args):
        consume_flags(context)
        token = context.peek()
        if token.type is not TokenType.ARG:
            break
        context.next()
        arg = args[index]
        logger.debug("Matched argument %s with value '%s'", arg, token.value)
        _set_value(arg, token.value)
        context.matched_arg(arg, token.value)
        if arg.dispatch is not None and context.dispatch_enabled:
            arg.dispatch(context)
        if not arg.consumes_remainder():
            index += 1

    for arg in args:
        if arg in context.seen:
            continue
        values, resolver = context.resolve_with_source(arg)
        if values:
            for raw in values:
                _set_value(arg, raw, str(resolver))
        elif arg.required and not context.help_requested:
            raise MissingArgumentError(arg.name)

    consume_flags(context)


def resolve_command(context: ParseContext, command: Command) -> list[str]:
    """
    Resolve `command` and its selected descendants.

    Returns:
        list[str]: Canonical names of the commands selected below `command`.

    Raises:
        UnknownCommandError: If a token names no child and no default exists.
        MissingCommandError: If input ends where a child command is required.
    """
    if command is not context.app:
        context.scope = context.scope.extend(command.flags)
    consume_flags(context)

    if command.commands:
        token = context.peek()
        if token.type is TokenType.ARG:
            child = command.commands.get(token.value)
            if child is not None:
                context.next()
                logger.debug("Selected command '%s'", child.name)
                context.matched_command(child)
                return [child.name, *resolve_command(context, child)]

        default = command.commands.default()
        if default is not None:
            logger.debug("Selected default command '%s'", default.name)
            context.selected_default(default)
            return [default.name, *resolve_command(context, default)]

        if token.type is TokenType.ARG:
            names = [child.name for child in command.commands.visible()]
            message = f"expected command but got '{token.value}'"
            suggestions = get_close_matches(token.value, names, n=3, cutoff=0.6)
            if suggestions:
                message += f", did you mean {', '.join(suggestions)}?"
            raise UnknownCommandError(message)
        if not context.help_requested:
            raise MissingCommandError("expected command but none was specified")
        return []

    if command.args:
        resolve_args(context, command.args)
    return []
