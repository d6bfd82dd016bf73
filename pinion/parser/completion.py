# Pinion CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Completion resolver.

Works on a `ParseContext` produced by a best-effort parse of the words typed so
far (the last word being the one under the cursor, possibly empty). It decides
whether the shell should be offered flag names, a flag's value hints, an
argument's value hints or subcommand names.

Flag completion kicks in when the current word, or the previous one, starts with
`--`:

- `--<partial>`: every visible flag name of the selected command, then of its
  ancestors. Filtering by prefix is left to the shell.
- `--<flag> <partial>`: the flag's hints. If the flag has no hints, or the
  value already names exactly one hint, completion falls back to commands and
  arguments.
- After a `--` terminator no flags are offered.

Otherwise the matched argument trail of the selected command is replayed to
find the first argument still open; its hints are offered, or the visible child
commands once every argument is satisfied.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from pinion.parser.argument import Arg
from pinion.parser.command import Command
from pinion.parser.context import ParseContext
from pinion.parser.hints import Completion, merge_completions

if TYPE_CHECKING:
    from pinion.parser.flag import FlagGroup


def _words(*words: str) -> Completion:
    completion = Completion()
    if words:
        completion.add_words(*words)
    return completion


def flag_completion(
    group: FlagGroup, flag_name: str, flag_value: str
) -> tuple[Completion, bool, bool]:
    """
    Complete a flag name or value within one group.

    Returns:
        tuple[Completion, bool, bool]: The options, whether `flag_name` named a
        flag of this group, and whether `flag_value` fully matched one of its
        hints (or the flag has none to offer).
    """
    names: list[str] = []
    for flag in group:
        if flag.name == flag_name:
            completion = flag.resolve_completion()
            options = completion.resolve_words()
            if not options:
                return completion, True, True
            is_prefix = any(
                option != flag_value and option.startswith(flag_value)
                for option in options
            )
            matched = flag_value in options
            return completion, True, matched and not is_prefix
        if not flag.hidden:
            names.append(f"--{flag.name}")
    return _words(*names), False, False


def command_completion(target: Command, context: ParseContext) -> Completion:
    """Offer the hints of the first open argument of `target`, or its child commands."""
    options: Completion | None = None
    satisfied = 0
    for element in context.elements:
        clause = element.clause
        if isinstance(clause, Command):
            options = None
            satisfied = 0
            continue
        if not isinstance(clause, Arg):
            continue

        options = None
        if not element.value or satisfied >= len(target.args):
            continue

        current = target.args[satisfied]
        valid = current.resolve_words()
        if element.value in valid:
            if not clause.consumes_remainder():
                satisfied += 1
            continue

        partial = [option for option in valid if option.startswith(element.value)]
        if partial:
            options = _words(*partial)
        elif not clause.consumes_remainder():
            satisfied += 1

    if options is not None:
        return options
    if satisfied < len(target.args):
        return target.args[satisfied].resolve_completion()
    return _words(*(command.name for command in target.commands.visible()))


def resolve_completions(app: Command, context: ParseContext) -> Completion:
    """Compute the completion for the last word of `context.raw_args`."""
    args = context.raw_args
    current = args[-1] if args else ""
    previous = args[-2] if len(args) > 1 else ""

    target: Command = app
    for element in context.elements:
        if isinstance(element.clause, Command):
            target = element.clause

    if not (current.startswith("--") or previous.startswith("--")):
        return command_completion(target, context)

    if "--" in args[:-1]:
        return Completion()

    flag_name = ""
    flag_value = ""
    if previous.startswith("--") and not current.startswith("--"):
        flag_name = previous[2:]
        flag_value = current
    elif current.startswith("--"):
        flag_name = current[2:]

    options = Completion()
    for command in reversed(target.lineage()):
        completion, flag_matched, value_matched = flag_completion(
            command.flags, flag_name, flag_value
        )
        if value_matched:
            return command_completion(target, context)
        if flag_matched:
            return completion
        options = merge_completions(options, completion)
    return options


def completion_options(app: Command, context: ParseContext) -> list[str]:
    """Return the completion words for `context`, sorted."""
    return resolve_completions(app, context).resolve_words()
