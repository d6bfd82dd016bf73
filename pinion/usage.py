# Pinion CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Rich help rendering for Pinion applications.

Help for a command lists the flags visible at that depth (the command's own
flags plus those of every ancestor), its positional arguments, and its visible
subcommands. Hidden flags and commands are never shown. Negatable boolean
flags are rendered as `--[no-]name`.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

from pinion.parser.argument import Arg
from pinion.parser.command import Command
from pinion.parser.flag import Flag

if TYPE_CHECKING:
    from pinion.application import Application

COLUMN_WIDTH = 30


def format_flag(flag: Flag) -> str:
    name = f"--[no-]{flag.name}" if flag.is_negatable() else f"--{flag.name}"
    text = f"-{flag.short}, {name}" if flag.short else f"    {name}"
    if flag.needs_value():
        text += f"={flag.format_placeholder()}"
    return text


def format_command_usage(command: Command) -> str:
    parts = [command.name]
    for arg in command.args:
        if not arg.hidden:
            parts.append(arg.format_usage())
    return " ".join(parts)


def visible_flags(command: Command) -> list[Flag]:
    flags: list[Flag] = []
    for level in command.lineage():
        flags.extend(level.flags.visible())
    return flags


def get_usage(app: Application, command: Command | None = None) -> str:
    """Return the one-line usage string for `command` (the application when omitted)."""
    command = command or app
    parts = [app.name]
    if command is not app:
        parts.append(command.full_command())
    if visible_flags(command):
        parts.append("[<flags>]")
    if command.commands:
        parts.append("<command> [<args> ...]")
    else:
        parts.extend(arg.format_usage() for arg in command.args if not arg.hidden)
    return " ".join(parts)


def _print_row(console: Console, left: str, help_text: str, style: str) -> None:
    line = f"  [{style}]{escape(left)}[/{style}]{' ' * max(COLUMN_WIDTH - len(left), 1)}"
    if help_text and len(left) >= COLUMN_WIDTH:
        line += f"\n  {'':<{COLUMN_WIDTH}}"
    console.print(line + escape(help_text))


def _flag_help(flag: Flag) -> str:
    help_text = flag.help
    envar = flag.get_envar()
    if envar:
        help_text += f" (${envar})"
    return help_text.strip()


def render_help(
    app: Application, command: Command | None = None, console: Console | None = None
) -> None:
    """
    Print formatted help for `command` using Rich output.

    Includes usage, description, flags, arguments and subcommands.
    """
    command = command or app
    console = console or app.console

    console.print(f"[pinion.usage]usage: {escape(get_usage(app, command))}[/pinion.usage]\n")
    if command.help:
        console.print(escape(command.help) + "\n")

    flags = visible_flags(command)
    if flags:
        console.print("[pinion.heading]Flags:[/pinion.heading]")
        for flag in flags:
            _print_row(console, format_flag(flag), _flag_help(flag), "pinion.flag")
        console.print()

    args: list[Arg] = [arg for arg in command.args if not arg.hidden]
    if args:
        console.print("[pinion.heading]Args:[/pinion.heading]")
        for arg in args:
            _print_row(console, arg.format_usage(), arg.help, "pinion.placeholder")
        console.print()

    commands = command.commands.visible()
    if commands:
        console.print("[pinion.heading]Commands:[/pinion.heading]")
        for child in commands:
            name = format_command_usage(child)
            if child.aliases:
                name += f" ({', '.join(child.aliases)})"
            if child.default:
                name += "*"
            _print_row(console, name, child.help, "pinion.command")
        console.print()
