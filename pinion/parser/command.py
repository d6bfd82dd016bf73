# Pinion CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `Command`, a named subtree of flags plus either positional arguments or
nested commands, and `CommandGroup`, the ordered set of a command's children.

Commands are declared through builder methods that return the created clause:

    app = Application("deploy")
    serve = app.add_command("serve", "Run the server.", aliases=["s"])
    serve.add_flag("port", short="p", type=int, default=8080)
    serve.add_argument("root", type=Path, required=True)

Nothing is checked while declaring; `Application.validate()` walks the finished
tree before any token is consumed.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Iterable, Iterator, get_origin

from pinion.parser.argument import Arg, ArgGroup
from pinion.parser.clause import Action, ActionMixin
from pinion.parser.flag import Flag, FlagGroup
from pinion.parser.values import EnumValue, ListValue, StringValue, Value, value_for_type

if TYPE_CHECKING:
    from pinion.parser.context import ParseContext

Validator = Callable[["ParseContext"], Any]


def build_value(
    type_: Any = None,
    value: Value | None = None,
    choices: Iterable[str] | None = None,
) -> Value:
    """Pick the `Value` binding for a new flag or argument."""
    if value is not None:
        return value
    if choices is not None:
        inner = EnumValue(choices)
        if type_ is list or get_origin(type_) is list:
            return ListValue(inner)
        return inner
    if type_ is None:
        return StringValue()
    return value_for_type(type_)


class Command(ActionMixin):
    """
    A (sub)command.

    Args:
        name (str): Canonical name, used in the selected command path.
        help (str): Help text.
        aliases (list[str] | None): Alternate names accepted on the command line.
        hidden (bool): Omit from help and completion.
        default (bool): Select this command when no sibling is named.
    """

    def __init__(
        self,
        name: str,
        help: str = "",
        *,
        aliases: list[str] | None = None,
        hidden: bool = False,
        default: bool = False,
    ) -> None:
        self.name = name
        self.help = help
        self.aliases = aliases or []
        self.hidden = hidden
        self.default = default
        self.parent: Command | None = None
        self.envar_prefix = ""
        self.flags = FlagGroup()
        self.args = ArgGroup()
        self.commands = CommandGroup()
        self.validators: list[Validator] = []
        self._init_actions()

    def add_flag(
        self,
        name: str,
        help: str = "",
        *,
        short: str | None = None,
        type: Any = None,
        value: Value | None = None,
        default: Any = None,
        required: bool = False,
        envar: str | None = None,
        no_envar: bool = False,
        hidden: bool = False,
        placeholder: str | None = None,
        dispatch: Action | None = None,
        choices: Iterable[str] | None = None,
    ) -> Flag:
        """
        Declare a flag on this command.

        Args:
            name (str): Long name, used as `--name`.
            help (str): Help text.
            short (str | None): Single character short name, used as `-s`.
            type (Any): Python type used to pick a built-in `Value`, e.g. `int`,
                `bool`, `timedelta`, `list[str]` or an `Enum` subclass.
            value (Value | None): Explicit value binding; overrides `type`.
            default (Any): Default value(s).
            required (bool): The flag must be supplied.
            envar (str | None): Environment variable consulted when absent.
            no_envar (bool): Never consult an environment variable.
            hidden (bool): Omit from help and completion.
            placeholder (str | None): Value name shown in help.
            dispatch (Action | None): Called as soon as the flag is parsed.
            choices (Iterable[str] | None): Restrict the value to these strings.

        Returns:
            Flag: The declared flag.
        """
        flag = Flag(
            name,
            help,
            short=short,
            placeholder=placeholder,
            value=build_value(type, value, choices),
            default=default,
            required=required,
            envar=envar,
            no_envar=no_envar,
            hidden=hidden,
            dispatch=dispatch,
        )
        return self.flags.add(flag)

    def add_argument(
        self,
        name: str,
        help: str = "",
        *,
        type: Any = None,
        value: Value | None = None,
        default: Any = None,
        required: bool = False,
        envar: str | None = None,
        no_envar: bool = False,
        hidden: bool = False,
        dispatch: Action | None = None,
        choices: Iterable[str] | None = None,
    ) -> Arg:
        """Declare the next positional argument. Accepts the same options as `add_flag`."""
        arg = Arg(
            name,
            help,
            value=build_value(type, value, choices),
            default=default,
            required=required,
            envar=envar,
            no_envar=no_envar,
            hidden=hidden,
            dispatch=dispatch,
        )
        return self.args.add(arg)

    def add_command(
        self,
        name: str,
        help: str = "",
        *,
        aliases: list[str] | None = None,
        hidden: bool = False,
        default: bool = False,
    ) -> Command:
        command = Command(name, help, aliases=aliases, hidden=hidden, default=default)
        return self.commands.add(command, parent=self)

    def add_validator(self, validator: Validator) -> Command:
        """Run `validator(context)` after parsing; raising aborts the parse."""
        self.validators.append(validator)
        return self

    def apply_validators(self, context: ParseContext) -> None:
        for validator in self.validators:
            validator(context)

    def get_flag(self, name: str) -> Flag | None:
        return self.flags.get(name)

    def get_argument(self, name: str) -> Arg | None:
        return self.args.get(name)

    def get_command(self, name: str) -> Command | None:
        return self.commands.get(name)

    def lineage(self) -> list[Command]:
        """Return this command and its ancestors, root first."""
        chain: list[Command] = []
        command: Command | None = self
        while command is not None:
            chain.append(command)
            command = command.parent
        return list(reversed(chain))

    def full_command(self) -> str:
        """Space separated path from the application to this command (root excluded)."""
        return " ".join(command.name for command in self.lineage()[1:])

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class CommandGroup:
    """Child commands in declaration order."""

    def __init__(self) -> None:
        self.commands: list[Command] = []

    def add(self, command: Command, parent: Command | None = None) -> Command:
        command.parent = parent
        self.commands.append(command)
        return command

    def insert(self, index: int, command: Command, parent: Command | None = None) -> Command:
        command.parent = parent
        self.commands.insert(index, command)
        return command

    def get(self, name: str) -> Command | None:
        """Find a child by canonical name or alias."""
        for command in self.commands:
            if command.name == name or name in command.aliases:
                return command
        return None

    def default(self) -> Command | None:
        for command in self.commands:
            if command.default:
                return command
        return None

    def visible(self) -> list[Command]:
        return [command for command in self.commands if not command.hidden]

    def __iter__(self) -> Iterator[Command]:
        return iter(self.commands)

    def __len__(self) -> int:
        return len(self.commands)

    def __bool__(self) -> bool:
        return bool(self.commands)
