# Pinion CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by the Pinion argument parser.

Two channels are kept apart:

- `DeclarationError` is raised by `Application.validate()` when the declared
  command tree itself is inconsistent (duplicate names, required flags with
  defaults, argument ordering, mixing arguments with subcommands, ...). These
  are programmer mistakes and are detected before any token is consumed.
- `ParseError` and its subclasses are raised while resolving user supplied
  input. They name the offending flag, argument or command.

Exception Hierarchy:
- PinionError
    ├── DeclarationError
    └── ParseError
        ├── TokenError
        ├── ExpansionError
        ├── UnknownFlagError
        ├── UnknownCommandError
        ├── MissingCommandError
        ├── MissingFlagError
        ├── MissingArgumentError
        ├── ExpectedValueError
        ├── ValueConversionError
        ├── RepeatedFlagError
        └── UnexpectedArgumentError

Exceptions raised by caller supplied actions and validators are never wrapped.
"""


class PinionError(Exception):
    """Base exception for the Pinion parser."""


class DeclarationError(PinionError):
    """Exception raised when the declared flags, arguments or commands are invalid."""


class ParseError(PinionError):
    """Exception raised when the command line can not be resolved."""


class TokenError(ParseError):
    """Exception raised for malformed tokens such as a bare '-'."""


class ExpansionError(ParseError):
    """Exception raised when an '@file' argument can not be read."""


class UnknownFlagError(ParseError):
    """Exception raised when a flag is not declared in the active scope."""


class UnknownCommandError(ParseError):
    """Exception raised when a token does not name a known command."""


class MissingCommandError(ParseError):
    """Exception raised when a command was expected but none was given."""


class MissingFlagError(ParseError):
    """Exception raised when required flags were not provided."""

    def __init__(self, flags: list[str]) -> None:
        self.flags = flags
        if len(flags) == 1:
            message = f"required flag {flags[0]} not provided"
        else:
            message = f"required flags {', '.join(flags)} not provided"
        super().__init__(message)


class MissingArgumentError(ParseError):
    """Exception raised when a required positional argument was not provided."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"required argument '{name}' not provided")


class ExpectedValueError(ParseError):
    """Exception raised when a flag that takes a value is not followed by one."""


class ValueConversionError(ParseError):
    """Exception raised when a value can not be converted by its Value binding."""


class RepeatedFlagError(ParseError):
    """Exception raised when a non-cumulative flag is given more than once."""


class UnexpectedArgumentError(ParseError):
    """Exception raised when tokens remain after the command line was resolved."""

    def __init__(self, tokens: list[str]) -> None:
        self.tokens = tokens
        if len(tokens) == 1:
            message = f"unexpected argument '{tokens[0]}'"
        else:
            message = f"unexpected arguments '{' '.join(tokens)}'"
        super().__init__(message)
