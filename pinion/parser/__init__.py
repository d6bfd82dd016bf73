"""
Pinion CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .argument import Arg, ArgGroup
from .command import Command, CommandGroup
from .completion import completion_options, resolve_completions
from .context import FlagScope, ParseContext, ParseElement
from .flag import Flag, FlagGroup
from .hints import Completion
from .lexer import EOL_TOKEN, Token, TokenStream, TokenType, tokenize
from .resolution import consume_flags, finalize_flags, resolve_args, resolve_command, resolve_flags
from .resolver import (
    DontResolve,
    FileResolver,
    JSONResolver,
    MapResolver,
    PrefixedEnvarResolver,
    RenamingResolver,
    Resolver,
    ResolverFunc,
    TOMLResolver,
    YAMLResolver,
    config_file_flag,
)
from .values import (
    BoolValue,
    CounterValue,
    DateTimeValue,
    DurationValue,
    EnumValue,
    ExistingDirValue,
    ExistingFileValue,
    FloatValue,
    IntValue,
    ListValue,
    PathValue,
    StringMapValue,
    StringValue,
    Value,
    value_for_type,
)

__all__ = [
    "Arg",
    "ArgGroup",
    "BoolValue",
    "Command",
    "CommandGroup",
    "Completion",
    "CounterValue",
    "DateTimeValue",
    "DontResolve",
    "DurationValue",
    "EOL_TOKEN",
    "EnumValue",
    "ExistingDirValue",
    "ExistingFileValue",
    "FileResolver",
    "Flag",
    "FlagGroup",
    "FlagScope",
    "FloatValue",
    "IntValue",
    "JSONResolver",
    "ListValue",
    "MapResolver",
    "ParseContext",
    "ParseElement",
    "PathValue",
    "PrefixedEnvarResolver",
    "RenamingResolver",
    "Resolver",
    "ResolverFunc",
    "StringMapValue",
    "StringValue",
    "TOMLResolver",
    "Token",
    "TokenStream",
    "TokenType",
    "Value",
    "YAMLResolver",
    "completion_options",
    "config_file_flag",
    "consume_flags",
    "finalize_flags",
    "resolve_args",
    "resolve_command",
    "resolve_completions",
    "resolve_flags",
    "tokenize",
    "value_for_type",
]
