# Pinion CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Resolvers supply values for flags and arguments that were not given on the
command line.

A resolver is any object with `resolve(key, context) -> list[str] | None`. It
must not modify the context. `None` or an empty list means "not resolved" and
the next resolver in the chain is consulted. Resolvers signal failures by
raising.

Every `ParseContext` consults, in order:

1. `envar_resolver()`: the clause's bound environment variable.
2. Resolvers registered with `Application.add_resolver()` (or installed by a
   dispatch callback through `ParseContext.add_resolver()`), first one wins.
3. `defaults_resolver()`: the clause's static defaults.

File based resolvers flatten nested mappings into dotted keys, so

    [server]
    port = 8080

resolves the key `server.port`. Lists yield one value per element, booleans
become `"true"` / `"false"`, numbers are rendered with `str()`.
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping, Protocol

import toml
import yaml

from pinion.exceptions import ParseError
from pinion.logger import logger
from pinion.utils import envar_transform

if TYPE_CHECKING:
    from pinion.parser.context import ParseContext
    from pinion.parser.flag import Flag
    from pinion.parser.command import Command


class Resolver(Protocol):
    def resolve(self, key: str, context: ParseContext) -> list[str] | None: ...


class ResolverFunc:
    """Adapts a plain function `(key, context) -> list[str] | None` to the `Resolver` protocol."""

    def __init__(
        self,
        function: Callable[[str, ParseContext], list[str] | None],
        name: str | None = None,
    ) -> None:
        self.function = function
        self.name = name or getattr(function, "__name__", "resolver")

    def resolve(self, key: str, context: ParseContext) -> list[str] | None:
        return self.function(key, context)

    def __str__(self) -> str:
        return self.name


def defaults_resolver() -> Resolver:
    def resolve_default(key: str, context: ParseContext) -> list[str] | None:
        clause = context.find_clause(key)
        if clause is None:
            return None
        return list(clause.defaults)

    return ResolverFunc(resolve_default, "default")


def envar_resolver() -> Resolver:
    def resolve_envar(key: str, context: ParseContext) -> list[str] | None:
        clause = context.find_clause(key)
        if clause is None:
            return None
        return clause.envar_values()

    return ResolverFunc(resolve_envar, "environment")


def _decode_value(value: Any) -> list[str]:
    if isinstance(value, bool):
        return ["true" if value else "false"]
    if isinstance(value, (list, tuple)):
        return [item for element in value for item in _decode_value(element)]
    if value is None:
        return []
    if isinstance(value, (str, int, float)):
        return [str(value)]
    raise ValueError(f"unsupported value {value!r} (of type {type(value).__name__})")


def flatten_mapping(data: Mapping[str, Any], prefix: str = "") -> dict[str, list[str]]:
    """Flatten nested mappings into `{"a.b": [...]}` with every leaf decoded to strings."""
    flattened: dict[str, list[str]] = {}
    for key, value in data.items():
        name = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flattened.update(flatten_mapping(value, f"{name}."))
        else:
            flattened[name] = _decode_value(value)
    return flattened


class MapResolver:
    """Resolves keys from a static mapping of name to value list."""

    def __init__(self, values: Mapping[str, Iterable[str] | str]) -> None:
        self.values: dict[str, list[str]] = {
            key: [value] if isinstance(value, str) else list(value)
            for key, value in values.items()
        }

    def resolve(self, key: str, context: ParseContext) -> list[str] | None:
        return self.values.get(key)

    def __str__(self) -> str:
        return type(self).__name__


class JSONResolver(MapResolver):
    """
    Resolves keys from a JSON object.

    Raises:
        ValueError: If the document is not a JSON object or holds unsupported values.
    """

    def __init__(self, data: str | bytes) -> None:
        values = json.loads(data)
        if not isinstance(values, dict):
            raise ValueError("JSON configuration must be an object")
        super().__init__(flatten_mapping(values))


class YAMLResolver(MapResolver):
    def __init__(self, data: str | bytes) -> None:
        values = yaml.safe_load(data) or {}
        if not isinstance(values, dict):
            raise ValueError("YAML configuration must be a mapping")
        super().__init__(flatten_mapping(values))


class TOMLResolver(MapResolver):
    def __init__(self, data: str) -> None:
        super().__init__(flatten_mapping(toml.loads(data)))


class FileResolver:
    """Builds a resolver from a configuration file, choosing the format by suffix."""

    @staticmethod
    def from_path(file_path: Path | str) -> MapResolver:
        """
        Load a `.json`, `.yaml`/`.yml` or `.toml` file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the suffix is not supported or the content is invalid.
        """
        path = Path(file_path)
        if not path.is_file():
            raise FileNotFoundError(f"No such config file: {file_path}")

        suffix = path.suffix
        with path.open("r", encoding="UTF-8") as config_file:
            if suffix in (".yaml", ".yml"):
                resolver: MapResolver = YAMLResolver(config_file.read())
            elif suffix == ".toml":
                resolver = TOMLResolver(config_file.read())
            elif suffix == ".json":
                resolver = JSONResolver(config_file.read())
            else:
                raise ValueError(f"Unsupported config format: {suffix}")
        logger.debug("Loaded resolver values from '%s'", path)
        return resolver


class RenamingResolver:
    """Maps keys through `rename` before asking the wrapped resolver."""

    def __init__(self, resolver: Resolver, rename: Callable[[str], str]) -> None:
        self.resolver = resolver
        self.rename = rename

    def resolve(self, key: str, context: ParseContext) -> list[str] | None:
        return self.resolver.resolve(self.rename(key), context)

    def __str__(self) -> str:
        return f"{type(self).__name__}({self.resolver})"


class PrefixedEnvarResolver:
    """
    Resolves any flag or argument from `<PREFIX><NAME>` environment variables.

    With a prefix of `APP_` the flag `--some-flag` reads `APP_SOME_FLAG`. When a
    separator is given, the variable is split into several values.
    """

    def __init__(self, prefix: str, separator: str = "") -> None:
        self.prefix = prefix
        self.separator = separator

    def resolve(self, key: str, context: ParseContext) -> list[str] | None:
        name = envar_transform(self.prefix + key)
        value = os.environ.get(name)
        if value is None:
            return None
        if not self.separator:
            return [value]
        return value.split(self.separator)

    def __str__(self) -> str:
        return f"{type(self).__name__}({self.prefix!r})"


class DontResolve:
    """Never resolves the given keys, delegating every other key."""

    def __init__(self, resolver: Resolver, *keys: str) -> None:
        self.resolver = resolver
        self.keys = frozenset(keys)

    def resolve(self, key: str, context: ParseContext) -> list[str] | None:
        if key in self.keys:
            return None
        return self.resolver.resolve(key, context)

    def __str__(self) -> str:
        return f"{type(self).__name__}({self.resolver})"


def config_file_flag(command: Command, name: str = "config", help: str = "") -> Flag:
    """
    Declare a flag whose value names a configuration file.

    When the flag is parsed its file is loaded with `FileResolver.from_path`
    and added to the context's resolver chain, so values from the file apply
    to every flag that was not given explicitly.
    """

    def load_config(context: ParseContext) -> None:
        path = flag.get()
        try:
            resolver = FileResolver.from_path(path)
        except (OSError, ValueError, yaml.YAMLError) as error:
            raise ParseError(f"failed to load {flag} file '{path}': {error}") from error
        context.add_resolver(resolver)

    flag = command.add_flag(
        name,
        help or "Configuration file (.json, .yaml, .yml or .toml).",
        type=Path,
        placeholder="FILE",
        dispatch=load_config,
    )
    return flag
