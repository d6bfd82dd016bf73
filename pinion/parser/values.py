# Pinion CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `Value` binding contract and the built-in value types.

A `Value` converts raw strings from the command line, environment variables or
resolvers into a Python object. The parser never inspects the concrete class;
it only relies on the contract:

- `set(raw)`: convert and store `raw`, raising `ValueError` on failure.
- `get()`: return the bound Python object.
- `reset()`: return to the unset state before a new parse.
- `str(value)`: render the current value for help output.
- `is_bool_flag`: the flag may be given without a value and negated with `--no-`.
- `is_cumulative`: repeated flags accumulate, arguments consume the remainder,
  and multi-line environment variables are split into several values.
- `builtin_completion()`: completion hints inferred from the type.

Scalar `set()` calls are idempotent: setting the same raw string twice leaves
the same bound state as setting it once.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum, EnumMeta
from pathlib import Path
from typing import Any, Callable, Iterable, get_args, get_origin

from pinion.parser.hints import Completion
from pinion.parser.utils import (
    coerce_bool,
    coerce_datetime,
    coerce_enum,
    format_duration,
    parse_duration,
)


class Value:
    """Base class for all value bindings."""

    is_bool_flag: bool = False
    is_cumulative: bool = False

    def set(self, raw: str) -> None:
        raise NotImplementedError

    def get(self) -> Any:
        raise NotImplementedError

    def reset(self) -> None:
        raise NotImplementedError

    def builtin_completion(self) -> Completion:
        return Completion()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"


class ScalarValue(Value):
    """
    Holds a single converted value.

    Subclasses implement `convert()`; `set()` replaces any earlier value.
    """

    def __init__(self, initial: Any = None) -> None:
        self.initial = initial
        self.value: Any = initial

    def convert(self, raw: str) -> Any:
        return raw

    def set(self, raw: str) -> None:
        self.value = self.convert(raw)

    def get(self) -> Any:
        return self.value

    def reset(self) -> None:
        self.value = self.initial

    def __str__(self) -> str:
        return "" if self.value is None else str(self.value)


class StringValue(ScalarValue):
    pass


class BoolValue(ScalarValue):
    is_bool_flag = True

    def __init__(self, initial: bool | None = False) -> None:
        super().__init__(initial)

    def convert(self, raw: str) -> bool:
        return coerce_bool(raw)

    def __str__(self) -> str:
        if self.value is None:
            return ""
        return "true" if self.value else "false"


class IntValue(ScalarValue):
    def convert(self, raw: str) -> int:
        try:
            return int(raw, 0)
        except ValueError:
            # int("010", 0) is rejected, plain decimal is still fine
            try:
                return int(raw, 10)
            except ValueError:
                raise ValueError(f"'{raw}' is not a valid integer") from None


class FloatValue(ScalarValue):
    def convert(self, raw: str) -> float:
        try:
            return float(raw)
        except ValueError:
            raise ValueError(f"'{raw}' is not a valid number") from None


class DurationValue(ScalarValue):
    """Go-style durations such as `10s`, `1h30m` or `250ms` as `timedelta`."""

    def convert(self, raw: str) -> timedelta:
        return parse_duration(raw)

    def __str__(self) -> str:
        return "" if self.value is None else format_duration(self.value)


class DateTimeValue(ScalarValue):
    def convert(self, raw: str) -> datetime:
        return coerce_datetime(raw)

    def __str__(self) -> str:
        return "" if self.value is None else self.value.isoformat()


class EnumValue(ScalarValue):
    """
    Restricts the value to a fixed set of choices.

    Args:
        choices: Either an iterable of allowed strings, or an `Enum` subclass
            whose member names (or values) are accepted.
    """

    def __init__(
        self, choices: Iterable[str] | EnumMeta, initial: Any = None
    ) -> None:
        super().__init__(initial)
        self.enum_type: EnumMeta | None = None
        if isinstance(choices, EnumMeta):
            self.enum_type = choices
            self.choices: list[str] = [member.name for member in choices]  # type: ignore[var-annotated]
        else:
            self.choices = [str(choice) for choice in choices]

    def convert(self, raw: str) -> Any:
        if self.enum_type is not None:
            return coerce_enum(raw, self.enum_type)
        if raw not in self.choices:
            raise ValueError(
                f"'{raw}' should be one of {{{', '.join(self.choices)}}}"
            )
        return raw

    def builtin_completion(self) -> Completion:
        completion = Completion()
        completion.add_words(*self.choices)
        return completion

    def __str__(self) -> str:
        if isinstance(self.value, Enum):
            return self.value.name
        return super().__str__()


class PathValue(ScalarValue):
    def convert(self, raw: str) -> Path:
        return Path(raw).expanduser()

    def builtin_completion(self) -> Completion:
        return Completion(files=True)


class ExistingFileValue(PathValue):
    def convert(self, raw: str) -> Path:
        path = super().convert(raw)
        if not path.exists():
            raise ValueError(f"path '{raw}' does not exist")
        if path.is_dir():
            raise ValueError(f"'{raw}' is a directory")
        return path


class ExistingDirValue(PathValue):
    def convert(self, raw: str) -> Path:
        path = super().convert(raw)
        if not path.exists():
            raise ValueError(f"path '{raw}' does not exist")
        if not path.is_dir():
            raise ValueError(f"'{raw}' is not a directory")
        return path

    def builtin_completion(self) -> Completion:
        return Completion(directories=True)


class ConverterValue(ScalarValue):
    """Wraps an arbitrary `str -> object` callable, like `type=` in argparse."""

    def __init__(self, converter: Callable[[str], Any], initial: Any = None) -> None:
        super().__init__(initial)
        self.converter = converter

    def convert(self, raw: str) -> Any:
        try:
            return self.converter(raw)
        except (TypeError, ValueError) as error:
            name = getattr(self.converter, "__name__", repr(self.converter))
            raise ValueError(f"'{raw}' could not be converted by {name}: {error}") from error


class ListValue(Value):
    """Makes any scalar value cumulative; each `set()` appends one element."""

    is_cumulative = True

    def __init__(self, inner: ScalarValue | None = None) -> None:
        self.inner = inner or StringValue()
        self.values: list[Any] = []

    @property
    def is_bool_flag(self) -> bool:  # type: ignore[override]
        return self.inner.is_bool_flag

    def set(self, raw: str) -> None:
        self.values.append(self.inner.convert(raw))

    def get(self) -> list[Any]:
        return list(self.values)

    def reset(self) -> None:
        self.values = []

    def builtin_completion(self) -> Completion:
        return self.inner.builtin_completion()

    def __str__(self) -> str:
        return ", ".join(str(value) for value in self.values)


class StringMapValue(Value):
    """Accumulates `KEY=VALUE` pairs into a dict."""

    is_cumulative = True

    def __init__(self) -> None:
        self.values: dict[str, str] = {}

    def set(self, raw: str) -> None:
        key, separator, value = raw.partition("=")
        if not separator:
            raise ValueError(f"expected KEY=VALUE got '{raw}'")
        self.values[key] = value

    def get(self) -> dict[str, str]:
        return dict(self.values)

    def reset(self) -> None:
        self.values = {}

    def __str__(self) -> str:
        return ", ".join(f"{key}={value}" for key, value in self.values.items())


class CounterValue(Value):
    """Counts occurrences, e.g. `-vvv` gives 3. An explicit integer adds to the count."""

    is_bool_flag = True
    is_cumulative = True

    def __init__(self) -> None:
        self.count = 0

    def set(self, raw: str) -> None:
        if raw == "true":
            self.count += 1
        elif raw == "false":
            self.count = 0
        else:
            try:
                self.count += int(raw)
            except ValueError:
                raise ValueError(f"'{raw}' is not a valid count") from None

    def get(self) -> int:
        return self.count

    def reset(self) -> None:
        self.count = 0

    def __str__(self) -> str:
        return str(self.count)


_TYPE_MAP: dict[Any, type[ScalarValue]] = {
    str: StringValue,
    bool: BoolValue,
    int: IntValue,
    float: FloatValue,
    timedelta: DurationValue,
    datetime: DateTimeValue,
    Path: PathValue,
}


def value_for_type(type_: Any) -> Value:
    """
    Return a fresh `Value` for a Python type.

    Supports `str`, `bool`, `int`, `float`, `timedelta`, `datetime`, `Path`,
    `Enum` subclasses, `list[X]` of any of these, `dict` / `dict[str, str]` and
    any other callable taking a single string.

    Raises:
        TypeError: If `type_` is not supported.
    """
    origin = get_origin(type_)
    if type_ is list or origin is list:
        args = get_args(type_)
        inner = value_for_type(args[0]) if args else StringValue()
        if not isinstance(inner, ScalarValue):
            raise TypeError(f"unsupported list element type {args[0]!r}")
        return ListValue(inner)
    if type_ is dict or origin is dict:
        return StringMapValue()
    if isinstance(type_, EnumMeta):
        return EnumValue(type_)
    if type_ in _TYPE_MAP:
        return _TYPE_MAP[type_]()
    if callable(type_):
        return ConverterValue(type_)
    raise TypeError(f"unsupported value type {type_!r}")
