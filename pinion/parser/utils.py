# Pinion CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Contains value coercion utilities used by the built-in `Value` bindings.

Functions:
- coerce_bool: Strictly convert a string to a boolean.
- coerce_enum: Convert a string to an Enum member by name or value.
- coerce_datetime: Parse a date/time string with `python-dateutil`.
- parse_duration: Convert Go-style duration strings (`1h30m`, `250ms`) to `timedelta`.
- format_duration: Render a `timedelta` back into the same compact notation.
"""
from __future__ import annotations

import re
from datetime import datetime, timedelta
from enum import Enum, EnumMeta
from typing import Any

from dateutil import parser as date_parser

TRUE_STRINGS = frozenset({"true", "t", "1", "yes", "y", "on"})
FALSE_STRINGS = frozenset({"false", "f", "0", "no", "n", "off"})

_DURATION_UNITS: dict[str, float] = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def coerce_bool(value: str | bool) -> bool:
    """
    Convert a string to a boolean.

    Unlike a plain `bool()` call, unknown strings are rejected so that
    `--debug=maybe` is reported instead of silently enabling the flag.

    Args:
        value (str | bool): The input string or boolean.

    Returns:
        bool: Parsed boolean result.

    Raises:
        ValueError: If the string is not a recognised boolean spelling.
    """
    if isinstance(value, bool):
        return value
    normalized = value.strip().lower()
    if normalized in TRUE_STRINGS:
        return True
    if normalized in FALSE_STRINGS:
        return False
    raise ValueError(f"'{value}' is not a valid boolean")


def coerce_enum(value: Any, enum_type: EnumMeta) -> Enum:
    """
    Convert a raw value or string to an Enum instance.

    Tries to resolve by name, then by value, then by the coerced base type of the
    member values.

    Raises:
        ValueError: If the value cannot be resolved to a valid Enum member.
    """
    if isinstance(value, enum_type):
        return value  # type: ignore[return-value]

    if isinstance(value, str):
        try:
            return enum_type[value]  # type: ignore[index]
        except KeyError:
            pass

    base_type = type(next(iter(enum_type)).value)
    try:
        coerced_value = base_type(value)
        return enum_type(coerced_value)
    except (ValueError, TypeError):
        values = [str(enum.value) for enum in enum_type]
        raise ValueError(f"'{value}' should be one of {{{', '.join(values)}}}") from None


def coerce_datetime(value: str) -> datetime:
    try:
        return date_parser.parse(value)
    except (ValueError, OverflowError) as error:
        raise ValueError(f"'{value}' could not be parsed as a datetime") from error


def parse_duration(value: str) -> timedelta:
    """
    Parse a duration string such as `300ms`, `1.5h` or `2h45m10s`.

    A bare `0` is accepted. An optional leading sign applies to the whole
    duration.

    Raises:
        ValueError: If the string is not a valid duration.
    """
    text = value.strip()
    sign = 1.0
    if text[:1] in ("+", "-"):
        if text[0] == "-":
            sign = -1.0
        text = text[1:]

    if text == "0":
        return timedelta(0)
    if not text:
        raise ValueError(f"invalid duration '{value}'")

    seconds = 0.0
    position = 0
    for match in _DURATION_PART.finditer(text):
        if match.start() != position:
            raise ValueError(f"invalid duration '{value}'")
        number, unit = match.groups()
        seconds += float(number) * _DURATION_UNITS[unit]
        position = match.end()

    if position != len(text):
        raise ValueError(f"invalid duration '{value}'")
    return timedelta(seconds=sign * seconds)


def format_duration(value: timedelta) -> str:
    """Render a `timedelta` as `1h2m3.5s`, `250ms` or `0s`."""
    total = value.total_seconds()
    if total == 0:
        return "0s"

    sign = "-" if total < 0 else ""
    total = abs(total)
    if total < 1:
        milliseconds = total * 1000
        if milliseconds >= 1:
            return f"{sign}{milliseconds:g}ms"
        return f"{sign}{total * 1e6:g}us"

    hours, remainder = divmod(total, 3600)
    minutes, seconds = divmod(remainder, 60)
    parts = []
    if hours:
        parts.append(f"{int(hours)}h")
    if hours or minutes:
        parts.append(f"{int(minutes)}m")
    parts.append(f"{seconds:g}s")
    return sign + "".join(parts)
