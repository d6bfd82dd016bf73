from datetime import datetime, timedelta
from enum import Enum
from pathlib import Path

import pytest

from pinion.parser.hints import Completion
from pinion.parser.utils import coerce_bool, format_duration, parse_duration
from pinion.parser.values import (
    BoolValue,
    ConverterValue,
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
    value_for_type,
)


class Color(Enum):
    RED = "red"
    GREEN = "green"


def test_bool_set_is_idempotent():
    value = BoolValue()
    value.set("true")
    first = value.get()
    value.set("true")
    assert value.get() is first is True
    assert str(value) == "true"


@pytest.mark.parametrize("raw", ["1", "yes", "on", "TRUE", "t"])
def test_coerce_bool_truthy(raw):
    assert coerce_bool(raw) is True


def test_coerce_bool_rejects_unknown():
    with pytest.raises(ValueError):
        coerce_bool("maybe")


def test_int_value_detects_base():
    value = IntValue()
    value.set("0x10")
    assert value.get() == 16
    value.set("010")
    assert value.get() == 10
    with pytest.raises(ValueError):
        value.set("ten")


def test_float_value():
    value = FloatValue()
    value.set("2.5")
    assert value.get() == 2.5
    with pytest.raises(ValueError):
        value.set("x")


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("5s", timedelta(seconds=5)),
        ("1h30m", timedelta(hours=1, minutes=30)),
        ("250ms", timedelta(milliseconds=250)),
        ("1.5h", timedelta(minutes=90)),
        ("0", timedelta(0)),
        ("-2m", timedelta(minutes=-2)),
    ],
)
def test_parse_duration(raw, expected):
    assert parse_duration(raw) == expected


@pytest.mark.parametrize("raw", ["", "5", "notaduration", "5s3", "s"])
def test_parse_duration_invalid(raw):
    with pytest.raises(ValueError):
        parse_duration(raw)


def test_format_duration():
    assert format_duration(timedelta(seconds=5)) == "5s"
    assert format_duration(timedelta(hours=1, minutes=2, seconds=3)) == "1h2m3s"
    assert format_duration(timedelta(milliseconds=250)) == "250ms"
    assert format_duration(timedelta(0)) == "0s"


def test_duration_value_str():
    value = DurationValue()
    value.set("90s")
    assert value.get() == timedelta(seconds=90)
    assert str(value) == "1m30s"


def test_datetime_value():
    value = DateTimeValue()
    value.set("2024-01-02T03:04:05")
    assert value.get() == datetime(2024, 1, 2, 3, 4, 5)
    with pytest.raises(ValueError):
        value.set("not a date at all")


def test_enum_value_with_choices():
    value = EnumValue(["json", "text"])
    value.set("json")
    assert value.get() == "json"
    with pytest.raises(ValueError):
        value.set("xml")
    assert value.builtin_completion().resolve_words() == ["json", "text"]


def test_enum_value_with_enum_type():
    value = EnumValue(Color)
    value.set("RED")
    assert value.get() is Color.RED
    value.set("green")
    assert value.get() is Color.GREEN
    assert str(value) == "GREEN"


def test_path_values(tmp_path):
    file_path = tmp_path / "file.txt"
    file_path.write_text("x")

    value = PathValue()
    value.set(str(file_path))
    assert value.get() == file_path
    assert value.builtin_completion().files

    existing = ExistingFileValue()
    existing.set(str(file_path))
    with pytest.raises(ValueError):
        existing.set(str(tmp_path / "missing"))
    with pytest.raises(ValueError):
        existing.set(str(tmp_path))

    directory = ExistingDirValue()
    directory.set(str(tmp_path))
    assert directory.get() == tmp_path
    assert directory.builtin_completion().directories
    with pytest.raises(ValueError):
        directory.set(str(file_path))


def test_list_value_accumulates_and_resets():
    value = ListValue(IntValue())
    assert value.is_cumulative
    value.set("1")
    value.set("2")
    assert value.get() == [1, 2]
    value.reset()
    assert value.get() == []


def test_string_map_value():
    value = StringMapValue()
    value.set("a=1")
    value.set("b=x=y")
    assert value.get() == {"a": "1", "b": "x=y"}
    with pytest.raises(ValueError):
        value.set("novalue")


def test_counter_value():
    value = CounterValue()
    assert value.is_bool_flag and value.is_cumulative
    value.set("true")
    value.set("true")
    value.set("3")
    assert value.get() == 5
    value.set("false")
    assert value.get() == 0


def test_scalar_reset_restores_initial():
    value = StringValue("start")
    value.set("changed")
    value.reset()
    assert value.get() == "start"


def test_converter_value_wraps_errors():
    value = ConverterValue(int)
    value.set("4")
    assert value.get() == 4
    with pytest.raises(ValueError):
        value.set("four")


def test_value_for_type():
    assert isinstance(value_for_type(str), StringValue)
    assert isinstance(value_for_type(bool), BoolValue)
    assert isinstance(value_for_type(timedelta), DurationValue)
    assert isinstance(value_for_type(Path), PathValue)
    assert isinstance(value_for_type(Color), EnumValue)
    assert isinstance(value_for_type(dict[str, str]), StringMapValue)
    listed = value_for_type(list[int])
    assert isinstance(listed, ListValue)
    assert isinstance(listed.inner, IntValue)
    assert isinstance(value_for_type(lambda raw: raw), ConverterValue)
    with pytest.raises(TypeError):
        value_for_type(42)


def test_default_completion_is_empty():
    assert StringValue().builtin_completion() == Completion()
