import io
from datetime import timedelta

import pytest
from rich.console import Console

from pinion import Application
from pinion.exceptions import (
    ExpectedValueError,
    MissingFlagError,
    RepeatedFlagError,
    UnknownFlagError,
    ValueConversionError,
)
from pinion.parser.context import ParseContext
from pinion.parser.resolution import resolve_flags
from pinion.parser.values import CounterValue


@pytest.fixture
def app():
    return Application(
        "test",
        console=Console(file=io.StringIO(), width=200, color_system=None),
        terminate=lambda status: None,
    )


def test_long_flag_with_equals_matches_separate_value(app):
    flag = app.add_flag("flag")
    app.parse(["--flag=value"])
    joined = flag.get()
    app.parse(["--flag", "value"])
    assert flag.get() == joined == "value"


def test_short_flag_forms(app):
    flag = app.add_flag("output", short="o")
    app.parse(["-o", "a.txt"])
    assert flag.get() == "a.txt"
    app.parse(["-ob.txt"])
    assert flag.get() == "b.txt"


def test_combined_short_bool_flags(app):
    a = app.add_flag("alpha", short="a", type=bool)
    b = app.add_flag("beta", short="b", type=bool, default=False)
    app.parse(["-ab"])
    assert a.get() is True
    assert b.get() is True

    app.parse(["-a"])
    assert a.get() is True
    assert b.get() is False


def test_combined_bool_and_value_short_flags(app):
    verbose = app.add_flag("verbose", short="v", type=bool)
    output = app.add_flag("output", short="o")
    app.parse(["-vofile.txt"])
    assert verbose.get() is True
    assert output.get() == "file.txt"


def test_negated_bool_flag(app):
    debug = app.add_flag("debug", type=bool, default=True)
    app.parse(["--no-debug"])
    assert debug.get() is False
    app.parse([])
    assert debug.get() is True


def test_bool_flag_with_explicit_value(app):
    debug = app.add_flag("debug", type=bool)
    app.parse(["--debug=false"])
    assert debug.get() is False


def test_negating_non_bool_flag_is_an_error(app):
    app.add_flag("name")
    app.add_flag("other", type=bool)
    with pytest.raises(UnknownFlagError, match="cannot be negated"):
        app.parse(["--no-name"])


def test_flag_declared_with_no_prefix_is_not_double_negated(app):
    no_cache = app.add_flag("no-cache", type=bool)
    app.parse(["--no-cache"])
    assert no_cache.get() is True
    with pytest.raises(UnknownFlagError):
        app.parse(["--no-no-cache"])


def test_unknown_flags(app):
    app.add_flag("verbose", type=bool)
    with pytest.raises(UnknownFlagError, match="unknown long flag '--verbos'") as error:
        app.parse(["--verbos"])
    assert "--verbose" in str(error.value)
    with pytest.raises(UnknownFlagError, match="unknown short flag '-x'"):
        app.parse(["-x"])


def test_value_flag_without_value(app):
    app.add_flag("name")
    with pytest.raises(ExpectedValueError, match="expected argument for flag '--name'"):
        app.parse(["--name"])
    app.add_flag("debug", type=bool)
    with pytest.raises(ExpectedValueError):
        app.parse(["--name", "--debug"])


def test_repeated_scalar_flag_is_an_error(app):
    app.add_flag("name")
    with pytest.raises(RepeatedFlagError, match="cannot be repeated"):
        app.parse(["--name", "a", "--name", "b"])


def test_repeated_cumulative_flag_accumulates(app):
    tags = app.add_flag("tag", short="t", type=list[str])
    app.parse(["--tag", "a", "-t", "b", "--tag=c"])
    assert tags.get() == ["a", "b", "c"]


def test_values_reset_between_parses(app):
    tags = app.add_flag("tag", type=list[str])
    app.parse(["--tag", "a"])
    app.parse(["--tag", "b"])
    assert tags.get() == ["b"]


def test_counter_flag(app):
    verbose = app.add_flag("verbose", short="v", value=CounterValue())
    app.parse(["-vvv"])
    assert verbose.get() == 3


def test_missing_required_flag_singular_and_plural(app):
    app.add_flag("one", required=True)
    with pytest.raises(MissingFlagError, match="required flag --one not provided"):
        app.parse([])
    app.add_flag("two", required=True)
    with pytest.raises(
        MissingFlagError, match="required flags --one, --two not provided"
    ) as error:
        app.parse([])
    assert error.value.flags == ["--one", "--two"]


def test_conversion_errors_name_the_flag(app):
    app.add_flag("count", type=int)
    with pytest.raises(ValueConversionError, match="--count"):
        app.parse(["--count", "many"])


def test_invalid_default_reported_as_default(app):
    app.add_flag("count", type=int, default="many")
    with pytest.raises(ValueConversionError, match="default value for --count is invalid"):
        app.parse([])


def test_ttl_scenario(app):
    ttl = app.add_flag("ttl", short="t", type=timedelta, default="5s")
    app.parse([])
    assert ttl.get() == timedelta(seconds=5)
    app.parse(["-t", "10s"])
    assert ttl.get() == timedelta(seconds=10)
    with pytest.raises(ValueConversionError):
        app.parse(["--ttl=notaduration"])


def test_flag_choices(app):
    fmt = app.add_flag("format", choices=["json", "text"], default="text")
    app.parse([])
    assert fmt.get() == "text"
    with pytest.raises(ValueConversionError):
        app.parse(["--format", "xml"])


def test_flag_dispatch_runs_when_matched(app):
    seen = []
    app.add_flag("name", dispatch=lambda context: seen.append(context.command_path))
    app.parse([])
    assert seen == []
    app.parse(["--name", "x"])
    assert seen == [""]


def test_negative_number_needs_equals(app):
    number = app.add_flag("num", type=int)
    app.parse(["--num=-5"])
    assert number.get() == -5
    with pytest.raises(ExpectedValueError):
        app.parse(["--num", "-5"])


def test_resolve_flags_for_a_single_group(app):
    name = app.add_flag("name", default="x")
    token = app.add_flag("token", required=True)
    app.validate()

    context = ParseContext(["--token", "t", "rest"], app)
    resolve_flags(context, app.flags)
    assert token.get() == "t"
    assert name.get() == "x"
    assert context.peek().value == "rest"

    app.reset()
    with pytest.raises(MissingFlagError):
        resolve_flags(ParseContext([], app), app.flags)
    resolve_flags(ParseContext([], app), app.flags, ignore_required=True)
