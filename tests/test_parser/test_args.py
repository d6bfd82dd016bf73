import io

import pytest
from rich.console import Console

from pinion import Application
from pinion.exceptions import (
    MissingArgumentError,
    UnexpectedArgumentError,
    ValueConversionError,
)


@pytest.fixture
def app():
    return Application(
        "test",
        console=Console(file=io.StringIO(), width=200, color_system=None),
        terminate=lambda status: None,
    )


def test_positional_arguments_in_order(app):
    src = app.add_argument("src", required=True)
    dst = app.add_argument("dst", required=True)
    result = app.parse(["a", "b"])
    assert src.get() == "a"
    assert dst.get() == "b"
    assert result["src"] == "a"
    assert result["dst"] == "b"


def test_missing_required_argument(app):
    app.add_argument("src", required=True)
    with pytest.raises(MissingArgumentError, match="required argument 'src' not provided"):
        app.parse([])


def test_optional_argument_gets_default(app):
    count = app.add_argument("count", type=int, default=3)
    app.parse([])
    assert count.get() == 3
    app.parse(["7"])
    assert count.get() == 7


def test_remainder_argument_consumes_everything(app):
    cmd = app.add_argument("cmd", required=True)
    rest = app.add_argument("rest", type=list[str])
    app.parse(["ls", "a", "b"])
    assert cmd.get() == "ls"
    assert rest.get() == ["a", "b"]

    app.parse(["ls", "--", "-la", "/tmp"])
    assert rest.get() == ["-la", "/tmp"]


def test_flags_interleave_with_arguments(app):
    verbose = app.add_flag("verbose", short="v", type=bool)
    first = app.add_argument("first")
    second = app.add_argument("second")
    app.parse(["one", "-v", "two"])
    assert verbose.get() is True
    assert first.get() == "one"
    assert second.get() == "two"


def test_trailing_arguments_are_unexpected(app):
    app.add_argument("only")
    with pytest.raises(UnexpectedArgumentError, match="unexpected arguments 'b c'"):
        app.parse(["a", "b", "c"])
    with pytest.raises(UnexpectedArgumentError, match="unexpected argument 'b'"):
        app.parse(["a", "b"])


def test_argument_conversion_error(app):
    app.add_argument("count", type=int)
    with pytest.raises(ValueConversionError, match="argument 'count'"):
        app.parse(["many"])


def test_argument_from_environment(app, monkeypatch):
    monkeypatch.setenv("SOURCE_DIR", "/data")
    src = app.add_argument("src", required=True, envar="SOURCE_DIR")
    app.parse([])
    assert src.get() == "/data"


def test_argument_dispatch(app):
    seen = []
    app.add_argument("name", dispatch=lambda context: seen.append(context.elements[-1].value))
    app.parse(["x"])
    assert seen == ["x"]
