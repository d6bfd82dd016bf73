import io

import pytest
from rich.console import Console

from pinion import Application
from pinion.exceptions import DeclarationError
from pinion.parser.flag import Flag


@pytest.fixture
def app():
    return Application(
        "test",
        console=Console(file=io.StringIO(), width=200, color_system=None),
        terminate=lambda status: None,
    )


def test_required_flag_with_default_is_rejected(app):
    app.add_flag("ttl", required=True, default="5s")
    with pytest.raises(DeclarationError, match="required flag 'ttl' with default"):
        app.validate()


def test_required_argument_after_optional_is_rejected_before_parsing(app):
    seen = []
    app.add_argument("first", dispatch=lambda context: seen.append("first"))
    app.add_argument("second", required=True)
    with pytest.raises(DeclarationError, match="can not follow optional"):
        app.parse(["a", "b"])
    assert seen == []


def test_remainder_argument_must_be_last(app):
    app.add_argument("files", type=list[str])
    app.add_argument("target")
    with pytest.raises(DeclarationError, match="must be last"):
        app.parse([])


def test_arguments_and_commands_cannot_mix(app):
    app.add_argument("target")
    app.add_command("sub")
    with pytest.raises(DeclarationError, match="can't mix arguments and commands"):
        app.validate()


def test_more_than_one_default_command(app):
    app.add_command("one", default=True)
    app.add_command("two", default=True)
    with pytest.raises(DeclarationError, match="more than one default"):
        app.validate()


def test_duplicate_command_names_and_aliases(app):
    app.add_command("start", aliases=["s"])
    app.add_command("stop", aliases=["s"])
    with pytest.raises(DeclarationError, match="duplicate command 's'"):
        app.validate()


def test_duplicate_long_flag_across_scopes(app):
    app.add_flag("verbose", type=bool)
    app.add_command("sub").add_flag("verbose", type=bool)
    with pytest.raises(DeclarationError, match="duplicate long flag --verbose"):
        app.validate()


def test_duplicate_short_flag(app):
    app.add_flag("alpha", short="a")
    app.add_flag("also", short="a")
    with pytest.raises(DeclarationError, match="duplicate short flag -a"):
        app.validate()


def test_same_flag_name_in_sibling_commands_is_allowed(app):
    app.add_command("one").add_flag("force", type=bool)
    app.add_command("two").add_flag("force", type=bool)
    app.validate()


def test_flag_without_value_type(app):
    app.flags.add(Flag("raw"))
    with pytest.raises(DeclarationError, match="has no value type"):
        app.validate()


def test_short_name_must_be_one_character(app):
    app.add_flag("long", short="ab")
    with pytest.raises(DeclarationError, match="single character"):
        app.validate()


def test_help_command_added_once(app):
    app.add_command("run")
    app.validate()
    app.validate()
    names = [command.name for command in app.commands]
    assert names == ["help", "run"]


def test_no_help_command_without_commands(app):
    app.validate()
    assert app.get_command("help") is None
