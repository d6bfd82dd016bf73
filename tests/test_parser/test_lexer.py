import pytest

from pinion.exceptions import TokenError
from pinion.parser.lexer import EOL_TOKEN, Token, TokenType, tokenize


def test_long_flag_with_equals_value():
    stream = tokenize(["--flag=value"])
    assert stream.next() == Token(TokenType.LONG, "flag")
    token = stream.next()
    assert token.type is TokenType.ARG
    assert token.value == "value"
    assert token.attached is True
    assert stream.next() is EOL_TOKEN


def test_long_flag_with_empty_equals_value():
    stream = tokenize(["--flag="])
    assert stream.next() == Token(TokenType.LONG, "flag")
    assert stream.next().value == ""


def test_long_flag_splits_on_first_equals_only():
    stream = tokenize(["--define=a=b"])
    assert stream.next().value == "define"
    assert stream.next().value == "a=b"


def test_combined_short_flags_decompose():
    stream = tokenize(["-abc"])
    assert [token.value for token in stream.drain()] == ["a", "b", "c"]


def test_short_flag_with_value_when_known():
    stream = tokenize(["-fVALUE", "-ab"], takes_value=lambda short: short == "f")
    assert stream.next() == Token(TokenType.SHORT, "f")
    value = stream.next()
    assert value.type is TokenType.ARG
    assert value.value == "VALUE"
    assert stream.next() == Token(TokenType.SHORT, "a")
    assert stream.next() == Token(TokenType.SHORT, "b")


def test_short_value_flag_inside_group():
    stream = tokenize(["-vfout.txt"], takes_value=lambda short: short == "f")
    assert stream.next() == Token(TokenType.SHORT, "v")
    assert stream.next() == Token(TokenType.SHORT, "f")
    assert stream.next().value == "out.txt"


def test_double_dash_switches_to_args_only():
    stream = tokenize(["--", "--not-a-flag", "-x"])
    tokens = stream.drain()
    assert all(token.type is TokenType.ARG for token in tokens)
    assert [token.value for token in tokens] == ["--not-a-flag", "-x"]
    assert stream.args_only


def test_second_double_dash_is_an_argument():
    stream = tokenize(["--", "--"])
    assert stream.next() == Token(TokenType.ARG, "--")


def test_bare_dash_is_an_error():
    stream = tokenize(["-"])
    with pytest.raises(TokenError):
        stream.next()


def test_plain_arguments():
    stream = tokenize(["one", "two"])
    assert stream.next() == Token(TokenType.ARG, "one")
    assert stream.next() == Token(TokenType.ARG, "two")


def test_peek_does_not_advance():
    stream = tokenize(["a", "b"])
    assert stream.peek().value == "a"
    assert stream.peek().value == "a"
    assert stream.next().value == "a"
    assert stream.next().value == "b"


def test_push_back_replays_most_recent_first():
    stream = tokenize(["c"])
    stream.push_back(Token(TokenType.ARG, "b"))
    stream.push_back(Token(TokenType.ARG, "a"))
    assert [token.value for token in stream.drain()] == ["a", "b", "c"]


def test_eol_is_returned_forever_and_never_queued():
    stream = tokenize([])
    assert stream.next() is EOL_TOKEN
    assert stream.peek() is EOL_TOKEN
    stream.push_back(EOL_TOKEN)
    assert not stream.has_trailing_args()
    assert stream.next() is EOL_TOKEN


def test_token_str():
    assert str(Token(TokenType.LONG, "name")) == "--name"
    assert str(Token(TokenType.SHORT, "n")) == "-n"
    assert str(Token(TokenType.ARG, "x")) == "x"
    assert str(EOL_TOKEN) == "<EOL>"
