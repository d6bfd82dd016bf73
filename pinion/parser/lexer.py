# Pinion CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Lazy, push-back capable tokenizer for raw command-line arguments.

Tokens are produced on demand from the remaining raw strings:

- `--` switches the stream into arguments-only mode; everything after it is
  emitted verbatim as `TokenType.ARG`.
- `--name=value` yields a `LONG` token for `name` followed by an `ARG` token
  for `value`.
- `-abc` yields one `SHORT` token per character. When the first character is a
  known flag that takes a value, the rest of the string becomes its `ARG`
  token instead (`-fVALUE`). This lookup goes through a callback supplied by
  the parse context, so tokenization depends on the flags in scope at the
  moment the string is consumed.
- Anything else is an `ARG`.

Once the raw arguments are exhausted the stream returns `EOL_TOKEN` forever.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence

from pinion.exceptions import TokenError


class TokenType(Enum):
    """Kinds of tokens produced by `TokenStream`."""

    SHORT = "short flag"
    LONG = "long flag"
    ARG = "argument"
    EOL = "<EOL>"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Token:
    """
    A single immutable token.

    `attached` marks an argument split off a flag string, as in `--name=value`.
    """

    type: TokenType
    value: str = ""
    attached: bool = False

    def is_flag(self) -> bool:
        return self.type in (TokenType.SHORT, TokenType.LONG)

    def is_eol(self) -> bool:
        return self.type is TokenType.EOL

    def __str__(self) -> str:
        if self.type is TokenType.SHORT:
            return f"-{self.value}"
        if self.type is TokenType.LONG:
            return f"--{self.value}"
        if self.type is TokenType.EOL:
            return "<EOL>"
        return self.value


EOL_TOKEN = Token(TokenType.EOL)


class TokenStream:
    """
    Ordered, consumable token sequence with push-back.

    `peek()` never advances. `next()` advances exactly one token or returns
    `EOL_TOKEN`. Pushed-back tokens are replayed (most recent first) before any
    new token is produced from the raw arguments. Pushing back `EOL_TOKEN` is a
    no-op.

    Args:
        args: Raw argument strings.
        takes_value: Callback answering whether a short flag character names a
            declared flag that expects a value. Used for `-fVALUE` splitting.
    """

    def __init__(
        self,
        args: Sequence[str],
        takes_value: Callable[[str], bool] | None = None,
    ) -> None:
        self._args: list[str] = list(args)
        self._pushed: list[Token] = []
        self._args_only: bool = False
        self._takes_value: Callable[[str], bool] = takes_value or (lambda _: False)

    @property
    def args_only(self) -> bool:
        """True once the `--` terminator has been consumed."""
        return self._args_only

    def has_trailing_args(self) -> bool:
        return bool(self._pushed) or bool(self._args)

    def next(self) -> Token:
        if self._pushed:
            return self._pushed.pop()

        if not self._args:
            return EOL_TOKEN

        arg = self._args.pop(0)

        if self._args_only:
            return Token(TokenType.ARG, arg)

        if arg == "--":
            self._args_only = True
            return self.next()

        if arg.startswith("--"):
            name, separator, value = arg[2:].partition("=")
            token = Token(TokenType.LONG, name)
            if separator:
                self._pushed.append(Token(TokenType.ARG, value, attached=True))
            return token

        if arg.startswith("-"):
            if len(arg) == 1:
                raise TokenError("malformed short flag '-'")
            short = arg[1]
            if self._takes_value(short):
                if len(arg) > 2:
                    self._pushed.append(Token(TokenType.ARG, arg[2:], attached=True))
                return Token(TokenType.SHORT, short)
            if len(arg) > 2:
                self._args.insert(0, f"-{arg[2:]}")
            return Token(TokenType.SHORT, short)

        return Token(TokenType.ARG, arg)

    def peek(self) -> Token:
        if not self._pushed:
            return self.push_back(self.next())
        return self._pushed[-1]

    def push_back(self, token: Token) -> Token:
        if token.is_eol():
            return token
        self._pushed.append(token)
        return token

    def drain(self) -> list[Token]:
        """Consume and return every remaining token."""
        tokens: list[Token] = []
        while True:
            token = self.next()
            if token.is_eol():
                return tokens
            tokens.append(token)


def tokenize(
    args: Sequence[str], takes_value: Callable[[str], bool] | None = None
) -> TokenStream:
    """Return a lazy `TokenStream` over `args`."""
    return TokenStream(args, takes_value)
