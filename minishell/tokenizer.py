"""Splitting a command line into classified tokens."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from minishell.quoting import check_line, check_quotes, has_quotes, in_quotes, is_space

_SPECIAL = frozenset("<>|")


class TokenType(enum.Enum):
    """Role of a token on the command line."""

    COMMAND = enum.auto()
    FILE = enum.auto()
    PIPE = enum.auto()
    INPUT = enum.auto()
    OUTPUT = enum.auto()
    APPEND = enum.auto()
    HERE_DOC = enum.auto()

    def is_redirection(self) -> bool:
        """Return True for the four redirection operators."""
        return self in (
            TokenType.INPUT,
            TokenType.OUTPUT,
            TokenType.APPEND,
            TokenType.HERE_DOC,
        )


_OPERATORS = {
    "<": TokenType.INPUT,
    ">": TokenType.OUTPUT,
    "<<": TokenType.HERE_DOC,
    ">>": TokenType.APPEND,
    "|": TokenType.PIPE,
}


@dataclass
class Token:
    """One word or operator of a command line."""

    value: str
    type: TokenType
    hdoc_quoted: bool = False


class ShellSyntaxError(Exception):
    """Raised when a line cannot be tokenized."""

    status = 2

    def __init__(self, char: str) -> None:
        self.char = char
        super().__init__(f"minishell: syntax error near unexpected token '{char}'")


def classify(value: str, previous: Token | None) -> Token:
    """Build a token for ``value`` given the token that precedes it."""
    token_type = _OPERATORS.get(value)
    if token_type is None:
        if previous is not None and previous.type.is_redirection():
            token_type = TokenType.FILE
        else:
            token_type = TokenType.COMMAND
    hdoc_quoted = (
        previous is not None
        and previous.type is TokenType.HERE_DOC
        and has_quotes(value)
    )
    return Token(value, token_type, hdoc_quoted)


def split_words(line: str) -> list[str]:
    """Split a line into words and operators, keeping quoted text together."""
    words: list[str] = []
    pos = 0
    end = len(line)
    while pos < end:
        while pos < end and is_space(line[pos]):
            pos += 1
        start = pos
        while pos < end and (
            in_quotes(line, pos)
            or (not is_space(line[pos]) and line[pos] not in _SPECIAL)
        ):
            pos += 1
        if pos == start and pos < end and line[pos] in _SPECIAL and not in_quotes(line, pos):
            pos += 1
            if pos < end and line[pos] == line[pos - 1] and line[pos] in "<>":
                pos += 1
        if pos > start:
            words.append(line[start:pos])
    return words


def tokenize_line(line: str) -> list[Token]:
    """Check a line for quote and operator errors, then return its tokens.

    Raises ShellSyntaxError naming the offending character.
    """
    quote = check_quotes(line)
    if quote is not None:
        raise ShellSyntaxError(quote)
    bad = check_line(line, "<>&")
    if bad is not None:
        raise ShellSyntaxError(bad)
    tokens: list[Token] = []
    for word in split_words(line):
        tokens.append(classify(word, tokens[-1] if tokens else None))
    return tokens