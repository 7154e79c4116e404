"""Variable expansion and quote removal for words and here-document lines."""

from __future__ import annotations

from collections.abc import Callable

from minishell.environment import get_env_name
from minishell.quoting import in_dbl_quotes, in_quotes, is_posix_std
from minishell.state import ShellState
from minishell.tokenizer import Token, TokenType

_QUOTES = ("'", '"')
_DIGITS = frozenset("0123456789")


def _char_after(text: str, index: int) -> str:
    """Return the character following ``index``, or '' at the end."""
    return text[index + 1] if index + 1 < len(text) else ""


def _replace_exit_code(text: str, dollar: int, state: ShellState) -> str:
    return text[:dollar] + str(state.exit_code) + text[dollar + 2:]


def _drop_digit(text: str, dollar: int) -> str:
    return text[:dollar] + text[dollar + 2:]


def _replace_variable(text: str, dollar: int, state: ShellState) -> str:
    name = get_env_name(text[dollar + 1:])
    value = state.env.get(name) or ""
    return text[:dollar] + value + text[dollar + 1 + len(name):]


def _expand_once(text: str, dollar: int, state: ShellState, after_heredoc: bool) -> str | None:
    """Expand the ``$`` at ``dollar`` in a word, or return None when it stays."""
    nxt = _char_after(text, dollar)
    if nxt == "?":
        return _replace_exit_code(text, dollar, state)
    if nxt in _DIGITS and nxt:
        return _drop_digit(text, dollar)
    if (
        not after_heredoc
        and nxt
        and not (in_dbl_quotes(text, dollar) and nxt in _QUOTES)
        and (is_posix_std(nxt) or nxt in _QUOTES)
    ):
        return _replace_variable(text, dollar, state)
    return None


def _expand_repeatedly(
    text: str,
    should_try: Callable[[str, int], bool],
    expand_at: Callable[[str, int], str | None],
) -> str:
    """Expand dollars left to right, rescanning from the start after each change."""
    index = 0
    while index < len(text):
        if text[index] == "$" and should_try(text, index):
            expanded = expand_at(text, index)
            if expanded is not None:
                text = expanded
                index = 0
                continue
        index += 1
    return text


def expand_word(value: str, state: ShellState, after_heredoc: bool = False) -> str:
    """Expand ``$?``, ``$<digit>`` and ``$NAME`` in one word.

    Dollars inside single quotes stay as they are. When the word is a
    here-document delimiter (``after_heredoc``) variables are not expanded,
    though ``$?`` and ``$<digit>`` still are.
    """
    return _expand_repeatedly(
        value,
        lambda text, i: not in_quotes(text, i) or in_dbl_quotes(text, i),
        lambda text, i: _expand_once(text, i, state, after_heredoc),
    )


def expand_tokens(tokens: list[Token], state: ShellState) -> list[Token]:
    """Expand every token's value in place and return the same list."""
    previous: Token | None = None
    for token in tokens:
        after_heredoc = previous is not None and previous.type is TokenType.HERE_DOC
        token.value = expand_word(token.value, state, after_heredoc)
        previous = token
    return tokens


def _expand_heredoc_once(text: str, dollar: int, state: ShellState) -> str | None:
    nxt = _char_after(text, dollar)
    if nxt == "?":
        return _replace_exit_code(text, dollar, state)
    if nxt and nxt in _DIGITS:
        return _drop_digit(text, dollar)
    if is_posix_std(nxt):
        return _replace_variable(text, dollar, state)
    return None


def expand_heredoc_line(line: str, state: ShellState) -> str:
    """Expand a here-document line; quotes have no effect here."""
    return _expand_repeatedly(
        line,
        lambda text, i: True,
        lambda text, i: _expand_heredoc_once(text, i, state),
    )


def remove_quotes(text: str) -> str:
    """Remove the quote characters that open and close quoted sections."""
    kept: list[str] = []
    quote: str | None = None
    for ch in text:
        if quote is None and ch in _QUOTES:
            quote = ch
        elif quote is not None and ch == quote:
            quote = None
        else:
            kept.append(ch)
    return "".join(kept)


def remove_token_quotes(tokens: list[Token]) -> list[Token]:
    """Strip quotes from every token's value in place and return the same list."""
    for token in tokens:
        token.value = remove_quotes(token.value)
    return tokens