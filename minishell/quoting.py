"""Character classes and quote tracking used while reading a command line."""

from __future__ import annotations

_SPACES = frozenset(" \t\n\v\f\r")
_QUOTES = ("'", '"')


def is_space(ch: str) -> bool:
    """Return True for a single ASCII whitespace character."""
    return ch in _SPACES and len(ch) == 1


def is_posix_std(ch: str) -> bool:
    """Return True for a character allowed in a variable name (ASCII alnum or '_')."""
    return len(ch) == 1 and (ch == "_" or (ch.isascii() and ch.isalnum()))


def has_quotes(text: str) -> bool:
    """Return True when the text holds a single or double quote."""
    return any(ch in _QUOTES for ch in text)


def only_spaces(line: str) -> bool:
    """Return True when the line holds nothing but whitespace (or nothing)."""
    return all(is_space(ch) for ch in line)


def in_quotes(text: str, index: int) -> bool:
    """Return True when position ``index`` lies inside a quoted section."""
    quote: str | None = None
    for ch in text[:index]:
        if quote is None:
            if ch in _QUOTES:
                quote = ch
        elif ch == quote:
            quote = None
    return quote is not None


def in_dbl_quotes(text: str, index: int) -> bool:
    """Return True when position ``index`` lies inside double quotes.

    Single quotes toggle their own state wherever they appear, and a double
    quote only counts while that state is off.
    """
    in_single = False
    in_double = False
    for ch in text[:index]:
        if ch == "'":
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
    return in_double


def check_quotes(text: str) -> str | None:
    """Return the quote character left open at the end of ``text``, if any."""
    quote: str | None = None
    for ch in text:
        if quote is None:
            if ch in _QUOTES:
                quote = ch
        elif ch == quote:
            quote = None
    return quote


def check_line(text: str, charset: str) -> str | None:
    """Return the first character of ``charset`` that appears in an illegal run.

    Outside quotes, '<' and '>' may appear at most twice in a row, '|' at most
    once and '&' not at all.
    """
    for target in charset:
        run = 0
        for index, ch in enumerate(text):
            quoted = in_quotes(text, index)
            if not quoted and ch == target:
                run += 1
            elif not quoted and run > 0:
                run = 0
            if (
                (target in "<>" and run > 2)
                or (target == "|" and run > 1)
                or (target == "&" and run > 0)
            ):
                return target
    return None