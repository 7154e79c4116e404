"""Reading here-documents and handing their content to commands."""

from __future__ import annotations

import itertools
import os
import string
from collections.abc import Callable, Sequence
from typing import TextIO

from minishell.commands import Command, is_last_redirection
from minishell.expansion import expand_heredoc_line
from minishell.state import ShellExit, ShellState
from minishell.tokenizer import TokenType

_ALNUM = string.ascii_lowercase + string.ascii_uppercase + string.digits
_line_numbers = itertools.count(1)

ReadLine = Callable[[str], "str | None"]


class HeredocInterrupted(Exception):
    """Raised when reading a here-document is interrupted by the user."""

    status = 130


def temp_file_path() -> str:
    """Return a fresh path ``/tmp/<20 random letters or digits>.tmp``."""
    name = "".join(_ALNUM[byte % len(_ALNUM)] for byte in os.urandom(20))
    return f"/tmp/{name}.tmp"


def read_heredoc(
    delimiter: str,
    expand: bool,
    state: ShellState,
    read_line: ReadLine,
    err: TextIO,
) -> str:
    """Read lines until ``delimiter`` and return them, each ending in a newline.

    ``read_line`` returns None at end of input, which ends the document with
    a warning, and raises KeyboardInterrupt when interrupted, which sets the
    status to 130 and raises HeredocInterrupted. With ``expand`` set, the
    variables in each line are expanded.
    """
    lines: list[str] = []
    while True:
        try:
            line = read_line("> ")
        except KeyboardInterrupt as exc:
            next(_line_numbers)
            state.exit_code = HeredocInterrupted.status
            raise HeredocInterrupted() from exc
        line_number = next(_line_numbers)
        if line is None:
            err.write(
                f"minishell: warning: here-document at line {line_number} "
                f"delimited by end-of-file (wanted '{delimiter}')\n"
            )
            break
        if line == delimiter:
            break
        lines.append(expand_heredoc_line(line, state) if expand else line)
    return "".join(f"{line}\n" for line in lines)


def _store_for_reading(content: str) -> int:
    """Write ``content`` to a temporary file and return a descriptor reading it."""
    path = temp_file_path()
    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o644)
        with os.fdopen(fd, "w", encoding="utf-8", errors="surrogateescape", newline="") as handle:
            handle.write(content)
        return os.open(path, os.O_RDONLY)
    except OSError as exc:
        raise ShellExit(1) from exc
    finally:
        try:
            os.unlink(path)
        except OSError:
            pass


def prepare_heredocs(
    state: ShellState,
    commands: Sequence[Command],
    read_line: ReadLine,
    err: TextIO,
) -> None:
    """Read every here-document of the pipeline in order.

    A command whose last input redirection is a here-document gets a
    descriptor reading its content in ``fd_in``. On interruption the
    descriptors opened so far are closed and HeredocInterrupted propagates.
    """
    opened: list[Command] = []
    try:
        for command in commands:
            for position, redirection in enumerate(command.files):
                if redirection.type is not TokenType.HERE_DOC:
                    continue
                content = read_heredoc(
                    redirection.name, redirection.expand, state, read_line, err
                )
                if is_last_redirection(command.files, position):
                    command.fd_in = _store_for_reading(content)
                    opened.append(command)
    except HeredocInterrupted:
        for command in opened:
            os.close(command.fd_in)
            command.fd_in = 0
        raise