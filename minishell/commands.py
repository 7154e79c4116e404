"""Grouping tokens into the commands of a pipeline."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from minishell.tokenizer import Token, TokenType

_INPUTS = (TokenType.INPUT, TokenType.HERE_DOC)
_OUTPUTS = (TokenType.OUTPUT, TokenType.APPEND)


@dataclass
class Redirection:
    """A file named by a redirection operator."""

    name: str
    type: TokenType
    expand: bool = True


@dataclass
class Command:
    """One stage of a pipeline: its words, redirections and descriptors."""

    index: int
    args: list[str] = field(default_factory=list)
    files: list[Redirection] = field(default_factory=list)
    is_here_doc: bool = False
    path: str | None = None
    fd_in: int = 0
    fd_out: int = 1


def build_commands(tokens: Sequence[Token]) -> list[Command]:
    """Split tokens at pipes into commands with their arguments and files."""
    commands: list[Command] = []
    current: Command | None = None
    previous: Token | None = None
    for token in tokens:
        if current is None:
            current = Command(index=len(commands))
            commands.append(current)
        if token.type is TokenType.PIPE:
            current = None
        elif token.type is TokenType.FILE and previous is not None:
            if previous.type is TokenType.HERE_DOC:
                current.is_here_doc = True
            current.files.append(
                Redirection(token.value, previous.type, not token.hdoc_quoted)
            )
        elif token.type is TokenType.COMMAND:
            current.args.append(token.value)
        previous = token
    return commands


def is_last_redirection(files: Sequence[Redirection], position: int) -> bool:
    """Return True when no later file redirects the same direction."""
    redir_in = files[position].type in _INPUTS
    for later in files[position + 1:]:
        if (redir_in and later.type in _INPUTS) or (
            not redir_in and later.type in _OUTPUTS
        ):
            return False
    return True