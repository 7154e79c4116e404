"""Finding the program a command name refers to."""

from __future__ import annotations

import errno
import os

from minishell.state import ShellState


class CommandLookupError(Exception):
    """Raised when a command cannot be run; carries the message and exit status."""

    def __init__(self, message: str, status: int) -> None:
        self.message = message
        self.status = status
        super().__init__(message)


def is_executable(arg: str) -> bool:
    """Return True for a name such as ``./prog`` or ``../bin/prog``.

    The name must start with '.' and hold a '/' after the first character.
    """
    return arg.startswith(".") and "/" in arg[1:]


def error_message(arg: str, errno_value: int) -> str:
    """Return ``minishell: <arg>: <description of errno_value>``."""
    return f"minishell: {arg}: {os.strerror(errno_value)}"


def _not_found(name: str) -> CommandLookupError:
    return CommandLookupError(f"minishell: {name}: command not found", 127)


def _is_directory(path: str) -> bool:
    flag = getattr(os, "O_DIRECTORY", None)
    if flag is None:
        return os.path.isdir(path)
    try:
        fd = os.open(path, os.O_RDONLY | flag)
    except OSError:
        return False
    os.close(fd)
    return True


def _access_errno(path: str) -> int | None:
    """Return None when ``path`` is executable, else the reason as an errno value."""
    if os.access(path, os.X_OK):
        return None
    try:
        os.stat(path)
    except OSError as exc:
        return exc.errno if exc.errno is not None else errno.ENOENT
    return errno.EACCES


def _check_direct_path(name: str) -> str:
    if _is_directory(name):
        raise CommandLookupError(error_message(name, errno.EISDIR), 126)
    reason = _access_errno(name)
    if reason is not None:
        status = 126 if reason in (errno.ENOTDIR, errno.EACCES) else 127
        raise CommandLookupError(error_message(name, reason), status)
    return name


def _search_path(path_value: str | None, name: str) -> str | None:
    if path_value is None:
        return None
    for directory in path_value.split(":"):
        if not directory:
            continue
        candidate = f"{directory}/{name}"
        if os.access(candidate, os.X_OK):
            return candidate
    return None


def resolve_command(state: ShellState, name: str) -> str:
    """Return the path to execute for ``name``.

    Names starting with '/' or of the form ``./...`` are used as they are;
    other names are searched in ``$PATH``. Raises CommandLookupError with
    status 126 or 127 when nothing can be run.
    """
    if name == "":
        raise _not_found(name)
    if is_executable(name) or name.startswith("/"):
        return _check_direct_path(name)
    if name not in (".", ".."):
        found = _search_path(state.env.get("PATH"), name)
        if found is not None:
            return found
    raise _not_found(name)