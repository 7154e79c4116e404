"""Commands the shell runs itself: echo, cd, pwd, env, export, unset and exit."""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from typing import TextIO

from minishell.quoting import is_posix_std, is_space
from minishell.state import ShellExit, ShellState

_BUILTINS = frozenset({"cd", "echo", "env", "exit", "export", "pwd", "unset"})
_LLONG_MAX = 2**63 - 1


def is_builtin(name: str | None) -> bool:
    """Return True when ``name`` is one of the shell's own commands."""
    return name is not None and name in _BUILTINS


def _is_n_option(arg: str) -> bool:
    return len(arg) > 1 and arg[0] == "-" and all(ch == "n" for ch in arg[1:])


def echo(args: Sequence[str], out: TextIO) -> int:
    """Print the arguments separated by spaces; leading ``-n`` options drop the newline."""
    position = 0
    newline = True
    while position < len(args) and _is_n_option(args[position]):
        newline = False
        position += 1
    out.write(" ".join(args[position:]))
    if newline:
        out.write("\n")
    return 0


def _find_path(state: ShellState, name: str, err: TextIO) -> str | None:
    path = state.env.get(name)
    if path is None:
        err.write(f"minishell: cd: {name} not set\n")
    return path


def _update_existing(state: ShellState, name: str, value: str) -> None:
    for table in (state.env.variables, state.env.exported):
        if name in table:
            table[name] = value


def _update_pwd(state: ShellState) -> None:
    old_pwd = state.env.get("PWD")
    if old_pwd is not None:
        _update_existing(state, "OLDPWD", old_pwd)
    try:
        new_pwd = os.getcwd()
    except OSError:
        return
    _update_existing(state, "PWD", new_pwd)


def cd(state: ShellState, args: Sequence[str], out: TextIO, err: TextIO) -> int:
    """Change directory to the argument, ``$HOME`` when none, or ``$OLDPWD`` for ``-``."""
    if not args:
        target = _find_path(state, "HOME", err)
    elif len(args) > 1:
        err.write("minishell: cd: too many arguments\n")
        return 1
    elif args[0] == "-":
        target = _find_path(state, "OLDPWD", err)
        if target is not None:
            out.write(target + "\n")
    else:
        target = args[0]
    if target is None:
        return 1
    try:
        os.chdir(target)
    except OSError as exc:
        err.write(f"minishell: cd: {target}: {os.strerror(exc.errno or 0)}\n")
        return 1
    _update_pwd(state)
    return 0


def pwd(out: TextIO, err: TextIO) -> int:
    """Print the current working directory."""
    try:
        path = os.getcwd()
    except OSError as exc:
        err.write(f"pwd: {os.strerror(exc.errno or 0)}\n")
        return 1
    out.write(path + "\n")
    return 0


def env(state: ShellState, args: Sequence[str], out: TextIO, err: TextIO) -> int:
    """Print the environment as ``NAME=value`` lines; any argument is an error."""
    if args:
        err.write(f"minishell: env: '{args[0]}': No such file or directory\n")
        return 127
    for name, value in state.env.env_items():
        out.write(f"{name}={value if value is not None else ''}\n")
    return 0


def _assignment_position(arg: str) -> int | None:
    """Return where ``=`` or ``+=`` starts, 0 for a bare name, None when invalid."""
    if not arg or not (arg[0] == "_" or (arg[0].isascii() and arg[0].isalpha())):
        return None
    for index, ch in enumerate(arg):
        if ch == "=":
            return index
        if ch == "+" and arg[index + 1:index + 2] == "=":
            return index
        if not is_posix_std(ch):
            return None
    return 0


def _display_export(state: ShellState, out: TextIO) -> None:
    for name, value in state.env.export_items():
        line = f"declare -x {name}"
        if value is not None:
            line += f'="{value}"'
        out.write(line + "\n")


def export(state: ShellState, args: Sequence[str], out: TextIO, err: TextIO) -> int:
    """Declare or assign exported variables; with no arguments list them."""
    if not args:
        _display_export(state, out)
    status = 0
    for arg in args:
        position = _assignment_position(arg)
        if position is None:
            err.write(f"minishell: export: '{arg}': not a valid identifier\n")
            status = 1
        elif position == 0:
            state.env.declare(arg, None)
        else:
            name = arg[:position]
            if arg[position] == "+":
                if state.env.variables and state.env.exported:
                    state.env.append(name, arg[position + 2:])
            else:
                state.env.set(name, arg[position + 1:])
    return status


def unset(state: ShellState, args: Sequence[str]) -> int:
    """Remove each named variable from the environment and the export list."""
    for name in args:
        state.env.unset(name)
    return 0


def _digits_after_sign(text: str) -> tuple[int, str]:
    position = 0
    while position < len(text) and is_space(text[position]):
        position += 1
    sign = 1
    if position < len(text) and text[position] in "+-":
        if text[position] == "-":
            sign = -1
        position += 1
    start = position
    while position < len(text) and text[position] in "0123456789":
        position += 1
    return sign, text[start:position]


def _overflows(text: str) -> bool:
    sign, digits = _digits_after_sign(text)
    value = int(digits) if digits else 0
    limit = _LLONG_MAX + 1 if sign < 0 else _LLONG_MAX
    return value > limit


def is_numeric(text: str) -> bool:
    """Return True when ``text`` is an exit status that fits in a 64-bit integer."""
    position = 0
    while position < len(text) and is_space(text[position]):
        position += 1
    rest = text[position:]
    for index, ch in enumerate(rest):
        following = rest[index + 1:index + 2]
        if not ch.isdigit() or not ch.isascii():
            if not (ch in "+-" and following.isdigit() and following.isascii()):
                return False
    return not _overflows(text)


def _exit_status(text: str) -> int:
    sign, digits = _digits_after_sign(text)
    value = sign * (int(digits) if digits else 0)
    return value & 0xFF


def exit_shell(
    state: ShellState,
    args: Sequence[str],
    out: TextIO,
    err: TextIO,
    in_child: bool,
) -> int:
    """Leave the shell by raising ShellExit.

    With too many arguments the shell stays: the status becomes 1 and 1 is
    returned, unless running in a child, which then exits with 1.
    """
    if not args:
        if not in_child:
            out.write("exit\n")
        raise ShellExit(state.exit_code)
    if not is_numeric(args[0]):
        if not in_child:
            err.write("exit\n")
        err.write(f"minishell: exit: {args[0]}: numeric argument required\n")
        raise ShellExit(2)
    if len(args) > 1:
        if not in_child:
            err.write("exit\n")
        err.write("minishell: exit: too many arguments\n")
        if in_child:
            raise ShellExit(1)
        state.exit_code = 1
        return 1
    status = _exit_status(args[0])
    if not in_child:
        out.write("exit\n")
    raise ShellExit(status)


def run_builtin(
    state: ShellState,
    args: Sequence[str],
    out: TextIO,
    err: TextIO,
    in_child: bool,
) -> int:
    """Run the builtin named by ``args[0]`` and record its status.

    In a child process the builtin's status ends the process (ShellExit).
    """
    name, rest = args[0], list(args[1:])
    if name == "exit":
        return exit_shell(state, rest, out, err, in_child)
    handlers: dict[str, Callable[[], int]] = {
        "echo": lambda: echo(rest, out),
        "cd": lambda: cd(state, rest, out, err),
        "pwd": lambda: pwd(out, err),
        "env": lambda: env(state, rest, out, err),
        "export": lambda: export(state, rest, out, err),
        "unset": lambda: unset(state, rest),
    }
    handler = handlers.get(name)
    if handler is None:
        raise ValueError(f"{name!r} is not a builtin")
    return state.conclude(handler(), in_child)