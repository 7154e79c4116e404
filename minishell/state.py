"""State shared by the whole shell session."""

from __future__ import annotations

from dataclasses import dataclass, field

from minishell.environment import Environment


class ShellExit(Exception):
    """Raised to end the shell (or a child) with a given status."""

    def __init__(self, status: int) -> None:
        self.status = status
        super().__init__(f"exit {status}")


@dataclass
class ShellState:
    """The variables of a session and the status of the last command."""

    env: Environment = field(default_factory=Environment)
    exit_code: int = 0

    def conclude(self, status: int, to_exit: bool) -> int:
        """Finish a builtin with ``status``.

        When ``to_exit`` is set the process ends with that status by raising
        ShellExit; otherwise the status becomes the last exit code and is
        returned.
        """
        if to_exit:
            raise ShellExit(status)
        self.exit_code = status
        return status