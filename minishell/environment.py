"""The shell's variables: the environment passed to programs and the export list."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from minishell.quoting import is_posix_std


def get_env_name(text: str) -> str:
    """Return the leading run of variable-name characters of ``text``."""
    for index, ch in enumerate(text):
        if not is_posix_std(ch):
            return text[:index]
    return text


@dataclass
class Environment:
    """Environment variables in insertion order, plus the exported declarations.

    ``variables`` is what programs receive and ``env`` prints. ``exported`` is
    what ``export`` lists; it may hold names without a value.
    """

    variables: dict[str, str | None] = field(default_factory=dict)
    exported: dict[str, str | None] = field(default_factory=dict)

    @classmethod
    def from_envp(cls, envp: Iterable[str]) -> Environment:
        """Build an environment from ``NAME=value`` strings.

        Each entry contributes the variable named by its leading name
        characters; every variable except ``_`` is also exported.
        """
        entries = list(envp)
        lookup: dict[str, str] = {}
        for entry in entries:
            key, sep, val = entry.partition("=")
            if sep:
                lookup.setdefault(key, val)
        environment = cls()
        for entry in entries:
            name = get_env_name(entry)
            val = lookup.get(name)
            if val is None:
                continue
            if name not in environment.variables:
                environment.variables[name] = val
        for name, val in environment.variables.items():
            if name != "_":
                environment._update_exported(name, val)
        return environment

    def _update_variable(self, name: str, value: str | None) -> None:
        if name in self.variables and value is None:
            return
        self.variables[name] = value

    def _update_exported(self, name: str, value: str | None) -> None:
        if name in self.exported and value is None:
            return
        self.exported[name] = value

    def get(self, name: str) -> str | None:
        """Return the value of an environment variable, or None when unset."""
        return self.variables.get(name)

    def set(self, name: str, value: str | None) -> None:
        """Assign a variable in both the environment and the export list."""
        self._update_variable(name, value)
        self._update_exported(name, value)

    def declare(self, name: str, value: str | None = None) -> None:
        """Add a name to the export list only; an existing value is kept when ``value`` is None."""
        self._update_exported(name, value)

    def append(self, name: str, value: str) -> None:
        """Append to a variable's value (``NAME+=value``), creating it when absent."""
        if name in self.variables:
            joined = (self.variables[name] or "") + value
            self.variables[name] = joined
            self._update_exported(name, joined)
        else:
            self.set(name, value)

    def unset(self, name: str) -> None:
        """Remove a name from both the environment and the export list."""
        self.variables.pop(name, None)
        self.exported.pop(name, None)

    def to_envp(self) -> list[str]:
        """Return the environment as ``NAME=value`` strings, in order."""
        return [f"{name}={value or ''}" for name, value in self.variables.items()]

    def env_items(self) -> list[tuple[str, str | None]]:
        """Return the environment variables in insertion order."""
        return list(self.variables.items())

    def export_items(self) -> list[tuple[str, str | None]]:
        """Return the exported names sorted by name."""
        return sorted(self.exported.items(), key=lambda item: item[0])