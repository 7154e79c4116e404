"""Building blocks of a bash-like shell: tokenizing, expansion, commands, builtins, PATH lookup and here-documents."""

__version__ = "0.1.0"

__all__ = [
    "builtins",
    "commands",
    "environment",
    "expansion",
    "heredoc",
    "pathsearch",
    "quoting",
    "state",
    "tokenizer",
]