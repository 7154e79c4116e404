# minishell

The pieces of a small bash-like shell, as a Python library: reading a command
line into words and operators, expanding variables, removing quotes, grouping
words into the commands of a pipeline, running the shell's own builtins,
finding programs on `PATH` and reading here-documents.

## Installing

```
pip install .
```

## Modules

- `minishell.quoting` – character classes and quote tracking: `in_quotes`,
  `in_dbl_quotes`, `check_quotes` (the quote left open, if any) and
  `check_line` (an operator used too many times in a row: more than two `<` or
  `>`, more than one `|`, or any `&` outside quotes).
- `minishell.tokenizer` – `tokenize_line` turns a line into `Token`s, each with
  a `TokenType` (`COMMAND`, `FILE`, `PIPE`, `INPUT`, `OUTPUT`, `APPEND`,
  `HERE_DOC`). An unclosed quote or a bad operator run raises
  `ShellSyntaxError`, whose `char` names the offending character and whose
  `status` is 2.
- `minishell.environment` – `Environment` keeps the variables passed to
  programs (in insertion order) and the export list (listed sorted by name,
  possibly with names that have no value). `Environment.from_envp` builds one
  from `NAME=value` strings; every variable except `_` is also exported.
- `minishell.state` – `ShellState` holds the environment and the last exit
  code; `ShellExit` carries the status a process should end with.
- `minishell.expansion` – `expand_word` expands `$?`, `$<digit>` (always to
  nothing) and `$NAME`, leaving single-quoted text alone and not expanding
  variables in a here-document delimiter; `expand_heredoc_line` does the same
  for here-document lines, where quotes have no effect; `remove_quotes` strips
  the quotes that open and close quoted sections.
- `minishell.commands` – `build_commands` splits tokens at pipes into
  `Command`s with their arguments and `Redirection`s; `is_last_redirection`
  tells whether a later redirection of a command overrides the same direction.
- `minishell.builtins` – `echo` (with `-n`), `cd` (with `-` and `$HOME`),
  `pwd`, `env`, `export` (including `NAME+=value`), `unset` and `exit_shell`;
  `run_builtin` dispatches on the command name and records the status.
- `minishell.pathsearch` – `resolve_command` returns the path to run for a
  command name, searching `$PATH` unless the name starts with `/` or looks like
  `./prog`; otherwise it raises `CommandLookupError` with status 126 or 127.
- `minishell.heredoc` – `read_heredoc` collects lines up to the delimiter;
  `prepare_heredocs` reads every here-document of a pipeline and gives each
  command whose last input is a here-document a descriptor reading its content.
  An interrupted read raises `HeredocInterrupted` and sets the status to 130.

## Example

```python
import sys

from minishell.builtins import run_builtin
from minishell.commands import build_commands
from minishell.environment import Environment
from minishell.expansion import expand_tokens, remove_token_quotes
from minishell.state import ShellState
from minishell.tokenizer import tokenize_line

state = ShellState(env=Environment.from_envp(["HOME=/tmp", "PATH=/usr/bin:/bin"]))

tokens = tokenize_line('echo "$HOME" > out.txt')
expand_tokens(tokens, state)
remove_token_quotes(tokens)
commands = build_commands(tokens)
print(commands[0].args)           # ['echo', '/tmp']
print(commands[0].files[0].name)  # out.txt

run_builtin(state, ["export", "GREETING=hi"], sys.stdout, sys.stderr, False)
print(state.env.get("GREETING"))  # hi
```

## What it does not do

The package has no interactive prompt and installs no command. It does not
start external programs, connect the commands of a pipeline with pipes, apply
file redirections to a running process or handle signals: it stops at
producing the commands, their redirections, the resolved program paths and
here-document descriptors, and at running builtins within the current process.

## Running the tests

```
pip install ".[test]"
pytest
```