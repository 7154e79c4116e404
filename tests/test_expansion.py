import pytest

from minishell.environment import Environment
from minishell.expansion import (
    expand_heredoc_line,
    expand_tokens,
    expand_word,
    remove_quotes,
    remove_token_quotes,
)
from minishell.state import ShellState
from minishell.tokenizer import tokenize_line


@pytest.fixture
def state():
    env = Environment.from_envp(["HOME=/home/user", "USER=alice"])
    return ShellState(env=env, exit_code=42)


def test_plain_variable(state):
    assert expand_word("$HOME", state) == "/home/user"


def test_variable_inside_text(state):
    assert expand_word("x$USER.y", state) == "xalice.y"


def test_single_quotes_block_expansion(state):
    assert expand_word("'$HOME'", state) == "'$HOME'"


def test_double_quotes_allow_expansion(state):
    assert expand_word('"$HOME"', state) == '"/home/user"'


def test_exit_code(state):
    assert expand_word("$?", state) == str(state.exit_code)


def test_digit_is_dropped(state):
    assert expand_word("$1abc", state) == "abc"


def test_undefined_variable_is_empty(state):
    assert expand_word("a$UNDEFINED", state) == "a"


@pytest.mark.parametrize("word", ["$", "$-", "a$/b"])
def test_dollar_without_name_stays(state, word):
    assert expand_word(word, state) == word


def test_dollar_before_quote_is_removed(state):
    assert expand_word('$"abc"', state) == '"abc"'


def test_dollar_before_closing_double_quote_stays(state):
    assert expand_word('"abc$"', state) == '"abc$"'


def test_heredoc_delimiter_keeps_variables(state):
    assert expand_word("$HOME", state, True) == "$HOME"
    assert expand_word("$?", state, True) == str(state.exit_code)


def test_expanded_value_is_rescanned():
    env = Environment.from_envp(["A=$B", "B=x"])
    assert expand_word("$A", ShellState(env=env)) == "x"


def test_expand_tokens_skips_heredoc_delimiter(state):
    tokens = tokenize_line("cat << $HOME $USER")
    result = expand_tokens(tokens, state)
    assert result is tokens
    assert [t.value for t in tokens] == ["cat", "<<", "$HOME", "alice"]


def test_heredoc_line_ignores_quotes(state):
    assert expand_heredoc_line("x $HOME '$USER'", state) == "x /home/user 'alice'"


def test_heredoc_line_exit_and_digit(state):
    assert expand_heredoc_line("$? $2z", state) == str(state.exit_code) + " z"


@pytest.mark.parametrize("line", ["$$", "cost: $", "$ x"])
def test_heredoc_line_lone_dollars(state, line):
    assert expand_heredoc_line(line, state) == line


def test_remove_quotes_double():
    assert remove_quotes('"a b"') == "a b"


def test_remove_quotes_keeps_other_kind_inside():
    assert remove_quotes("\"it's\"") == "it's"
    assert remove_quotes("'say \"hi\"'") == 'say "hi"'


def test_remove_quotes_adjacent_sections():
    assert remove_quotes("a'b'\"c\"d") == "abcd"


@pytest.mark.parametrize("text", ["", "plain", "a-b_c/d"])
def test_remove_quotes_identity_without_quotes(text):
    assert remove_quotes(text) == text


def test_remove_token_quotes(state):
    tokens = tokenize_line("echo 'a b' \"$HOME\"")
    expand_tokens(tokens, state)
    result = remove_token_quotes(tokens)
    assert result is tokens
    assert [t.value for t in tokens] == ["echo", "a b", "/home/user"]