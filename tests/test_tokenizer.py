import pytest

from minishell.tokenizer import (
    ShellSyntaxError,
    Token,
    TokenType,
    classify,
    split_words,
    tokenize_line,
)


@pytest.mark.parametrize(
    "kind", [TokenType.INPUT, TokenType.OUTPUT, TokenType.APPEND, TokenType.HERE_DOC]
)
def test_redirection_types(kind):
    assert kind.is_redirection() is True


@pytest.mark.parametrize("kind", [TokenType.COMMAND, TokenType.FILE, TokenType.PIPE])
def test_non_redirection_types(kind):
    assert kind.is_redirection() is False


@pytest.mark.parametrize(
    "value, kind",
    [
        ("<", TokenType.INPUT),
        (">", TokenType.OUTPUT),
        ("<<", TokenType.HERE_DOC),
        (">>", TokenType.APPEND),
        ("|", TokenType.PIPE),
        ("ls", TokenType.COMMAND),
    ],
)
def test_classify_without_previous(value, kind):
    token = classify(value, None)
    assert token.type is kind
    assert token.value == value
    assert token.hdoc_quoted is False


def test_classify_file_after_redirection():
    previous = Token(">", TokenType.OUTPUT)
    assert classify("out.txt", previous).type is TokenType.FILE


def test_classify_operator_wins_over_file():
    previous = Token("<", TokenType.INPUT)
    assert classify("<", previous).type is TokenType.INPUT


def test_classify_hdoc_quoted():
    heredoc = Token("<<", TokenType.HERE_DOC)
    assert classify("'EOF'", heredoc).hdoc_quoted is True
    assert classify("EOF", heredoc).hdoc_quoted is False
    assert classify("'x'", Token("<", TokenType.INPUT)).hdoc_quoted is False


@pytest.mark.parametrize(
    "line, words",
    [
        ("ls -l | wc", ["ls", "-l", "|", "wc"]),
        ("cat<in>>out", ["cat", "<", "in", ">>", "out"]),
        ("echo \"a | b\" 'c  d'", ["echo", '"a | b"', "'c  d'"]),
        ("a||b", ["a", "|", "|", "b"]),
        ("a<>b", ["a", "<", ">", "b"]),
        ("cat <<EOF", ["cat", "<<", "EOF"]),
        ("echo x\"y z\"w", ["echo", 'x"y z"w']),
    ],
)
def test_split_words(line, words):
    assert split_words(line) == words


@pytest.mark.parametrize("line", ["", "   ", "\t\n"])
def test_split_words_blank(line):
    assert split_words(line) == []


@pytest.mark.parametrize("line", ["a b c", "echo hello world", "x"])
def test_split_words_round_trip_plain(line):
    assert " ".join(split_words(line)) == line


def test_tokenize_line_types():
    tokens = tokenize_line("cat < in | wc > out")
    assert [t.value for t in tokens] == ["cat", "<", "in", "|", "wc", ">", "out"]
    assert [t.type for t in tokens] == [
        TokenType.COMMAND,
        TokenType.INPUT,
        TokenType.FILE,
        TokenType.PIPE,
        TokenType.COMMAND,
        TokenType.OUTPUT,
        TokenType.FILE,
    ]


def test_tokenize_line_heredoc_quoted_delimiter():
    tokens = tokenize_line('cat << "EOF"')
    assert tokens[-1].type is TokenType.FILE
    assert tokens[-1].hdoc_quoted is True
    assert tokenize_line("cat << EOF")[-1].hdoc_quoted is False


def test_tokenize_line_quoted_operators_stay_words():
    tokens = tokenize_line("echo '&' \">>>\"")
    assert all(t.type is TokenType.COMMAND for t in tokens)
    assert [t.value for t in tokens] == ["echo", "'&'", '">>>"']


@pytest.mark.parametrize(
    "line, char",
    [
        ("echo 'abc", "'"),
        ('echo "abc', '"'),
        ("a & b", "&"),
        ("a >>> b", ">"),
        ("a <<< b", "<"),
    ],
)
def test_tokenize_line_syntax_errors(line, char):
    with pytest.raises(ShellSyntaxError) as info:
        tokenize_line(line)
    assert info.value.char == char
    assert info.value.status == 2
    assert f"'{char}'" in str(info.value)


def test_tokenize_line_quote_error_reported_first():
    with pytest.raises(ShellSyntaxError) as info:
        tokenize_line("a & 'b")
    assert info.value.char == "'"