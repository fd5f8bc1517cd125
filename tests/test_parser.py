import pytest

from minishell.command import Redirect
from minishell.parser import check_input, parse
from minishell.syntax import ParseError
from minishell.tokens import TokenType

ENV = {"USER": "alice"}


def argvs(text, last_status=0, env=ENV):
    return [c.argv for c in parse(text, last_status, env)]


def test_blanks_and_pipes():
    assert argvs("  \t\tadj dasfj adk | dasj jdasg|dasf   \t \t \t") == [
        ["adj", "dasfj", "adk"],
        ["dasj", "jdasg"],
        ["dasf"],
    ]


def test_quoted_pipe_removed_quotes():
    assert argvs('"dsfljfd | dfa"') == [["dsfljfd | dfa"]]


def test_quotes_inside_word():
    assert argvs('dsf "abcd|"adfadsf   ') == [["dsf", "abcd|adfadsf"]]


def test_redirect_out():
    (command,) = parse("cat input.txt>output.txt", 0, ENV)
    assert command.argv == ["cat", "input.txt"]
    assert command.redirects == [Redirect("output.txt", TokenType.REDIRECT_OUT)]


def test_redirect_append():
    (command,) = parse("cat input.txt>>output.txt", 0, ENV)
    assert command.redirects == [
        Redirect("output.txt", TokenType.REDIRECT_APPEND)
    ]


def test_redirect_in():
    (command,) = parse("input.txt < cat", 0, ENV)
    assert command.argv == ["input.txt"]
    assert command.redirects == [Redirect("cat", TokenType.REDIRECT_IN)]


def test_single_quotes_keep_spaces():
    assert argvs("echo 'input.txt < cat   '   ") == [
        ["echo", "input.txt < cat   "]
    ]


def test_expansion_respects_quotes():
    assert argvs("echo $USER \"$USER\" '$USER'") == [
        ["echo", "alice", "alice", "$USER"]
    ]


def test_last_status_expansion():
    assert argvs("echo $?", last_status=42) == [["echo", "42"]]


def test_expanded_value_is_not_an_operator():
    assert argvs("echo $P x", env={"P": "|"}) == [["echo", "|", "x"]]


def test_redirect_target_is_expanded():
    (command,) = parse("cat > $F", 0, {"F": "out"})
    assert command.redirects == [Redirect("out", TokenType.REDIRECT_OUT)]


@pytest.mark.parametrize("text", ["cat |", "cat | | wc", "cat > > x", "cat <"])
def test_syntax_errors(text):
    with pytest.raises(ParseError):
        parse(text, 0, ENV)


@pytest.mark.parametrize("text", ["echo 'abc", 'echo "x', "a || b",
                                  "cat <<< x", "cat >>> x"])
def test_check_input_rejects(text):
    with pytest.raises(ParseError):
        check_input(text)


@pytest.mark.parametrize("text", ["echo 'a || b'", "cat << EOF", "a | b"])
def test_check_input_accepts(text):
    assert check_input(text) is None