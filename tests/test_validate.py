import pytest

from minish.environment import Environment
from minish.validate import ShellSyntaxError, preprocess, strip_comment, validate_input


def test_preprocess_trims_whitespace():
    assert preprocess(" \t ls -l \n") == "ls -l"


def test_strip_comment_cuts_unquoted_hash():
    assert strip_comment("echo hi # note") == "echo hi "


def test_strip_comment_keeps_quoted_hash():
    assert strip_comment("echo '#x'") == "echo '#x'"


def test_strip_comment_without_hash():
    assert strip_comment("ls") == "ls"


@pytest.mark.parametrize(
    "line",
    [
        "echo hi",
        "ls | wc -l",
        "echo '(' ",
        "echo 'a;b'",
        "cat < in > out",
        "cat << EOF",
        "echo a >> out",
        "",
    ],
)
def test_valid_lines_are_returned_trimmed(line):
    assert validate_input(line, Environment([])) == preprocess(line)


@pytest.mark.parametrize(
    "line",
    [
        "'abc",
        'echo "hi',
        "echo (",
        "echo a;b",
        "ls & ls",
        "|",
        "<",
        "><",
        "<|",
        "<<<",
        ">>|",
        "ls |",
        "| ls",
        "ls || wc",
        "ls | | wc",
        "echo >",
        "echo > > x",
        "cat <",
    ],
)
def test_invalid_lines_raise(line):
    with pytest.raises(ShellSyntaxError) as info:
        validate_input(line, Environment([]))
    assert info.value.status == 2


def test_ambiguous_redirect_names_variable():
    with pytest.raises(ShellSyntaxError) as info:
        validate_input("cat < $NOPE", Environment([]))
    assert info.value.status == 2
    assert info.value.message == "minishell: $NOPE: ambiguous redirect"


def test_redirect_to_known_variable_is_allowed():
    env = Environment(["HOME=/home/u"])
    assert validate_input("cat < $HOME", env) == "cat < $HOME"


def test_empty_variable_between_pipes():
    with pytest.raises(ShellSyntaxError) as info:
        validate_input("ls | $NOPE", Environment([]))
    assert info.value.message == "minishell: empty variable between pipes"


def test_known_variable_between_pipes_is_allowed():
    env = Environment(["CMD=ls"])
    assert validate_input("echo a | $CMD", env) == "echo a | $CMD"


def test_quoted_pipe_is_not_checked():
    assert validate_input("echo '|'", None) == "echo '|'"