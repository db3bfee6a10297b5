import pytest

from minish.textutil import (
    is_blank,
    is_builtin,
    is_numerical,
    is_redir_or_pipe,
    is_space,
    is_valid_identifier,
    parse_long,
)


@pytest.mark.parametrize("char", [" ", "\t", "\n", "\r", "\v"])
def test_is_space_true(char):
    assert is_space(char)


@pytest.mark.parametrize("char", ["\f", "a", "0", "|", ""])
def test_is_space_false(char):
    assert not is_space(char)


def test_is_blank():
    assert is_blank("")
    assert is_blank(" \t\n ")
    assert not is_blank("  x ")
    assert not is_blank("\f")


@pytest.mark.parametrize("value", [0, 7, 42, 255, 256, -1, -300, 2**63 - 1, -(2**63 - 1)])
def test_parse_long_round_trip(value):
    assert parse_long(str(value)) == value


def test_parse_long_skips_leading_space_and_plus():
    assert parse_long(" \t\f+123") == parse_long("123")
    assert parse_long("  -45") == -parse_long("45")


def test_parse_long_ignores_trailing_text():
    assert parse_long("99abc") == parse_long("99")
    assert parse_long("12 34") == parse_long("12")


def test_parse_long_without_digits():
    assert parse_long("abc") == 0
    assert parse_long("-") == 0
    assert parse_long("") == 0


@pytest.mark.parametrize("text", [str(2**63), "99999999999999999999", "-" + str(2**63)])
def test_parse_long_overflow_is_minus_one(text):
    assert parse_long(text) == -1


def test_is_numerical():
    assert is_numerical("0123456789")
    assert is_numerical("")
    assert not is_numerical(None)
    assert not is_numerical("-1")
    assert not is_numerical("+5")
    assert not is_numerical("12a")


@pytest.mark.parametrize("name", ["PATH", "_", "_x1", "a", "HOME_DIR2"])
def test_is_valid_identifier_true(name):
    assert is_valid_identifier(name)


@pytest.mark.parametrize("name", ["", "1abc", "a-b", "a b", "=x", "x="])
def test_is_valid_identifier_false(name):
    assert not is_valid_identifier(name)


@pytest.mark.parametrize("name", ["exit", "cd", "env", "pwd", "unset", "export", "echo"])
def test_is_builtin_true(name):
    assert is_builtin(name)


@pytest.mark.parametrize("name", ["ls", "Echo", "", None, "exit2"])
def test_is_builtin_false(name):
    assert not is_builtin(name)


def test_is_redir_or_pipe():
    for char in "|><":
        assert is_redir_or_pipe(char)
    for char in ["a", " ", "&", ""]:
        assert not is_redir_or_pipe(char)