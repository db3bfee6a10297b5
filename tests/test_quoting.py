import pytest

from minish.quoting import (
    contains_unquoted,
    has_open_quote,
    is_fully_quoted,
    is_quoted_at,
    remove_quotes,
    unmatched_quote,
)


@pytest.mark.parametrize("text", ["'abc'", '"abc"', "'", '""'])
def test_is_fully_quoted_true(text):
    assert is_fully_quoted(text)


@pytest.mark.parametrize("text", ["", "abc", "'abc\"", "a'b'", "'ab'c"])
def test_is_fully_quoted_false(text):
    assert not is_fully_quoted(text)


@pytest.mark.parametrize("text", ["'abc", 'echo "hi', "'\"'\"", "\"'\"'"])
def test_has_open_quote_true(text):
    assert has_open_quote(text)


@pytest.mark.parametrize("text", ["", None, "'abc'", "\"it's\"", "'say \"x'"])
def test_has_open_quote_false(text):
    assert not has_open_quote(text)


@pytest.mark.parametrize("text", ["abc", "hello world", "$HOME/x"])
def test_remove_quotes_without_quotes_is_identity(text):
    assert remove_quotes(text) == text


@pytest.mark.parametrize("inner", ["abc", "a b c", "$USER"])
def test_remove_quotes_strips_wrapping(inner):
    assert remove_quotes("'" + inner + "'") == inner
    assert remove_quotes('"' + inner + '"') == inner


def test_remove_quotes_keeps_other_quote_inside():
    assert remove_quotes("\"it's\"") == "it's"
    assert remove_quotes("'say \"x\"'") == 'say "x"'


def test_remove_quotes_joins_adjacent_spans():
    assert remove_quotes("a'b'\"c\"") == remove_quotes("abc")


def test_remove_quotes_none():
    assert remove_quotes(None) is None


def test_remove_quotes_result_has_no_quotes_when_balanced():
    for text in ["'a'\"b\"", "x'y'z", "\"\"''"]:
        result = remove_quotes(text)
        assert "'" not in result and '"' not in result


def test_contains_unquoted():
    assert contains_unquoted("ls | wc", "|")
    assert not contains_unquoted("echo '|'", "|")
    assert not contains_unquoted('echo "|"', "|")
    assert contains_unquoted("'a'|'b'", "|")
    assert not contains_unquoted(None, "|")
    assert not contains_unquoted("", "|")


def test_is_quoted_at():
    text = "a 'b' \"c\" d"
    assert not is_quoted_at(text, text.index("a"))
    assert is_quoted_at(text, text.index("b"))
    assert is_quoted_at(text, text.index("c"))
    assert not is_quoted_at(text, text.index("d"))
    assert not is_quoted_at(None, 0)


def test_is_quoted_at_closing_quote_position_is_inside():
    text = "'x'"
    assert is_quoted_at(text, 2)
    assert not is_quoted_at(text, 3)


def test_unmatched_quote():
    assert unmatched_quote("'abc") == "'"
    assert unmatched_quote('say "hi') == '"'
    assert unmatched_quote("'a' \"b\"") == ""
    assert unmatched_quote("\"it's") == '"'


def test_unmatched_quote_limit():
    text = "'abc' 'd"
    assert unmatched_quote(text, 3) == "'"
    assert unmatched_quote(text, 5) == ""
    assert unmatched_quote(text) == "'"
    assert unmatched_quote(None, 4) == ""