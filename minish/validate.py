"""Syntax checks applied to a command line before it is tokenized."""

from __future__ import annotations

from minish.environment import Environment
from minish.quoting import has_open_quote, is_quoted_at
from minish.textutil import is_space, is_valid_identifier

TRIM_CHARS = " \f\n\r\t\v"
SPECIAL_CHARS = "()[]{}&;\\"


class ShellSyntaxError(Exception):
    """Raised when a command line is rejected; carries the exit status."""

    def __init__(self, message: str, status: int = 2) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


def _syntax_error(line: str) -> ShellSyntaxError:
    return ShellSyntaxError(f"minishell: syntax error: {line}", 2)


def strip_comment(line: str) -> str:
    """Cut the line at its first unquoted '#'."""
    for index, char in enumerate(line):
        if char == "#" and not is_quoted_at(line, index):
            return line[:index]
    return line


def preprocess(line: str) -> str:
    """Trim surrounding whitespace from the line."""
    return line.strip(TRIM_CHARS)


def _at(text: str, index: int) -> str:
    return text[index] if 0 <= index < len(text) else ""


def _has_special_char(line: str) -> bool:
    return any(
        char in SPECIAL_CHARS and not is_quoted_at(line, index)
        for index, char in enumerate(line)
    )


def _bad_short_line(line: str) -> bool:
    length = len(line)
    c1, c2, c3 = _at(line, 0), _at(line, 1), _at(line, 2)
    if length == 1 and c1 in ("<", ">", "|"):
        return True
    if length == 2:
        if c1 == ">" and c2 in ("<", "|"):
            return True
        if c1 == "<" and c2 in (">", "|"):
            return True
    if length == 3:
        if c1 == "<" and (c2 in ("|", ">") or (c2 == "<" and c3 in (">", "|", "<"))):
            return True
        if c1 == ">" and (c2 in ("|", "<") or (c2 == ">" and c3 in ("<", "|", ">"))):
            return True
    return length > 1 and line[-1] == "|"


def _variable_after(line: str, index: int) -> str:
    end = line.find(" ", index + 1)
    return line[index + 1:] if end == -1 else line[index + 1:end]


def _variable_known(var: str, names: list[str]) -> bool:
    if not is_valid_identifier(var):
        return False
    return any(var.startswith(name) for name in names)


def _check_pipes(line: str, names: list[str]) -> None:
    if _at(line, 0) == "|" and not is_quoted_at(line, 0):
        raise _syntax_error(line)
    i = 0
    while i < len(line):
        if line[i] == "|" and not is_quoted_at(line, i):
            i += 1
            if _at(line, i) == "|" and not is_quoted_at(line, i):
                raise _syntax_error(line)
            i += 1
            while _at(line, i) and is_space(line[i]):
                i += 1
            char = _at(line, i)
            if char == "|" and not is_quoted_at(line, i):
                raise _syntax_error(line)
            if char == "$" and not is_quoted_at(line, i):
                if not _variable_known(_variable_after(line, i), names):
                    raise ShellSyntaxError("minishell: empty variable between pipes", 2)
        else:
            i += 1


def _check_redirects(line: str, symbol: str, names: list[str]) -> None:
    i = 0
    while i < len(line):
        if line[i] == symbol and not is_quoted_at(line, i):
            i += 1
            if _at(line, i) == symbol and not is_quoted_at(line, i):
                i += 1
            while _at(line, i) and is_space(line[i]):
                i += 1
            char = _at(line, i)
            if not char or char == symbol:
                raise _syntax_error(line)
            if char == "$":
                var = _variable_after(line, i)
                if not _variable_known(var, names):
                    raise ShellSyntaxError(f"minishell: ${var}: ambiguous redirect", 2)
        else:
            i += 1


def validate_input(line: str, env: Environment | None = None) -> str:
    """Check a command line and return it trimmed.

    Raises ShellSyntaxError for unclosed quotes, unquoted special characters,
    misplaced pipes or redirections, and redirections to unknown variables.
    """
    names = env.names() if env is not None else []
    trimmed = preprocess(line)
    if has_open_quote(trimmed):
        raise _syntax_error(trimmed)
    if _has_special_char(trimmed):
        raise _syntax_error(trimmed)
    if _bad_short_line(trimmed):
        raise _syntax_error(trimmed)
    _check_pipes(trimmed, names)
    _check_redirects(trimmed, ">", names)
    _check_redirects(trimmed, "<", names)
    return trimmed