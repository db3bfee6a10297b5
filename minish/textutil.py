"""Small text predicates and conversions used throughout the shell."""

from __future__ import annotations

import string

BUILTINS = frozenset({"exit", "cd", "env", "pwd", "unset", "export", "echo"})

_SPACES = frozenset(" \t\n\r\v")
_ATOL_SPACES = frozenset(" \t\n\v\f\r")
_LONG_MAX = 2**63 - 1
_IDENT_START = frozenset(string.ascii_letters + "_")
_IDENT_REST = frozenset(string.ascii_letters + string.digits + "_")


def is_space(char: str) -> bool:
    """Return True for space, tab, newline, carriage return or vertical tab."""
    return char in _SPACES and len(char) == 1


def is_blank(text: str) -> bool:
    """Return True if text is empty or holds only whitespace."""
    return all(is_space(char) for char in text)


def parse_long(text: str) -> int:
    """Parse a leading signed decimal integer, ignoring any trailing text.

    Values that do not fit a signed 64-bit integer yield -1.
    """
    pos = 0
    length = len(text)
    while pos < length and text[pos] in _ATOL_SPACES:
        pos += 1
    sign = 1
    if pos < length and text[pos] in "+-":
        if text[pos] == "-":
            sign = -1
        pos += 1
    result = 0
    while pos < length and "0" <= text[pos] <= "9":
        result = result * 10 + (ord(text[pos]) - ord("0"))
        if result > _LONG_MAX:
            return -1
        pos += 1
    return result * sign


def is_numerical(text: str | None) -> bool:
    """Return True if every character of text is an ASCII digit."""
    if text is None:
        return False
    return all("0" <= char <= "9" for char in text)


def is_valid_identifier(name: str) -> bool:
    """Return True if name is a valid shell variable name."""
    if not name or name[0] not in _IDENT_START:
        return False
    return all(char in _IDENT_REST for char in name[1:])


def is_builtin(name: str | None) -> bool:
    """Return True if name is one of the shell's built-in commands."""
    return name in BUILTINS


def is_redir_or_pipe(char: str) -> bool:
    """Return True for '|', '>' or '<'."""
    return len(char) == 1 and char in "|><"