"""Variable expansion of command-line tokens."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass

from minish.environment import Environment


@dataclass
class Token:
    """One word of a command line and the flags that steer its expansion."""

    text: str | None
    in_single_quotes: bool = False
    prev_heredoc: bool = False


def in_single_quotes_at(text: str | None, index: int) -> bool:
    """Return True if the character at index lies inside single quotes."""
    inside = False
    for position, char in enumerate(text or ""):
        if position == index:
            break
        if char == "'":
            inside = not inside
    return inside


def _is_name_char(char: str) -> bool:
    return char == "_" or (char.isascii() and char.isalnum())


def _variable_value(
    text: str, index: int, env: Environment, last_status: int, pid: int
) -> tuple[str, int]:
    """Return the expansion of the variable starting at index and the index after it."""
    char = text[index] if index < len(text) else ""
    if char == "?":
        return str(last_status), index + 1
    if char == "$":
        return str(pid), index + 1
    if char in ("", '"', " "):
        return "$", index
    end = index
    while end < len(text) and _is_name_char(text[end]):
        end += 1
    name = text[index:end]
    value = env.get(name) if name else None
    return value or "", end


def expand(
    text: str,
    env: Environment,
    last_status: int = 0,
    pid: int | None = None,
) -> str:
    """Replace every ``$NAME``, ``$?`` and ``$$`` in text.

    Unknown or empty variables expand to nothing; a lone ``$`` before the end,
    a space or a double quote stays as it is.
    """
    if pid is None:
        pid = os.getpid()
    parts: list[str] = []
    start = 0
    index = 0
    while index < len(text):
        if text[index] == "$":
            parts.append(text[start:index])
            value, index = _variable_value(text, index + 1, env, last_status, pid)
            parts.append(value)
            start = index
        else:
            index += 1
    parts.append(text[start:])
    return "".join(parts)


def expand_tokens(
    tokens: list[Token], env: Environment, last_status: int = 0
) -> list[Token]:
    """Expand variables in place in every eligible token and return the list.

    Tokens wholly in single quotes and heredoc delimiters are left alone;
    a token that expands to nothing gets ``None`` as its text.
    """
    for token in tokens:
        if token.text is None or "$" not in token.text or token.prev_heredoc:
            continue
        if token.in_single_quotes:
            continue
        expanded = expand(token.text, env, last_status)
        token.text = expanded or None
    return tokens


def mark_single_quoted(tokens: Iterable[Token]) -> None:
    """Flag each token that starts and ends with a single quote."""
    for token in tokens:
        text = token.text or ""
        token.in_single_quotes = (
            len(text) >= 2 and text[0] == "'" and text[-1] == "'"
        )