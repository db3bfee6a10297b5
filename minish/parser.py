"""Turning a list of expanded tokens into pipeline commands."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import IntEnum

from minish.environment import Environment
from minish.expand import Token
from minish.quoting import contains_unquoted, remove_quotes
from minish.textutil import is_builtin

PIPE = "|"


class RedirType(IntEnum):
    """Kinds of redirection a command can carry."""

    OUTPUT = 2
    APPEND = 3
    INPUT = 4
    HEREDOC = 5


_REDIRECT_TOKENS = {
    ">": RedirType.OUTPUT,
    ">>": RedirType.APPEND,
    "<": RedirType.INPUT,
    "<<": RedirType.HEREDOC,
}


@dataclass
class Redirection:
    """A redirection of a command.

    For a heredoc, filename first holds the delimiter and later the file
    that stores the collected input.
    """

    kind: RedirType
    filename: str
    was_quoted: bool = False


@dataclass
class Command:
    """One command of a pipeline.

    A command made only of redirections has no name and no path.
    """

    name: str | None = None
    path: str | None = None
    args: list[str] = field(default_factory=list)
    redirections: list[Redirection] = field(default_factory=list)
    is_builtin: bool = False

    @property
    def num_args(self) -> int:
        return len(self.args)


def redirect_type(token: str | None) -> RedirType | None:
    """Return the redirection kind named by token, or None."""
    if token is None:
        return None
    return _REDIRECT_TOKENS.get(token)


def is_redirection_token(token: str | None) -> bool:
    """Return True if token is exactly '>', '>>', '<' or '<<'."""
    return redirect_type(token) is not None


def is_pipe_token(token: str | None) -> bool:
    """Return True if token is exactly an unquoted '|'."""
    return token == PIPE


def invalid_pipe_sequence(first: str | None, second: str | None) -> bool:
    """Return True if both adjacent tokens hold an unquoted pipe."""
    if first is None or second is None:
        return False
    return contains_unquoted(first, PIPE) and contains_unquoted(second, PIPE)


def make_redirection(kind: RedirType, target: str | None) -> Redirection | None:
    """Build a redirection to target with its quotes removed.

    Returns None when there is no target.
    """
    if target is None:
        return None
    was_quoted = "'" in target or '"' in target
    return Redirection(RedirType(kind), remove_quotes(target) or "", was_quoted)


def resolve_path(name: str | None, env: Environment | None) -> str | None:
    """Return the first existing PATH entry for name, or name itself.

    Names that are empty or start with '.' are never looked up.
    """
    if name is None or env is None:
        return name
    for directory in env.path_dirs():
        candidate = f"{directory}/{name}"
        if os.access(candidate, os.F_OK) and name and not name.startswith("."):
            return candidate
    return name


def _text_of(token: Token | str | None) -> str | None:
    if isinstance(token, Token):
        return token.text
    return token


def _split_segments(texts: list[str | None]) -> list[list[str | None]]:
    segments: list[list[str | None]] = [[]]
    for text in texts:
        if is_pipe_token(text):
            segments.append([])
        else:
            segments[-1].append(text)
    return segments


def _parse_segment(
    segment: list[str | None], env: Environment | None
) -> Command | None:
    command = Command()
    saw_redirection = False
    items = iter(segment)
    for text in items:
        if text is None:
            continue
        kind = redirect_type(text)
        if kind is not None:
            saw_redirection = True
            try:
                target = next(items)
            except StopIteration:
                break
            redirection = make_redirection(kind, target)
            if redirection is not None:
                command.redirections.append(redirection)
            continue
        word = remove_quotes(text) or ""
        if command.name is None:
            command.name = word
            if is_builtin(word):
                command.is_builtin = True
            else:
                command.path = resolve_path(word, env)
        command.args.append(word)
    if command.name is None and not saw_redirection:
        return None
    return command


def parse_commands(
    tokens: Iterable[Token | str | None], env: Environment | None = None
) -> list[Command]:
    """Split tokens at pipes and build one command per non-empty segment.

    Tokens whose text is None (words that expanded to nothing) are skipped.
    """
    texts = [_text_of(token) for token in tokens]
    commands = []
    for segment in _split_segments(texts):
        command = _parse_segment(segment, env)
        if command is not None:
            commands.append(command)
    return commands