"""Collecting here-document input into cache files before execution."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterable
from typing import TextIO

from minish.environment import Environment
from minish.expand import expand
from minish.parser import Command, Redirection, RedirType


class HeredocInterrupted(Exception):
    """Raised when reading a here-document is interrupted."""

    def __init__(self, status: int = 130) -> None:
        super().__init__("here-document interrupted")
        self.status = status


def random_file_name() -> str:
    """Return a cache file name built from the process id and a random number."""
    number = int.from_bytes(os.urandom(4), sys.byteorder) & 0x7FFFFFFF
    return f"dts-{os.getpid()}{number}.cache"


def cache_file_name(directory: str | os.PathLike[str] | None = None) -> str:
    """Return a cache file path that does not exist yet."""
    while True:
        name = random_file_name()
        path = name if directory is None else os.path.join(directory, name)
        if not os.path.exists(path):
            return path


def read_heredoc(
    redirection: Redirection,
    lines: Iterable[str],
    env: Environment,
    last_status: int,
    sink: TextIO,
) -> bool:
    """Copy lines to sink until one equals the delimiter.

    Variables are expanded unless the delimiter was quoted. Returns True when
    the delimiter was reached and False, after a warning, at end of input.
    """
    delimiter = redirection.filename
    for line in lines:
        if line == delimiter:
            return True
        if "$" in line and not redirection.was_quoted:
            line = expand(line, env, last_status)
        sink.write(line + "\n")
    sys.stderr.write(
        "minishell: warning: here-document delimited by end-of-file "
        f"(wanted `{delimiter}')\n"
    )
    return False


def _prompt_line() -> str | None:
    try:
        return input(">")
    except EOFError:
        return None


def prepare_heredocs(
    commands: list[Command],
    env: Environment,
    last_status: int = 0,
    reader: Callable[[], str | None] | None = None,
    directory: str | os.PathLike[str] | None = None,
) -> list[str]:
    """Read every heredoc of the pipeline into its own cache file.

    Each heredoc's filename is replaced by its cache file. ``reader`` returns
    one line per call and None at end of input. When the first command has no
    name the cache files are removed at once. Returns the cache paths.
    """
    read = _prompt_line if reader is None else reader
    paths: list[str] = []
    for command in commands:
        for redirection in command.redirections:
            if redirection.kind != RedirType.HEREDOC:
                continue
            cache = cache_file_name(directory)
            try:
                with open(cache, "w", encoding="utf-8") as sink:
                    read_heredoc(redirection, iter(read, None), env, last_status, sink)
            except KeyboardInterrupt:
                if os.path.exists(cache):
                    os.unlink(cache)
                raise HeredocInterrupted(130) from None
            if commands and commands[0].name is None and os.path.exists(cache):
                os.unlink(cache)
            redirection.filename = cache
            paths.append(cache)
    return paths