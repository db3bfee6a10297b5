"""Applying a command's redirections to the standard streams."""

from __future__ import annotations

import os

from minish.parser import Command, Redirection, RedirType

_OUTPUT_FLAGS = os.O_WRONLY | os.O_CREAT | os.O_TRUNC
_APPEND_FLAGS = os.O_WRONLY | os.O_CREAT | os.O_APPEND

_OPEN_FLAGS = {
    RedirType.OUTPUT: _OUTPUT_FLAGS,
    RedirType.APPEND: _APPEND_FLAGS,
    RedirType.INPUT: os.O_RDONLY,
    RedirType.HEREDOC: os.O_RDONLY,
}

_TARGET_FD = {
    RedirType.OUTPUT: 1,
    RedirType.APPEND: 1,
    RedirType.INPUT: 0,
    RedirType.HEREDOC: 0,
}


class RedirectionError(OSError):
    """Raised when a redirection cannot be set up."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


def _open_failure(redirection: Redirection, exc: OSError) -> RedirectionError:
    filename = redirection.filename
    kind = redirection.kind
    if kind in (RedirType.OUTPUT, RedirType.APPEND):
        if not filename:
            return RedirectionError("No such file or directory")
        return RedirectionError("Permission denied")
    if kind == RedirType.INPUT:
        if not filename or not os.path.exists(filename):
            return RedirectionError("No such file or directory")
        return RedirectionError("Permission denied")
    return RedirectionError(f"open: {exc.strerror}")


def apply_redirection(redirection: Redirection) -> None:
    """Open the redirection's file and put it in place of stdin or stdout.

    A heredoc's cache file is removed once it has been attached to stdin.
    """
    if redirection.filename is None:
        raise RedirectionError("Redirection error: missing filename")
    kind = RedirType(redirection.kind)
    target = _TARGET_FD[kind]
    try:
        fd = os.open(redirection.filename, _OPEN_FLAGS[kind], 0o666)
    except OSError as exc:
        raise _open_failure(redirection, exc) from exc
    try:
        os.dup2(fd, target)
    except OSError as exc:
        stream = "stdin" if target == 0 else "stdout"
        raise RedirectionError(
            f"Failed to redirect {stream}: {exc.strerror}"
        ) from exc
    finally:
        os.close(fd)
    if kind == RedirType.HEREDOC:
        os.unlink(redirection.filename)


def apply_redirections(command: Command | None) -> None:
    """Apply every redirection of command in order.

    Stops at the first one that fails by raising RedirectionError.
    """
    if command is None:
        return
    for redirection in command.redirections:
        apply_redirection(redirection)