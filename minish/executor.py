"""Running a parsed pipeline of commands as child processes."""

from __future__ import annotations

import errno
import io
import os
import signal
import sys
from collections.abc import Callable
from contextlib import contextmanager
from typing import Iterator, TextIO

from minish.builtin_exit import ShellExit, builtin_exit
from minish.environment import Environment, builtin_export
from minish.parser import Command, RedirType, resolve_path
from minish.redirect import RedirectionError, apply_redirections

SEGFAULT_STATUS = 139

_Builtin = Callable[[Command, Environment, int, TextIO, TextIO], int]


def _export(
    command: Command, env: Environment, last_status: int, out: TextIO, err: TextIO
) -> int:
    return builtin_export(env, command.args[1:], out, err)


def _exit(
    command: Command, env: Environment, last_status: int, out: TextIO, err: TextIO
) -> int:
    return builtin_exit(command.args[1:], last_status, err)


_BUILTINS: dict[str, _Builtin] = {"export": _export, "exit": _exit}


def _fd_stream(fd: int) -> TextIO:
    return io.TextIOWrapper(
        io.FileIO(fd, "w", closefd=False), encoding="utf-8", write_through=True
    )


def _report(message: str) -> None:
    os.write(2, (message + "\n").encode("utf-8", "replace"))


def _flush_std() -> None:
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except (OSError, ValueError):
            pass


@contextmanager
def _saved_std_fds() -> Iterator[None]:
    saved_in = os.dup(0)
    saved_out = os.dup(1)
    try:
        yield
    finally:
        os.dup2(saved_in, 0)
        os.dup2(saved_out, 1)
        os.close(saved_in)
        os.close(saved_out)


def _run_builtin(command: Command, env: Environment, last_status: int) -> int:
    handler = _BUILTINS[command.name or ""]
    out = _fd_stream(1)
    err = _fd_stream(2)
    try:
        return handler(command, env, last_status, out, err)
    finally:
        out.flush()
        err.flush()


def _exec_failure(name: str, path: str, exc: OSError) -> int:
    if exc.errno == errno.ENOENT and "/" not in name:
        _report(f"minishell: {name}: command not found")
        return 127
    if exc.errno == errno.ENOENT:
        _report(f"minishell: {name}: No such file or directory")
        return 127
    if os.path.isdir(path):
        _report(f"minishell: {name}: Is a directory")
        return 126
    if exc.errno == errno.EACCES:
        _report(f"minishell: {name}: Permission denied")
        return 126
    _report(f"minishell: {name}: {exc.strerror}")
    return 126


def _child_status(command: Command, env: Environment, last_status: int) -> int:
    """Set up and run one command inside a child; return its status on failure."""
    try:
        apply_redirections(command)
    except RedirectionError as exc:
        _report(exc.message)
        return 1
    if command.name is None:
        return 0
    if command.name in _BUILTINS:
        try:
            return _run_builtin(command, env, last_status)
        except ShellExit as stop:
            return stop.status
    path = command.path
    if path is None:
        path = resolve_path(command.name, env) or command.name
    args = command.args or [command.name]
    try:
        os.execve(path, args, env.to_mapping())
    except OSError as exc:
        return _exec_failure(command.name, path, exc)
    return 0


def _spawn(
    command: Command,
    env: Environment,
    last_status: int,
    pipes: list[tuple[int, int]],
    index: int,
) -> int:
    pid = os.fork()
    if pid:
        return pid
    status = 1
    try:
        signal.signal(signal.SIGINT, signal.SIG_DFL)
        signal.signal(signal.SIGQUIT, signal.SIG_DFL)
        if index > 0:
            os.dup2(pipes[index - 1][0], 0)
        if index < len(pipes):
            os.dup2(pipes[index][1], 1)
        for read_end, write_end in pipes:
            os.close(read_end)
            os.close(write_end)
        status = _child_status(command, env, last_status)
    except BaseException as exc:  # noqa: BLE001 - a child must never return
        try:
            _report(f"minishell: {exc}")
        except OSError:
            pass
    finally:
        os._exit(status)


def _exit_code(wait_status: int) -> int:
    code = os.waitstatus_to_exitcode(wait_status)
    return 128 - code if code < 0 else code


def _run_in_parent(command: Command, env: Environment, last_status: int) -> int:
    _flush_std()
    with _saved_std_fds():
        try:
            apply_redirections(command)
        except RedirectionError as exc:
            _report(exc.message)
            return 1
        return _run_builtin(command, env, last_status)


def run_pipeline(
    commands: list[Command], env: Environment, last_status: int = 0
) -> int:
    """Run the commands connected by pipes and return the last one's status.

    A lone ``export`` or ``exit`` runs in the shell itself, so its effects
    persist; ``exit`` then raises ShellExit. Every other command runs in a
    child process. A child killed by a signal yields 128 plus the signal.
    """
    if not commands:
        return 0
    if len(commands) == 1 and commands[0].name in _BUILTINS:
        return _run_in_parent(commands[0], env, last_status)
    _flush_std()
    pipes: list[tuple[int, int]] = []
    pids: list[int] = []
    try:
        pipes = [os.pipe() for _ in range(len(commands) - 1)]
        for index, command in enumerate(commands):
            pids.append(_spawn(command, env, last_status, pipes, index))
    finally:
        for read_end, write_end in pipes:
            os.close(read_end)
            os.close(write_end)
    status = last_status
    for pid in pids:
        _, wait_status = os.waitpid(pid, 0)
        status = _exit_code(wait_status)
    if status == SEGFAULT_STATUS:
        _report(
            "minishell: segmentation fault (CORE DUMPED) "
            f"{commands[-1].path or commands[-1].name or ''}"
        )
    return status


def heredoc_only_status(commands: list[Command], last_status: int) -> int:
    """Return the status after a line whose first command may be a bare heredoc.

    A first command with no executable path whose first redirection is a
    heredoc resets the status to 0; so does an empty pipeline.
    """
    if not commands:
        return 0
    first = commands[0]
    if (
        first.path is None
        and first.redirections
        and first.redirections[0].kind == RedirType.HEREDOC
    ):
        return 0
    return last_status