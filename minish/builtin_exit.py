"""The ``exit`` built-in."""

from __future__ import annotations

import sys
from typing import TextIO

from minish.textutil import is_numerical, parse_long


class ShellExit(Exception):
    """Raised when the shell is to terminate with the given status."""

    def __init__(self, status: int) -> None:
        super().__init__(f"exit {status}")
        self.status = status


def exit_status(value: str) -> int:
    """Convert a numeric argument to an exit status in the range 0-255."""
    return parse_long(value) % 256


def _is_bad_argument(argument: str) -> bool:
    if not argument:
        return False
    if any(not ("0" <= char <= "9") and char not in "+-" for char in argument):
        return True
    return parse_long(argument) == -1 and argument != "-1"


def builtin_exit(
    args: list[str], last_status: int = 0, err: TextIO | None = None
) -> int:
    """Run ``exit`` with the arguments that follow the command name.

    Raises ShellExit to end the shell. Returns 1 without exiting when given
    more than one argument of which the first is numeric.
    """
    err = sys.stderr if err is None else err
    if len(args) >= 2:
        if not is_numerical(args[0]):
            err.write("minishell: exit: numeric argument required\n")
            raise ShellExit(2)
        err.write("minishell: exit: too many arguments\n")
        return 1
    if args:
        argument = args[0]
        if _is_bad_argument(argument):
            err.write("exit\n")
            err.write(f"minishell: exit: {argument}: numeric argument required\n")
            raise ShellExit(2)
        err.write("exit\n")
        raise ShellExit(exit_status(argument))
    err.write("exit\n")
    raise ShellExit(last_status)