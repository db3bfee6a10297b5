"""The shell's variable table and the ``export`` built-in."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Mapping
from typing import TextIO

from minish.textutil import is_valid_identifier


class InvalidIdentifier(ValueError):
    """Raised when a name given to ``export`` is not a valid identifier."""

    def __init__(self, argument: str) -> None:
        super().__init__(f"{argument}: not a valid identifier")
        self.argument = argument


def _split_entry(entry: str) -> tuple[str, str | None]:
    name, sep, value = entry.partition("=")
    return name, (value if sep else None)


class Environment:
    """Ordered variables; a variable may be declared without a value."""

    def __init__(
        self, entries: Mapping[str, str | None] | Iterable[str] | None = None
    ) -> None:
        self._vars: dict[str, str | None] = {}
        if entries is None:
            return
        if isinstance(entries, Mapping):
            for name, value in entries.items():
                self._vars[name] = value
        else:
            for entry in entries:
                name, value = _split_entry(entry)
                self._vars[name] = value

    def __contains__(self, name: object) -> bool:
        return name in self._vars

    def __len__(self) -> int:
        return len(self._vars)

    def get(self, name: str) -> str | None:
        """Return the value of name, or None if unset or declared without one."""
        return self._vars.get(name)

    def names(self) -> list[str]:
        """Return every variable name in declaration order."""
        return list(self._vars)

    def export(self, argument: str) -> None:
        """Apply one ``NAME`` or ``NAME=VALUE`` argument of ``export``.

        An existing variable keeps its value when no ``=`` is given.
        """
        name, value = _split_entry(argument)
        if not is_valid_identifier(name):
            raise InvalidIdentifier(argument)
        if name in self._vars:
            if value is not None:
                self._vars[name] = value
            return
        self._vars[name] = value

    def declarations(self) -> list[str]:
        """Return the lines printed by ``export`` without arguments."""
        lines = []
        for name, value in self._vars.items():
            if value is None:
                lines.append(f"declare -x {name}")
            else:
                lines.append(f'declare -x {name}="{value}"')
        return lines

    def path_dirs(self) -> list[str]:
        """Return the non-empty directories listed in PATH."""
        value = self.get("PATH")
        if not value:
            return []
        return [part for part in value.split(":") if part]

    def to_mapping(self) -> dict[str, str]:
        """Return the variables that carry a value, for a child process."""
        return {name: value for name, value in self._vars.items() if value is not None}


def builtin_export(
    env: Environment,
    args: list[str],
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Run ``export`` with the arguments that follow the command name.

    Stops at the first invalid identifier and returns 1; otherwise 0.
    """
    out = sys.stdout if out is None else out
    err = sys.stderr if err is None else err
    if not args:
        for line in env.declarations():
            out.write(line + "\n")
        return 0
    for argument in args:
        try:
            env.export(argument)
        except InvalidIdentifier:
            err.write(" not a valid identifier\n")
            return 1
    return 0