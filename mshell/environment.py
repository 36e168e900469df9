"""Shell variables, the export rules and the state shared by a session."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Optional

from .strutil import atoi, itoa, split_unquote


class ShellError(Exception):
    """A command failed; the message is what the shell reports after its name."""


@dataclass
class EnvVar:
    """One variable. ``visible`` marks a name exported without a value."""

    name: str
    value: str = ""
    visible: bool = False


class Environment:
    """Ordered collection of shell variables."""

    def __init__(self, variables: Optional[Mapping[str, str]] = None) -> None:
        self._vars: list[EnvVar] = [
            EnvVar(name, value) for name, value in (variables or {}).items()
        ]

    def find(self, name: str) -> Optional[EnvVar]:
        """Return the variable called ``name``, or None."""
        return next((var for var in self._vars if var.name == name), None)

    def export(self, name: str, value: Optional[str]) -> None:
        """Set ``name``; a value of None exports the name without a value."""
        var = self.find(name)
        if var is not None:
            var.value = "" if value is None else value
            var.visible = value is None
        else:
            self._vars.append(EnvVar(name, "" if value is None else value, value is None))

    def unset(self, name: str) -> None:
        """Remove ``name``; unknown or malformed names raise ShellError."""
        var = None if _starts_with_digit(name) else self.find(name)
        if var is None:
            raise ShellError(f"unset: `{name}': not a valid identifier")
        self._vars.remove(var)

    def sorted(self) -> list[EnvVar]:
        """Copies of the variables ordered by name."""
        return [EnvVar(v.name, v.value, v.visible) for v in sorted(self._vars, key=lambda v: v.name)]

    def to_envp(self) -> list[str]:
        """The variables as ``NAME=value`` strings for a child process."""
        return [f"{var.name}={var.value}" for var in self._vars]

    def increment_shell_level(self) -> None:
        """Raise SHLVL by one, clearing it at 1000 and resetting it past that."""
        var = self.find("SHLVL")
        if var is None:
            return
        level = atoi(var.value) + 1
        if level <= 999:
            var.value = itoa(level)
        elif level == 1000:
            var.value = ""
        else:
            var.value = "1"

    def __iter__(self) -> Iterator[EnvVar]:
        return iter(list(self._vars))

    def __len__(self) -> int:
        return len(self._vars)


@dataclass
class ShellState:
    """Everything a running shell carries between commands."""

    env: Environment = field(default_factory=Environment)
    exit_status: int = 0
    heredoc_files: list[str] = field(default_factory=list)


def _starts_with_digit(text: str) -> bool:
    return bool(text) and "0" <= text[0] <= "9"


def _bad_identifier(name: str) -> bool:
    return "*" in name or _starts_with_digit(name)


def export_arguments(env: Environment, args: Iterable[str]) -> None:
    """Apply ``export`` arguments (those after the command name) in order.

    Stops with ShellError at the first invalid identifier.
    """
    for arg in args:
        if "=" not in arg:
            if _bad_identifier(arg):
                raise ShellError(f"export: `{arg}': not a valid identifier")
            env.export(arg, None)
            continue
        parts = split_unquote(arg, "=")
        if len(parts) == 2:
            name, value = parts
            if _bad_identifier(name):
                raise ShellError(f"export: `{name}={value}': not a valid identifier")
            env.export(name, value)
        elif len(parts) == 1:
            name = parts[0]
            if _bad_identifier(name):
                raise ShellError(f"export: `{name}': not a valid identifier")
            env.export(name, "")