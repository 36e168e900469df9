"""Commands the shell runs itself instead of starting a program."""

from __future__ import annotations

import os
import stat
from collections.abc import Sequence
from typing import Optional, TextIO

from .environment import ShellError, ShellState, export_arguments
from .strutil import atoi

_EXACT_NAMES = frozenset({"cd", "pwd", "PWD", "export", "unset", "env", "ENV", "exit"})
_DIGITS = "0123456789"


class ShellExit(Exception):
    """The ``exit`` builtin asks the shell to stop with ``status``."""

    def __init__(self, status: int) -> None:
        super().__init__(status)
        self.status = status


def is_builtin(name: str) -> bool:
    """True when ``name`` is handled by the shell itself.

    Any word starting with ``echo`` or ``ECHO`` counts, so that a misspelt
    echo is reported by the shell rather than searched for on PATH.
    """
    return name.startswith(("echo", "ECHO")) or name in _EXACT_NAMES


def run_builtin(state: ShellState, args: Sequence[str], out: TextIO) -> int:
    """Run the builtin named by ``args[0]`` and return 0 or 1.

    Failures are reported on standard output and leave ``state.exit_status``
    at 1. ShellExit from ``exit`` is passed on to the caller.
    """
    name = args[0]
    if name.startswith(("echo", "ECHO")) and name not in ("echo", "ECHO"):
        if name.startswith("echo"):
            out.write(f"minishell: {name}: command not found\n")
            state.exit_status = 1
            return 1
        return 0
    try:
        _dispatch(state, args, out)
    except ShellError as exc:
        print(f"minishell: {exc}", flush=True)
        state.exit_status = 1
        return 1
    return 0


def _dispatch(state: ShellState, args: Sequence[str], out: TextIO) -> None:
    name = args[0]
    if name in ("echo", "ECHO"):
        builtin_echo(args, out)
    elif name in ("cd", "CD"):
        builtin_cd(state, args[1] if len(args) > 1 else None)
    elif name in ("pwd", "PWD"):
        builtin_pwd(out)
    elif name in ("export", "EXPORT"):
        builtin_export(state, args, out)
    elif name in ("unset", "UNSET"):
        builtin_unset(state, args)
    elif name in ("env", "ENV"):
        builtin_env(state, out)
    elif name in ("exit", "EXIT"):
        builtin_exit(state, args)


def _is_no_newline_flag(arg: str) -> bool:
    return arg.startswith("-") and all(char == "n" for char in arg[1:])


def builtin_echo(args: Sequence[str], out: TextIO) -> None:
    """Write the arguments separated by spaces; ``-n`` drops the newline.

    Empty arguments are skipped.
    """
    words = list(args[1:])
    no_newline = bool(words) and _is_no_newline_flag(words[0])
    if no_newline:
        words = words[1:]
    out.write(" ".join(word for word in words if word))
    if not no_newline:
        out.write("\n")


def builtin_cd(state: ShellState, path: Optional[str]) -> None:
    """Change directory, to HOME when ``path`` is None, and update PWD."""
    if path is None:
        path = os.environ.get("HOME")
        if path is None:
            raise ShellError("cd: HOME not set")
    try:
        info = os.stat(path)
    except OSError:
        raise ShellError(f"cd: {path}: No such file or directory") from None
    if not stat.S_ISDIR(info.st_mode):
        raise ShellError(f"cd: {path}: Not a directory")
    try:
        os.chdir(path)
    except OSError:
        raise ShellError(f"cd: {path}: No such file or directory") from None
    try:
        cwd = os.getcwd()
    except OSError:
        raise ShellError("error getting current directory") from None
    current_dir_var = state.env.find("PWD")
    if current_dir_var is not None:
        current_dir_var.value = cwd


def builtin_pwd(out: TextIO) -> None:
    """Write the current directory."""
    try:
        cwd = os.getcwd()
    except OSError as exc:
        raise ShellError(f"pwd: {exc.strerror}") from None
    out.write(f"{cwd}\n")


def builtin_export(state: ShellState, args: Sequence[str], out: TextIO) -> None:
    """List the variables sorted by name, or export the given assignments."""
    if len(args) > 1:
        export_arguments(state.env, args[1:])
        return
    for var in state.env.sorted():
        if var.visible:
            out.write(f"declare -x {var.name}\n")
        else:
            out.write(f'declare -x {var.name}="{var.value}"\n')


def builtin_unset(state: ShellState, args: Sequence[str]) -> None:
    """Remove each named variable, stopping at the first bad name."""
    for name in args[1:]:
        state.env.unset(name)


def builtin_env(state: ShellState, out: TextIO) -> None:
    """Write every variable that has a value as ``NAME=value``."""
    for var in state.env:
        if not var.visible:
            out.write(f"{var.name}={var.value}\n")


def builtin_exit(state: ShellState, args: Sequence[str]) -> None:
    """Raise ShellExit with the numeric argument, or 0 without one.

    A non-numeric argument is reported and sets the status to 255 before
    the shell stops.
    """
    if len(args) > 1:
        arg = args[1]
        if arg and all(char in _DIGITS for char in arg):
            status = atoi(arg)
            state.exit_status = status
            raise ShellExit(status)
        state.exit_status = 255
        print(f"minishell: exit: {arg}: numeric argument required", flush=True)
    raise ShellExit(0)