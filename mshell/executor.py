"""Walking the command tree: logic operators, pipes and commands."""

from __future__ import annotations

import os
import shutil
import signal
import subprocess
import sys
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Optional, TextIO

from .builtins import ShellExit, is_builtin, run_builtin
from .environment import ShellState
from .redirect import RedirectError, open_input, open_output
from .tree import NodeType, TreeNode, is_logic_root, is_word_root

_SIGNAL_STATUS = {signal.SIGINT: 130, signal.SIGQUIT: 131}


def execute(state: ShellState, tree: TreeNode) -> int:
    """Run a whole command tree and record its result as the exit status."""
    result = evaluate(state, tree)
    state.exit_status = result
    return result


def evaluate(state: ShellState, node: TreeNode) -> int:
    """Run one node of the tree; nonzero means the command failed."""
    if is_logic_root(node):
        if node.type is NodeType.AND and execute_and(state, node):
            return 1
        if node.type is NodeType.OR and execute_or(state, node):
            return 1
    if node.type is NodeType.PIPE and execute_pipe(state, node):
        return 1
    if is_word_root(node):
        return _execute_with_files(state, node)
    return 0


def _close(fd: int, standard: int) -> None:
    if fd != standard:
        os.close(fd)


def _execute_with_files(state: ShellState, node: TreeNode) -> int:
    fd_out = open_output(node)
    try:
        fd_in = open_input(node)
    except RedirectError as exc:
        print(f"minishell: {exc}", flush=True)
        _close(fd_out, 1)
        return 1
    try:
        if execute_word(state, node, fd_in, fd_out):
            return state.exit_status
        return 0
    finally:
        _close(fd_in, 0)
        _close(fd_out, 1)


def execute_and(state: ShellState, node: TreeNode) -> int:
    """Run the right side only when the left succeeds."""
    if evaluate(state, node.left):
        state.exit_status = 1
        return 1
    state.exit_status = 0
    if evaluate(state, node.right):
        state.exit_status = 1
        return 1
    state.exit_status = 0
    return 0


def execute_or(state: ShellState, node: TreeNode) -> int:
    """Run the right side only when the left fails."""
    if evaluate(state, node.left):
        if evaluate(state, node.right):
            state.exit_status = 1
            return 1
    state.exit_status = 0
    return 0


def _fork_side(state: ShellState, node: TreeNode, read_fd: int, write_fd: int,
               writer: bool) -> int:
    try:
        pid = os.fork()
    except OSError:
        print("minishell: fork error", flush=True)
        raise ShellExit(255) from None
    if pid != 0:
        return pid
    status = 0
    try:
        if writer:
            os.close(read_fd)
            os.dup2(write_fd, 1)
            os.close(write_fd)
        else:
            os.close(write_fd)
            os.dup2(read_fd, 0)
            os.close(read_fd)
        evaluate(state, node)
    except ShellExit as exc:
        status = exc.status
    except BaseException:
        status = 1
    finally:
        try:
            sys.stdout.flush()
            sys.stderr.flush()
        finally:
            os._exit(status & 0xFF)
    return pid  # pragma: no cover


def execute_pipe(state: ShellState, node: TreeNode) -> int:
    """Run both sides at once, the left writing into the right."""
    try:
        read_fd, write_fd = os.pipe()
    except OSError:
        print("minishell: pipe error", flush=True)
        raise ShellExit(255) from None
    sys.stdout.flush()
    sys.stderr.flush()
    left = _fork_side(state, node.left, read_fd, write_fd, writer=True)
    right = _fork_side(state, node.right, read_fd, write_fd, writer=False)
    os.close(read_fd)
    os.close(write_fd)
    os.waitpid(left, 0)
    _, status = os.waitpid(right, 0)
    if os.WIFEXITED(status):
        state.exit_status = os.WEXITSTATUS(status)
    return 0


@contextmanager
def _fd_writer(fd: int) -> Iterator[TextIO]:
    sys.stdout.flush()
    stream = open(fd, "w", closefd=False)
    try:
        yield stream
    finally:
        stream.flush()


def execute_word(state: ShellState, node: Optional[TreeNode], fd_in: int,
                 fd_out: int) -> int:
    """Run a command node with the given descriptors; nonzero on failure."""
    if node is None or node.value is None or not node.args:
        return 1
    name = node.args[0]
    if is_builtin(name):
        with _fd_writer(fd_out) as out:
            if run_builtin(state, node.args, out):
                return state.exit_status
        return 0
    if not node.value:
        return 1
    path = find_executable(state, name)
    if path is None:
        sys.stderr.write(f"minishell: {name}: command not found\n")
        sys.stderr.flush()
        state.exit_status = 127
        return 1
    run_command(state, path, node.args, fd_in, fd_out)
    return 1


def find_executable(state: ShellState, name: str) -> Optional[str]:
    """Locate ``name``: taken as a path when it holds ``/``, else looked up on PATH."""
    if not name:
        return None
    if "/" in name:
        if os.path.isfile(name) and os.access(name, os.X_OK):
            return name
        return None
    path_var = state.env.find("PATH")
    if path_var is None or not path_var.value:
        return None
    return shutil.which(name, path=path_var.value)


def run_command(state: ShellState, path: str, args: Sequence[str], fd_in: int,
                fd_out: int) -> int:
    """Start the program at ``path`` and wait for it; returns its exit status."""
    environ = dict(entry.split("=", 1) for entry in state.env.to_envp())
    sys.stdout.flush()
    try:
        completed = subprocess.run(
            list(args),
            executable=path,
            stdin=None if fd_in == 0 else fd_in,
            stdout=None if fd_out == 1 else fd_out,
            env=environ,
            check=False,
        )
    except OSError:
        print("execve failed", flush=True)
        state.exit_status = 127
        return 127
    code = completed.returncode
    if code < 0:
        status = _SIGNAL_STATUS.get(-code, 128 - code)
    else:
        status = code
    state.exit_status = status
    return status