"""Opening the files named by a command's redirections."""

from __future__ import annotations

import os

from .environment import ShellError
from .tree import NodeType, TreeNode

_INPUT_TYPES = (NodeType.RED_INP, NodeType.DELIM)
_OUTPUT_FLAGS = {
    NodeType.RED_OUT: os.O_WRONLY | os.O_CREAT | os.O_TRUNC,
    NodeType.APPEND: os.O_WRONLY | os.O_CREAT | os.O_APPEND,
}


class RedirectError(ShellError):
    """An input redirection names a file that cannot be opened."""


def open_input(node: TreeNode) -> int:
    """Open the input redirections of a command; the last one wins.

    Returns the descriptor to read from, 0 when there is none.
    """
    fd = 0
    current = node.left
    while current is not None:
        if current.type in _INPUT_TYPES:
            try:
                new_fd = os.open(current.value or "", os.O_RDONLY)
            except OSError:
                if fd != 0:
                    os.close(fd)
                raise RedirectError(
                    f"{current.value}: No such file or directory"
                ) from None
            if fd != 0:
                os.close(fd)
            fd = new_fd
        current = current.right
    return fd


def open_output(node: TreeNode) -> int:
    """Create or open the output redirections of a command; the last one wins.

    Every file is created, truncated or appended as asked. A file that cannot
    be opened is passed over. Returns the descriptor to write to, 1 when
    there is none.
    """
    fd = 1
    current = node.right
    while current is not None and current.type is not NodeType.NEWLINE:
        flags = _OUTPUT_FLAGS.get(current.type)
        if flags is not None:
            try:
                new_fd = os.open(current.value or "", flags, 0o644)
            except OSError:
                new_fd = None
            if new_fd is not None:
                if fd != 1:
                    os.close(fd)
                fd = new_fd
        current = current.right
    return fd