"""Here-documents: reading lines up to a limiter into a temporary file."""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import Optional, TextIO

from .environment import ShellError, ShellState

ReadLine = Callable[[str], Optional[str]]

HEREDOC_PROMPT = "> "


def _read_stdin(prompt: str) -> Optional[str]:
    try:
        return input(prompt)
    except EOFError:
        return None


def heredoc_filename(limiter: str, count: int) -> str:
    """Name of the file holding the ``count``-th here-document of a line."""
    return f"{limiter}{count}"


def write_heredoc(
    limiter: str, stream: TextIO, read_line: Optional[ReadLine] = None
) -> int:
    """Copy lines from ``read_line`` into ``stream`` until the limiter.

    End of input also ends the document. Returns the number of lines written.
    """
    reader = read_line or _read_stdin
    written = 0
    while True:
        try:
            line = reader(HEREDOC_PROMPT)
        except EOFError:
            line = None
        if line is None or line == limiter:
            return written
        stream.write(f"{line}\n")
        written += 1


def create_heredoc(
    state: ShellState,
    limiter: str,
    count: int,
    read_line: Optional[ReadLine] = None,
) -> str:
    """Fill a new here-document file and return its name.

    The file is recorded in ``state.heredoc_files`` so it can be removed later.
    """
    filename = heredoc_filename(limiter, count)
    try:
        fd = os.open(filename, os.O_CREAT | os.O_WRONLY | os.O_TRUNC, 0o644)
    except OSError as exc:
        raise ShellError(exc.strerror or str(exc)) from None
    state.heredoc_files.insert(0, filename)
    with os.fdopen(fd, "w") as stream:
        write_heredoc(limiter, stream, read_line)
    return filename