"""Quote bookkeeping: where quotes open and close, and what is rejected."""

from __future__ import annotations

from typing import Optional

from .environment import ShellError

_QUOTES = "\"'"


class UnclosedQuoteError(ShellError):
    """A command line leaves a quote open."""

    status = 255


def is_valid_env_char(char: str) -> bool:
    """True for characters allowed in a variable name: ASCII letters, digits, ``_``."""
    return len(char) == 1 and (char.isascii() and char.isalnum() or char == "_")


def in_quotes(text: str, pos: int) -> int:
    """Tell whether ``pos`` lies inside a quoted span of ``text``.

    Returns 1 inside single quotes, 2 inside double quotes and 0 outside.
    A quote that is never closed also yields 1.
    """
    i = 0
    while i < len(text):
        char = text[i]
        if char in _QUOTES:
            close = text.find(char, i + 1)
            if close == -1:
                return 1
            if i < pos < close:
                return 2 if char == '"' else 1
            i = close
        i += 1
    return 0


def check_unclosed_quotes(text: str) -> None:
    """Raise UnclosedQuoteError if a single or double quote is left open."""
    single = double = False
    for char in text:
        if char == "'" and not double:
            single = not single
        elif char == '"' and not single:
            double = not double
    if single or double:
        raise UnclosedQuoteError(
            "handling of unclosed quotes is not required by subject"
        )


def is_escaped(text: str, pos: int) -> bool:
    """True when an odd run of backslashes ends at ``pos``."""
    count = 0
    while pos >= 0 and text[pos] == "\\":
        count += 1
        pos -= 1
    return count % 2 == 1


def first_quote(text: str) -> Optional[str]:
    """The first quote character in ``text``, or None."""
    return next((char for char in text if char in _QUOTES), None)


def check_special_chars(text: str) -> None:
    """Raise ShellError for an unquoted backslash or semicolon."""
    for pos, char in enumerate(text):
        if char in "\\;" and not in_quotes(text, pos):
            raise ShellError(f"we should not handle `{char}'")


def has_quotes(text: str) -> bool:
    """True if ``text`` holds a single or double quote."""
    return any(char in _QUOTES for char in text)


def has_dollar(text: str) -> bool:
    """True if ``text`` holds a ``$``."""
    return "$" in text