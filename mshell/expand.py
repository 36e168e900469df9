"""Word expansion: variables, quote removal and ``*`` patterns."""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from functools import lru_cache

from .environment import ShellState
from .quotes import has_dollar, has_quotes, is_valid_env_char
from .tree import is_only_asterisks


def expand_dollar(state: ShellState, text: str, pos: int) -> tuple[str, int]:
    """Expand the ``$`` at ``text[pos]``.

    Returns the replacement and the index of the last character consumed.
    A ``$`` at the end or before ``"`` stays literal; ``$?`` gives the last
    exit status; an unknown name gives the empty string.
    """
    following = text[pos + 1] if pos + 1 < len(text) else ""
    if following in ("", '"'):
        return "$", pos
    if following == "?":
        return str(state.exit_status), pos + 1
    end = pos + 1
    while end < len(text) and is_valid_env_char(text[end]):
        end += 1
    name = text[pos + 1:end]
    var = state.env.find(name) if name else None
    return (var.value if var is not None else ""), end - 1


def expand_word(state: ShellState, text: str) -> str:
    """Expand variables and remove quotes from one word."""
    parts: list[str] = []
    i = 0
    length = len(text)
    while i < length:
        char = text[i]
        if char in "\"'":
            if i + 1 < length and text[i + 1] == char:
                # An empty quoted pair restarts the word from nothing.
                parts = [""]
                i += 2
                continue
            i += 1
            while i < length and text[i] != char:
                if char == '"' and text[i] == "$":
                    value, i = expand_dollar(state, text, i)
                    parts.append(value)
                else:
                    parts.append(text[i])
                i += 1
        elif char == "$":
            value, i = expand_dollar(state, text, i)
            parts.append(value)
        else:
            parts.append(char)
        i += 1
    return "".join(parts)


def expand_words(state: ShellState, words: Iterable[str]) -> list[str]:
    """Expand every word that holds a quote or a ``$``; others pass unchanged."""
    return [
        expand_word(state, word) if has_quotes(word) or has_dollar(word) else word
        for word in words
    ]


def has_asterisk(text: str) -> bool:
    """True if ``text`` holds a ``*``."""
    return "*" in text


def match_pattern(pattern: str, string: str) -> bool:
    """Match ``string`` against ``pattern``, where ``*`` stands for any run."""

    @lru_cache(maxsize=None)
    def match(p: int, s: int) -> bool:
        p_char = pattern[p] if p < len(pattern) else ""
        s_char = string[s] if s < len(string) else ""
        if not p_char and not s_char:
            return True
        if p_char == "*" and p + 1 < len(pattern) and not s_char:
            return False
        if p_char == s_char:
            return match(p + 1, s + 1)
        if p_char == "*":
            return match(p + 1, s) or (bool(s_char) and match(p, s + 1))
        return False

    return match(0, 0)


def list_directory(path: str | os.PathLike[str] = ".") -> list[str]:
    """Sorted names in ``path`` that do not start with a dot.

    An unreadable directory gives an empty list.
    """
    try:
        names = os.listdir(path)
    except OSError:
        return []
    return sorted(name for name in names if not name.startswith("."))


def expand_asterisk(word: str, entries: Sequence[str]) -> str:
    """Replace a ``*`` pattern with the matching entries.

    A word made only of asterisks becomes every entry, each followed by a
    space. Other patterns become the matches joined by spaces; without a
    match the word is kept as it is.
    """
    if is_only_asterisks(word):
        return "".join(f"{entry} " for entry in entries)
    if has_asterisk(word):
        matches = [entry for entry in entries if match_pattern(word, entry)]
        if matches:
            return " ".join(matches)
    return word