"""Small string helpers: lenient integer parsing and word splitting."""

from __future__ import annotations

_SPACES = " \t\n\v\f\r"
_DIGITS = "0123456789"


def atoi(text: str) -> int:
    """Parse a leading integer the lenient way: skip blanks, one sign, digits.

    Parsing stops at the first non-digit; no digits at all gives 0.
    """
    rest = text.lstrip(_SPACES)
    sign = 1
    if rest[:1] in ("-", "+") and rest:
        if rest[0] == "-":
            sign = -1
        rest = rest[1:]
    value = 0
    for char in rest:
        if char not in _DIGITS:
            break
        value = value * 10 + (ord(char) - ord("0"))
    return sign * value


def itoa(number: int) -> str:
    """Render an integer in decimal."""
    return str(int(number))


def split(text: str, sep: str) -> list[str]:
    """Split ``text`` on ``sep``, dropping the empty pieces."""
    return [piece for piece in text.split(sep) if piece]


def split_unquote(text: str, sep: str) -> list[str]:
    """Split like :func:`split`, then strip the enclosing characters of
    every piece that starts with a quote."""
    pieces = split(text, sep)
    return [piece[1:-1] if piece[0] in "\"'" else piece for piece in pieces]