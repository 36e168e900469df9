import pytest

from mshell.environment import ShellError
from mshell.quotes import (
    UnclosedQuoteError,
    check_special_chars,
    check_unclosed_quotes,
    first_quote,
    has_dollar,
    has_quotes,
    in_quotes,
    is_escaped,
    is_valid_env_char,
)


@pytest.mark.parametrize("char", ["a", "Z", "5", "_"])
def test_valid_env_chars(char):
    assert is_valid_env_char(char) is True


@pytest.mark.parametrize("char", ["-", " ", "$", "é", ""])
def test_invalid_env_chars(char):
    assert is_valid_env_char(char) is False


def test_in_single_quotes():
    assert in_quotes("x'abc'y", 3) == 1


def test_in_double_quotes():
    assert in_quotes('x"abc"y', 3) == 2


def test_outside_quotes():
    text = "a 'b' c"
    assert in_quotes(text, text.index("c")) == 0
    assert in_quotes(text, 0) == 0


def test_quote_character_itself_is_outside():
    text = "'ab'"
    assert in_quotes(text, 0) == 0
    assert in_quotes(text, 3) == 0


def test_unclosed_quote_counts_as_quoted():
    assert in_quotes('"abc', 10) == 1


@pytest.mark.parametrize("text", ["'abc", '"abc', "'a\"b'\"", "a'b\"c\"d"])
def test_unclosed_quotes_raise(text):
    with pytest.raises(UnclosedQuoteError) as info:
        check_unclosed_quotes(text)
    assert "unclosed quotes" in str(info.value)
    assert info.value.status == 255
    assert isinstance(info.value, ShellError)


def test_is_escaped_counts_backslashes():
    assert is_escaped("ab\\", 2) is True
    assert is_escaped("a\\\\", 2) is False
    assert is_escaped("abc", 1) is False


def test_first_quote():
    assert first_quote("ab'c\"d") == "'"
    assert first_quote('x"y\'') == '"'
    assert first_quote("plain") is None


def test_special_chars_rejected():
    with pytest.raises(ShellError, match="`;'"):
        check_special_chars("echo a;b")
    with pytest.raises(ShellError, match=r"`\\'"):
        check_special_chars("echo a\\b")


def test_special_chars_inside_quotes_then_outside():
    with pytest.raises(ShellError, match="`;'"):
        check_special_chars("echo 'a;b' c;d")


def test_has_quotes_and_dollar():
    assert has_quotes("a'b") is True
    assert has_quotes('a"b') is True
    assert has_quotes("ab") is False
    assert has_dollar("$X") is True
    assert has_dollar("X") is False