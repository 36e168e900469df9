import pytest

from mshell.environment import Environment, ShellState
from mshell.expand import (
    expand_asterisk,
    expand_dollar,
    expand_word,
    expand_words,
    has_asterisk,
    list_directory,
    match_pattern,
)

HOME = "/home/user"
USER = "alice"


@pytest.fixture
def state():
    return ShellState(env=Environment({"HOME": HOME, "USER": USER}), exit_status=42)


def test_dollar_variable(state):
    value, last = expand_dollar(state, "$USER!", 0)
    assert value == USER
    assert last == len("$USER") - 1


def test_dollar_status(state):
    value, last = expand_dollar(state, "$?", 0)
    assert value == str(state.exit_status)
    assert last == 1


def test_dollar_alone(state):
    assert expand_dollar(state, "$", 0) == ("$", 0)


def test_dollar_unknown(state):
    value, _ = expand_dollar(state, "$MISSING", 0)
    assert value == ""


def test_expand_word_variable(state):
    assert expand_word(state, "$HOME") == HOME


def test_expand_word_status(state):
    assert expand_word(state, "$?") == "42"


def test_single_quotes_keep_dollar(state):
    assert expand_word(state, "'$HOME'") == "$HOME"


def test_double_quotes_expand(state):
    assert expand_word(state, '"$HOME/x"') == HOME + "/x"


def test_dollar_before_closing_quote_stays(state):
    assert expand_word(state, '"a$"') == "a$"


def test_unknown_variable_vanishes(state):
    assert expand_word(state, "a$NOPE") == "a"


def test_quotes_are_removed(state):
    assert expand_word(state, "'ab'\"cd\"ef") == "abcdef"


def test_expand_words_only_touches_special_words(state):
    words = ["echo", "$USER", "'x y'", "plain"]
    result = expand_words(state, words)
    assert result == ["echo", USER, "x y", "plain"]
    assert len(result) == len(words)


def test_has_asterisk():
    assert has_asterisk("a*b") is True
    assert has_asterisk("ab") is False


@pytest.mark.parametrize(
    "pattern, name",
    [("*.c", "main.c"), ("a*b", "axxb"), ("*", ""), ("*", "anything"), ("m*n*", "main.c")],
)
def test_match_pattern_matches(pattern, name):
    assert match_pattern(pattern, name) is True


@pytest.mark.parametrize(
    "pattern, name",
    [("*.c", "main.h"), ("*x", ""), ("abc", "ab"), ("a*", "ba")],
)
def test_match_pattern_rejects(pattern, name):
    assert match_pattern(pattern, name) is False


def test_match_without_asterisk_is_equality():
    assert match_pattern("same", "same") is True
    assert match_pattern("same", "samE") is False


def test_only_asterisks_lists_everything():
    entries = ["a", "b"]
    assert expand_asterisk("*", entries) == "a b "
    assert expand_asterisk("**", entries).split() == entries


def test_pattern_joins_matches():
    entries = ["a.c", "b.h", "c.c"]
    assert expand_asterisk("*.c", entries).split(" ") == ["a.c", "c.c"]


def test_pattern_without_match_keeps_word():
    assert expand_asterisk("*.py", ["a.c"]) == "*.py"


def test_plain_word_unchanged():
    assert expand_asterisk("main.c", ["main.c"]) == "main.c"


def test_list_directory_sorted_without_hidden(tmp_path):
    for name in ["b", "a", ".hidden", "C"]:
        (tmp_path / name).write_text("")
    result = list_directory(tmp_path)
    assert result == sorted(["b", "a", "C"])
    assert ".hidden" not in result


def test_list_directory_missing(tmp_path):
    assert list_directory(tmp_path / "missing") == []