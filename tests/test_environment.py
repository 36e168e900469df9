import pytest

from mshell.environment import (
    EnvVar,
    Environment,
    ShellError,
    ShellState,
    export_arguments,
)


@pytest.fixture
def env():
    return Environment({"HOME": "/home/user", "PATH": "/bin", "SHLVL": "1"})


def test_find(env):
    assert env.find("PATH").value == "/bin"
    assert env.find("PAT") is None
    assert len(env) == 3


def test_export_new_and_existing(env):
    env.export("FOO", "bar")
    assert env.find("FOO") == EnvVar("FOO", "bar", False)
    env.export("FOO", "baz")
    assert env.find("FOO").value == "baz"
    assert len(env) == 4


def test_export_without_value(env):
    env.export("NAKED", None)
    assert env.find("NAKED") == EnvVar("NAKED", "", True)
    env.export("NAKED", "x")
    assert env.find("NAKED") == EnvVar("NAKED", "x", False)


def test_export_without_value_clears_existing(env):
    env.export("PATH", None)
    assert env.find("PATH") == EnvVar("PATH", "", True)


def test_unset(env):
    env.unset("PATH")
    assert env.find("PATH") is None
    assert [v.name for v in env] == ["HOME", "SHLVL"]


@pytest.mark.parametrize("name", ["MISSING", "1PATH"])
def test_unset_errors(env, name):
    with pytest.raises(ShellError, match="not a valid identifier"):
        env.unset(name)
    assert len(env) == 3


def test_sorted_is_ordered_copy(env):
    env.export("ALPHA", "1")
    names = [v.name for v in env.sorted()]
    assert names == sorted(names)
    env.sorted()[0].value = "changed"
    assert env.find("ALPHA").value == "1"


def test_to_envp(env):
    assert env.to_envp() == ["HOME=/home/user", "PATH=/bin", "SHLVL=1"]


@pytest.mark.parametrize(
    "start, expected", [("1", "2"), ("998", "999"), ("999", ""), ("1500", "1"), ("abc", "1")]
)
def test_increment_shell_level(start, expected):
    env = Environment({"SHLVL": start})
    env.increment_shell_level()
    assert env.find("SHLVL").value == expected


def test_increment_shell_level_without_variable():
    env = Environment({"A": "b"})
    env.increment_shell_level()
    assert env.find("SHLVL") is None


def test_shell_state_defaults():
    state = ShellState()
    assert state.exit_status == 0
    assert len(state.env) == 0
    assert state.heredoc_files == []


def test_export_arguments_sets_values(env):
    export_arguments(env, ["A=1", 'B="two words"', "C", "D="])
    assert env.find("A").value == "1"
    assert env.find("B").value == "two words"
    assert env.find("C").visible is True
    assert env.find("D") == EnvVar("D", "", False)


def test_export_arguments_ignores_multiple_equals(env):
    export_arguments(env, ["X=a=b"])
    assert env.find("X") is None


@pytest.mark.parametrize("arg", ["1X", "A*", "9=v", "B*=v"])
def test_export_arguments_invalid(env, arg):
    with pytest.raises(ShellError, match="not a valid identifier"):
        export_arguments(env, [arg])


def test_export_arguments_stops_at_first_error(env):
    with pytest.raises(ShellError):
        export_arguments(env, ["OK=1", "2BAD", "LATER=3"])
    assert env.find("OK").value == "1"
    assert env.find("LATER") is None