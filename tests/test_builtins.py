import io
from pathlib import Path

import pytest

from minishell.builtins import (
    ShellExit,
    change_directory,
    echo,
    exit_shell,
    export_variable,
    is_builtin,
    is_valid_identifier,
    print_environment,
    print_working_directory,
    run_builtin,
    unset_variable,
)


@pytest.mark.parametrize("name", ["cd", "exit", "echo", "pwd", "env",
                                  "export", "unset", "unsetx"])
def test_is_builtin_true(name):
    assert is_builtin(name) is True


@pytest.mark.parametrize("name", ["ls", "exportx", "ech", ""])
def test_is_builtin_false(name):
    assert is_builtin(name) is False


@pytest.mark.parametrize("arg, expected", [
    ("_A1=x", True),
    ("NAME", True),
    ("A=b-c", True),
    ("1A", False),
    ("A-B=c", False),
    ("=x", False),
    ("", False),
])
def test_is_valid_identifier(arg, expected):
    assert is_valid_identifier(arg) is expected


def test_echo_joins_words():
    out = io.StringIO()
    assert echo(["echo", "a", "b"], out) == 0
    assert out.getvalue() == "a b\n"


def test_echo_repeated_n_flags():
    out = io.StringIO()
    echo(["echo", "-n", "-n", "x", "y"], out)
    assert out.getvalue() == "x y"


def test_echo_other_flags_are_words():
    out = io.StringIO()
    echo(["echo", "-nn", "x"], out)
    assert out.getvalue() == "-nn x\n"


def test_echo_empty_argv_prints_nothing():
    out = io.StringIO()
    assert echo([], out) == 0
    assert out.getvalue() == ""


@pytest.mark.parametrize("argv, status", [
    (["exit"], 0),
    (["exit", "42"], 42),
    (["exit", "  7"], 7),
    (["exit", "abc"], 255),
    (["exit", "-1"], 255),
    (["exit", "1", "2"], 1),
])
def test_exit_status(argv, status):
    with pytest.raises(ShellExit) as info:
        exit_shell(argv)
    assert info.value.status == status


def test_exit_non_numeric_message(capsys):
    with pytest.raises(ShellExit):
        exit_shell(["exit", "12x"])
    assert "numeric argument required" in capsys.readouterr().err


def test_export_adds_and_replaces():
    env = {"A": "old", "B": "b"}
    assert export_variable(env, "A=new") == 0
    assert export_variable(env, "C=x=y") == 0
    assert env == {"A": "new", "B": "b", "C": "x=y"}
    assert list(env) == ["A", "B", "C"]


def test_export_without_equals_does_nothing():
    env = {"A": "1"}
    assert export_variable(env, "B") == 0
    assert env == {"A": "1"}


def test_export_invalid_identifier(capsys):
    env = {}
    assert export_variable(env, "1A=x") == 1
    assert env == {}
    assert "`1A=x': not a valid identifier" in capsys.readouterr().err


def test_export_lists_variables():
    out = io.StringIO()
    assert export_variable({"A": "1", "B": "2"}, None, out) == 0
    assert out.getvalue() == "declare -x A=1\ndeclare -x B=2\n"


def test_unset_removes_variable():
    env = {"A": "1", "AB": "2"}
    assert unset_variable(env, "A") == 0
    assert env == {"AB": "2"}
    assert unset_variable(env, None) == 0
    assert env == {"AB": "2"}


def test_print_environment():
    out = io.StringIO()
    print_environment({"X": "1", "Y": ""}, out)
    assert out.getvalue() == "X=1\nY=\n"


def test_run_builtin_env_reports_one():
    out = io.StringIO()
    assert run_builtin(["env"], {"X": "1"}, out) == 1
    assert out.getvalue() == "X=1\n"


def test_run_builtin_export_uses_first_argument():
    env = {}
    assert run_builtin(["export", "A=1", "B=2"], env) == 0
    assert env == {"A": "1"}


def test_run_builtin_exit_raises():
    with pytest.raises(ShellExit) as info:
        run_builtin(["exit", "3"], {})
    assert info.value.status == 3


def test_cd_to_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = tmp_path / "sub"
    target.mkdir()
    assert change_directory(["cd", str(target)], {}) == 0
    assert Path.cwd() == target.resolve()


def test_cd_home(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    home = tmp_path / "home"
    home.mkdir()
    assert change_directory(["cd"], {"HOME": str(home)}) == 0
    assert Path.cwd() == home.resolve()
    monkeypatch.chdir(tmp_path)
    assert change_directory(["cd", "~"], {"HOME": str(home)}) == 0
    assert Path.cwd() == home.resolve()


def test_cd_without_home(capsys, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert change_directory(["cd"], {}) == 1
    assert "HOME not set" in capsys.readouterr().err


def test_cd_too_many_arguments(capsys):
    assert change_directory(["cd", "a", "b"], {}) == 1
    assert "cd: too many arguments" in capsys.readouterr().err


def test_cd_missing_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert change_directory(["cd", str(tmp_path / "absent")], {}) == 1
    assert Path.cwd() == tmp_path.resolve()


def test_pwd_prints_current_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out = io.StringIO()
    assert print_working_directory(out) == 0
    assert Path(out.getvalue().rstrip("\n")).resolve() == tmp_path.resolve()
    assert out.getvalue().endswith("\n")