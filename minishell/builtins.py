"""Commands the shell runs itself instead of starting a program."""

from __future__ import annotations

import os
import re
import string
import sys
from collections.abc import MutableMapping, Sequence
from typing import TextIO

_BUILTINS = frozenset({"cd", "exit", "echo", "pwd", "env", "export"})
_IDENTIFIER_START = frozenset(string.ascii_letters + "_")
_IDENTIFIER_REST = frozenset(string.ascii_letters + string.digits + "_")
_NUMBER = re.compile(r"[ \t\n\v\f\r]*[+-]?[0-9]+")
_LONG_MIN = -(2 ** 63)
_LONG_MAX = 2 ** 63 - 1


class ShellExit(Exception):
    """Raised by ``exit`` to end the shell with *status*."""

    def __init__(self, status: int) -> None:
        super().__init__(status)
        self.status = status


def _err(message: str) -> None:
    print(message, file=sys.stderr)


def is_builtin(name: str) -> bool:
    """Return True if *name* is handled by the shell itself.

    Any name starting with ``unset`` counts.
    """
    return name in _BUILTINS or name.startswith("unset")


def is_valid_identifier(arg: str) -> bool:
    """Return True if the part of *arg* before ``=`` is a variable name."""
    name = arg.split("=", 1)[0]
    if not arg or arg[0] not in _IDENTIFIER_START:
        return False
    return all(char in _IDENTIFIER_REST for char in name[1:])


def change_directory(argv: Sequence[str],
                     env: MutableMapping[str, str]) -> int:
    """``cd [path]``; no path or ``~`` means HOME."""
    if len(argv) > 2:
        _err("cd: too many arguments")
        return 1
    path = argv[1] if len(argv) > 1 else None
    if not path or path == "~":
        path = env.get("HOME")
        if not path:
            _err("cd failed: HOME not set")
            return 1
    if path == "$PWD":
        path = env.get("PWD", "")
    try:
        os.chdir(path)
    except OSError as error:
        _err(f"cd failed: {error.strerror}")
        return 1
    return 0


def exit_shell(argv: Sequence[str]) -> None:
    """``exit [n]``: always raises ShellExit."""
    if len(argv) > 2:
        _err("exit: too many arguments")
        raise ShellExit(1)
    if len(argv) < 2:
        raise ShellExit(0)
    arg = argv[1]
    if not arg:
        raise ShellExit(0)
    if not _NUMBER.fullmatch(arg):
        _err("exit: numeric argument required")
        raise ShellExit(255)
    code = max(_LONG_MIN, min(_LONG_MAX, int(arg)))
    raise ShellExit(code & 0xFF)


def echo(argv: Sequence[str], stdout: TextIO | None = None) -> int:
    """``echo [-n ...] words``: print the words separated by spaces."""
    out = stdout if stdout is not None else sys.stdout
    if not argv:
        return 0
    words = list(argv[1:])
    newline = True
    while words and words[0] == "-n":
        newline = False
        words.pop(0)
    out.write(" ".join(words))
    if newline:
        out.write("\n")
    return 0


def print_working_directory(stdout: TextIO | None = None) -> int:
    """``pwd``: print the current directory."""
    out = stdout if stdout is not None else sys.stdout
    try:
        cwd = os.getcwd()
    except OSError as error:
        _err(f"pwd failed: {error.strerror}")
        return 1
    out.write(f"{cwd}\n")
    return 0


def print_environment(env: MutableMapping[str, str],
                      stdout: TextIO | None = None) -> None:
    """``env``: print every variable as NAME=value."""
    out = stdout if stdout is not None else sys.stdout
    for name, value in env.items():
        out.write(f"{name}={value}\n")


def export_variable(env: MutableMapping[str, str], arg: str | None,
                    stdout: TextIO | None = None) -> int:
    """``export [NAME=value]``; with no argument, list the variables."""
    out = stdout if stdout is not None else sys.stdout
    if arg is None:
        for name, value in env.items():
            out.write(f"declare -x {name}={value}\n")
        return 0
    if not is_valid_identifier(arg):
        _err(f"export: `{arg}': not a valid identifier")
        return 1
    if "=" not in arg:
        return 0
    name, value = arg.split("=", 1)
    env[name] = value
    return 0


def unset_variable(env: MutableMapping[str, str], arg: str | None) -> int:
    """``unset NAME``: remove every entry NAME=... from *env*."""
    if arg is None:
        return 0
    prefix = arg + "="
    for name in [n for n, v in env.items() if f"{n}={v}".startswith(prefix)]:
        del env[name]
    return 0


def run_builtin(argv: Sequence[str], env: MutableMapping[str, str],
                stdout: TextIO | None = None) -> int:
    """Run the builtin named by ``argv[0]`` and return its status.

    ``env`` reports status 1, and ``export``/``unset`` use only the first
    argument. ShellExit propagates from ``exit``.
    """
    command = argv[0]
    first = argv[1] if len(argv) > 1 else None
    if command == "cd":
        return change_directory(argv, env)
    if command == "exit":
        exit_shell(argv)
        return 1
    if command == "echo":
        return echo(argv, stdout)
    if command == "pwd":
        return print_working_directory(stdout)
    if command == "env":
        print_environment(env, stdout)
        return 1
    if command == "export":
        return export_variable(env, first, stdout)
    if command == "unset":
        return unset_variable(env, first)
    return 0