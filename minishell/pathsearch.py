"""Finding the program a command word refers to."""

from __future__ import annotations

import errno
import os
from collections.abc import Mapping

NON_COMMAND = 127
NO_PERMISSION = 126


class CommandNotFound(Exception):
    """Raised when a command cannot be run; *status* is the exit status."""

    def __init__(self, name: str, status: int, message: str) -> None:
        super().__init__(message)
        self.name = name
        self.status = status
        self.message = message


def access_level(path: str) -> int:
    """Return 2 if *path* is executable, 1 if it only exists, 0 otherwise."""
    if not os.access(path, os.F_OK):
        return 0
    return 2 if os.access(path, os.X_OK) else 1


def is_explicit_path(word: str | None) -> bool:
    """Return True if *word* names a file directly rather than via PATH."""
    return bool(word) and word[0] in "./"


def _permission_denied(name: str) -> CommandNotFound:
    return CommandNotFound(name, NO_PERMISSION, f"{name} Permission denied")


def find_in_path(name: str, path_env: str | None) -> str:
    """Search the directories of *path_env* for an executable *name*.

    The first directory holding an executable wins. A match that exists
    but cannot be executed stops the search with status 126; no match at
    all gives status 127.
    """
    directories = [part for part in (path_env or "").split(":") if part]
    for directory in directories:
        full_path = f"{directory}/{name}"
        level = access_level(full_path)
        if level == 2:
            return full_path
        if level == 1:
            raise _permission_denied(name)
    raise CommandNotFound(name, NON_COMMAND, f"{name} command not found")


def resolve_command(name: str, env: Mapping[str, str] | None = None) -> str:
    """Return the path to execute for the command word *name*.

    Words starting with '.' or '/' are used as they are; others are looked
    up in PATH from *env* (the process environment by default).
    """
    if env is None:
        env = os.environ
    if not is_explicit_path(name):
        return find_in_path(name, env.get("PATH"))
    level = access_level(name)
    if level == 2:
        return name
    if level == 1:
        raise _permission_denied(name)
    raise CommandNotFound(
        name, NON_COMMAND, f"{name}: {os.strerror(errno.ENOENT)}")