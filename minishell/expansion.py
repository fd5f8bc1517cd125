"""Variable expansion and quote removal for words."""

from __future__ import annotations

import enum
import os
import string
from collections.abc import Mapping

from minishell.tokens import is_blank

_NAME_CHARACTERS = frozenset(string.ascii_letters + string.digits + "_")


class _Quote(enum.Enum):
    NONE = enum.auto()
    SINGLE = enum.auto()
    DOUBLE = enum.auto()


def is_name_character(char: str) -> bool:
    """Return True for characters allowed in a variable name."""
    return len(char) == 1 and char in _NAME_CHARACTERS


def _variable_name(word: str, start: int) -> str | None:
    """Name following a '$' at ``start - 1``, or None if nothing expands."""
    if start < len(word) and word[start] == "?":
        return "?"
    if start >= len(word) or is_blank(word[start]):
        return None
    end = start
    while end < len(word) and is_name_character(word[end]):
        end += 1
    return word[start:end]


def _value(name: str, last_status: int, env: Mapping[str, str]) -> str:
    if name == "?":
        return str(last_status)
    return env.get(name) or ""


def expand(word: str, last_status: int = 0,
           env: Mapping[str, str] | None = None) -> str:
    """Replace ``$NAME`` and ``$?`` outside single quotes.

    Each expansion replaces every occurrence of that reference in the word
    and scanning then starts again from the beginning. Without *env* the
    process environment is used.
    """
    if env is None:
        env = os.environ
    state = _Quote.NONE
    index = 0
    while index < len(word):
        char = word[index]
        if state is _Quote.NONE and char == "'":
            state = _Quote.SINGLE
        elif state is _Quote.NONE and char == '"':
            state = _Quote.DOUBLE
        elif state is _Quote.SINGLE and char == "'":
            state = _Quote.NONE
        elif state is _Quote.DOUBLE and char == '"':
            state = _Quote.NONE
        elif state is not _Quote.SINGLE and char == "$":
            name = _variable_name(word, index + 1)
            if name is not None:
                word = word.replace("$" + name,
                                    _value(name, last_status, env))
                index = 0
                continue
        index += 1
    return word


def remove_quotes(word: str) -> str:
    """Drop the quote characters that open and close quoted sections."""
    kept: list[str] = []
    state = _Quote.NONE
    for char in word:
        if state is _Quote.NONE:
            if char == "'":
                state = _Quote.SINGLE
            elif char == '"':
                state = _Quote.DOUBLE
            else:
                kept.append(char)
        elif (state is _Quote.SINGLE and char == "'") or (
                state is _Quote.DOUBLE and char == '"'):
            state = _Quote.NONE
        else:
            kept.append(char)
    return "".join(kept)