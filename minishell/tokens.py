"""Splitting an input line into typed tokens."""

from __future__ import annotations

import enum
from dataclasses import dataclass

_BLANKS = frozenset(" \t\n")

_OPERATORS = {
    "|": "PIPE",
    "<": "REDIRECT_IN",
    ">": "REDIRECT_OUT",
    "<<": "HEREDOC",
    ">>": "REDIRECT_APPEND",
}


class TokenType(enum.Enum):
    """Kinds of token a command line is made of."""

    COMMAND = enum.auto()
    PIPE = enum.auto()
    REDIRECT_IN = enum.auto()
    REDIRECT_OUT = enum.auto()
    HEREDOC = enum.auto()
    REDIRECT_APPEND = enum.auto()
    DEFAULT = enum.auto()

    @property
    def is_redirect(self) -> bool:
        """True for the four redirection operators."""
        return self in (
            TokenType.REDIRECT_IN,
            TokenType.REDIRECT_OUT,
            TokenType.HEREDOC,
            TokenType.REDIRECT_APPEND,
        )


@dataclass(frozen=True)
class Token:
    """One word or operator of a command line."""

    content: str
    type: TokenType = TokenType.DEFAULT


def is_blank(char: str) -> bool:
    """Return True for the characters that separate words."""
    return char in _BLANKS and len(char) == 1


def delimiter_length(text: str) -> int:
    """Length of the operator that *text* starts with, or 0 if none."""
    if text.startswith((">>", "<<")):
        return 2
    if text[:1] in ("|", "<", ">") and text:
        return 1
    return 0


def token_length(text: str) -> int:
    """Length of the token at the start of *text*.

    Quotes keep blanks and operators inside the token.
    """
    operator = delimiter_length(text)
    if operator:
        return operator
    in_single = False
    in_double = False
    for index, char in enumerate(text):
        if char == "'":
            in_single = not in_single
        if char == '"':
            in_double = not in_double
        if not in_single and not in_double:
            if delimiter_length(text[index:]) or is_blank(char):
                return index
    return len(text)


def token_type(word: str) -> TokenType:
    """Classify a word as an operator or a plain command word."""
    name = _OPERATORS.get(word)
    return TokenType[name] if name else TokenType.COMMAND


def tokenize(text: str) -> list[Token]:
    """Split *text* into typed tokens."""
    tokens: list[Token] = []
    position = 0
    while position < len(text):
        while position < len(text) and is_blank(text[position]):
            position += 1
        if position >= len(text):
            break
        length = token_length(text[position:])
        word = text[position:position + length]
        tokens.append(Token(word, token_type(word)))
        position += length
    return tokens