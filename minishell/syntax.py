"""Syntax checks run on raw input and on token lists."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from minishell.tokens import Token, TokenType

_UNEXPECTED = ("||", "<<<", ">>>")

_TRAILING_ERRORS = frozenset({
    TokenType.PIPE,
    TokenType.REDIRECT_IN,
    TokenType.REDIRECT_OUT,
    TokenType.REDIRECT_APPEND,
})

_FILE_REDIRECTS = frozenset({
    TokenType.REDIRECT_IN,
    TokenType.REDIRECT_OUT,
    TokenType.REDIRECT_APPEND,
})


class ParseError(ValueError):
    """Raised when a command line is not valid syntax."""

    def __init__(self, message: str = "syntax error") -> None:
        super().__init__(message)


def _unquoted_positions(text: str) -> Iterable[int]:
    """Yield indices reached while outside any quotes, plus a final state."""
    in_single = False
    in_double = False
    for index, char in enumerate(text):
        if in_double and char == '"':
            in_double = False
        elif in_single and char == "'":
            in_single = False
        elif not in_double and not in_single:
            if char == '"':
                in_double = True
            elif char == "'":
                in_single = True
            yield index
    if in_single or in_double:
        yield -1


def has_unclosed_quote(text: str) -> bool:
    """Return True if a quote in *text* is never closed."""
    return any(index == -1 for index in _unquoted_positions(text))


def has_unexpected_operator(text: str) -> bool:
    """Return True if ``||``, ``<<<`` or ``>>>`` appears outside quotes."""
    return any(
        index >= 0 and text.startswith(_UNEXPECTED, index)
        for index in _unquoted_positions(text)
    )


def ends_with_operator(tokens: Sequence[Token]) -> bool:
    """Return True if the last token is a pipe or a file redirection."""
    return bool(tokens) and tokens[-1].type in _TRAILING_ERRORS


def _has_consecutive(tokens: Iterable[Token], kinds: frozenset) -> bool:
    previous = False
    for token in tokens:
        current = token.type in kinds
        if current and previous:
            return True
        previous = current
    return False


def has_consecutive_redirects(tokens: Iterable[Token]) -> bool:
    """Return True if two file redirections follow each other."""
    return _has_consecutive(tokens, _FILE_REDIRECTS)


def has_consecutive_pipes(tokens: Iterable[Token]) -> bool:
    """Return True if two pipes follow each other."""
    return _has_consecutive(tokens, frozenset({TokenType.PIPE}))